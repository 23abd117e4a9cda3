import re

_CYRILLIC = re.compile(r"[\u0400-\u04FF]")


def is_russian(text: str) -> bool:
    return bool(_CYRILLIC.search(text or ""))


def detect_language(text: str) -> str:
    if is_russian(text):
        return "ru"
    return "en"
