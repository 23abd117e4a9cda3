import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.prompts.lang import detect_language, is_russian  # noqa: E402
from app.prompts.templates import get_system_prompts  # noqa: E402


def test_cyrillic_only_is_russian() -> None:
    assert detect_language("Расскажите о вашем опыте") == "ru"


def test_latin_only_is_english() -> None:
    assert detect_language("Tell me about your experience") == "en"


def test_single_cyrillic_character_selects_russian() -> None:
    assert is_russian("What about SharePoint? Да")
    assert detect_language("Mostly English text with one letter ж") == "ru"


def test_empty_text_is_english() -> None:
    assert detect_language("") == "en"


def test_prompts_embed_context_and_names() -> None:
    prompts = get_system_prompts("RESUME CONTEXT BLOCK", False, "Jordan Avery")

    assert "Jordan Avery's professional experience" in prompts.general
    assert "Answer questions about Jordan's experience" in prompts.general
    assert "RESUME CONTEXT BLOCK" in prompts.general
    assert "You MUST respond in English." in prompts.general

    assert "match a given job description" in prompts.job_assessment
    assert "from Jordan's resume" in prompts.job_assessment
    assert "RESUME CONTEXT BLOCK" in prompts.job_assessment
    assert '"8/10" or "80%"' in prompts.job_assessment


def test_russian_prompts_require_russian_reply() -> None:
    prompts = get_system_prompts("ctx", True, "Jordan Avery")

    assert "You MUST respond in Russian (Cyrillic script)." in prompts.general
    assert "You MUST respond in Russian (Cyrillic script)." in prompts.job_assessment
    assert "You MUST respond in English." not in prompts.general
