"""Best-effort extraction of a 0-10 fit score from free-form assessment text."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Pattern

MIN_SCORE = 0
MAX_SCORE = 10

ScoreNormalizer = Callable[[int], int]


def _clamp(value: int) -> int:
    return min(max(value, MIN_SCORE), MAX_SCORE)


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _from_tenths(value: int) -> int:
    return _clamp(value)


def _from_percent(value: int) -> int:
    return _clamp(_round_half_up(Decimal(value) / 10))


def _from_labelled(value: int) -> int:
    # "Score: 9" is already on the 10-point scale, "Score: 85" is a percentage.
    if value <= MAX_SCORE:
        return _clamp(value)
    return _from_percent(value)


# Ordered by priority: the first matcher that finds a number wins.
SCORE_MATCHERS: list[tuple[Pattern[str], ScoreNormalizer]] = [
    (re.compile(r"(\d+)\s*(?:/|out of)\s*10\b", re.IGNORECASE), _from_tenths),
    (re.compile(r"(\d+)\s*(?:%|percent\b)", re.IGNORECASE), _from_percent),
    (re.compile(r"(?:score|rating):\s*(\d+)", re.IGNORECASE), _from_labelled),
]


def match_score(pattern: Pattern[str], normalizer: ScoreNormalizer, text: str) -> Optional[int]:
    match = pattern.search(text)
    if not match:
        return None
    return normalizer(int(match.group(1)))


def extract_fit_score(text: str) -> Optional[int]:
    if not text:
        return None
    for pattern, normalizer in SCORE_MATCHERS:
        score = match_score(pattern, normalizer, text)
        if score is not None:
            return score
    return None
