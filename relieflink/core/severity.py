"""
ReliefLink urgency scoring: categorical level from extraction + keyword signals from the raw message → 0–100.
"""
from typing import Iterable

BASE_SCORES = {
    "high": 70,
    "medium": 40,
}
DEFAULT_BASE_SCORE = 20  # low, and anything unrecognized

INJURY_KEYWORDS = ["injury", "blood", "broken", "pain", "unconscious", "breathing"]
VULNERABLE_KEYWORDS = ["child", "baby", "kid", "elderly", "senior", "old", "boy", "girl"]

KEYWORD_BONUS = 10
MAX_SCORE = 100


def _mentions_any(text: str, keywords: Iterable[str]) -> bool:
    return any(kw in text for kw in keywords)


def score_urgency(level: str, raw_text: str) -> int:
    """
    Base score by level (high=70, medium=40, else 20), +10 for any injury keyword,
    +10 for any vulnerable-person keyword. Each bonus applies at most once. Capped at 100.
    """
    score = BASE_SCORES.get(level, DEFAULT_BASE_SCORE)

    msg = (raw_text or "").lower()
    if _mentions_any(msg, INJURY_KEYWORDS):
        score += KEYWORD_BONUS
    if _mentions_any(msg, VULNERABLE_KEYWORDS):
        score += KEYWORD_BONUS

    return max(0, min(score, MAX_SCORE))
