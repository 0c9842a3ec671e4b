from __future__ import annotations

# Literal substrings, matched against the lower-cased message. Chinese terms are
# unaffected by lower-casing. No word boundaries on purpose: a false positive
# only costs a crisis-resources reply.
RISK_KEYWORDS: tuple[str, ...] = (
    # Traditional / Simplified Chinese
    "想死",
    "不想活",
    "活不下去",
    "撐不下去",
    "撑不下去",
    "自殺",
    "自杀",
    "自殘",
    "自残",
    "輕生",
    "轻生",
    "結束生命",
    "结束生命",
    # English
    "kill myself",
    "suicide",
    "self harm",
    "self-harm",
    "end my life",
    "want to die",
)


def find_risk_keywords(text: str) -> list[str]:
    """Return every risk keyword contained in `text` (case-insensitive)."""

    if not isinstance(text, str) or not text:
        return []
    lowered = text.lower()
    return [keyword for keyword in RISK_KEYWORDS if keyword in lowered]


def is_high_risk(text: str) -> bool:
    return bool(find_risk_keywords(text))
