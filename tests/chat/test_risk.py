from __future__ import annotations

import pytest

from mood_backend.chat.risk import RISK_KEYWORDS, find_risk_keywords, is_high_risk


@pytest.mark.parametrize(
    "text",
    [
        "我真的好想死",
        "有時候會想到自殺",
        "我又自殘了",
        "覺得自己撐不下去了",
        "I want to KILL MYSELF",
        "thinking about Suicide again",
        "self harm helps me cope",
        "Self-Harm",
    ],
)
def test_flags_risk_language_in_either_language(text: str) -> None:
    assert is_high_risk(text) is True


@pytest.mark.parametrize(
    "text",
    ["今天考試考得不好，有點難過", "I'm so tired of work", "", "   "],
)
def test_ordinary_text_is_not_flagged(text: str) -> None:
    assert is_high_risk(text) is False


def test_substring_match_has_no_word_boundaries() -> None:
    # Partial-word overlaps are flagged too.
    assert is_high_risk("antisuicidemeasures") is True


def test_every_keyword_is_lowercase() -> None:
    assert all(keyword == keyword.lower() for keyword in RISK_KEYWORDS)


def test_find_risk_keywords_lists_all_matches() -> None:
    assert find_risk_keywords("suicide... I want to kill myself") == ["kill myself", "suicide"]
