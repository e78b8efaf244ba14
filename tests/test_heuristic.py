import pytest

from selfsight.features.analysis.heuristic import (
    DEFAULT_EMOTIONS,
    DEFAULT_INSIGHT,
    LONG_ENTRY_INSIGHT,
    MOOD_INSIGHTS,
    analyze_heuristically,
    count_mood_keywords,
    detect_mood,
)


def test_happy_keywords_pick_happy_mood():
    result = analyze_heuristically("Great Day", "It was a great day and I smiled a lot with friends.")

    assert result.mood == "happy"
    assert result.emotions == ["joyful", "optimistic", "grateful"]
    assert result.insight == MOOD_INSIGHTS["happy"]
    assert result.fallback is False


def test_no_keywords_is_contemplative():
    result = analyze_heuristically("Errands", "I went to the store")

    assert result.mood == "contemplative"
    assert result.emotions == DEFAULT_EMOTIONS
    assert result.insight == DEFAULT_INSIGHT


def test_four_question_marks_make_entry_curious():
    assert detect_mood("Questions", "Why? What? How? Really?") == "curious"


def test_three_question_marks_are_not_enough():
    assert detect_mood("Questions", "Why? What? How?") == "contemplative"


def test_question_marks_override_keywords():
    assert detect_mood("Happy", "Am I happy? Glad? Pleased? Joyful?") == "curious"


@pytest.mark.parametrize(
    "content,expected",
    [
        ("Wow! Yes! Great! Amazing!", "excited"),
        ("Stop! Now! Move! Go!", "intense"),
    ],
)
def test_exclamations(content, expected):
    assert detect_mood("Today", content) == expected


def test_ties_go_to_earlier_mood():
    assert detect_mood("", "happy sad") == "happy"


def test_title_words_count():
    assert detect_mood("Feeling anxious", "the meeting is tomorrow") == "anxious"


def test_keyword_match_is_substring_per_token():
    counts = count_mood_keywords(["smiles", "laughter", "worried"])

    assert counts["happy"] == 2
    assert counts["anxious"] == 1


def test_short_entry_strength_and_weakness():
    result = analyze_heuristically("Note", "Short note.")

    assert result.strength == "conciseness"
    assert result.weakness == "detail"


def test_long_entry_strength_and_insight():
    result = analyze_heuristically("Long", "words " * 120)

    assert result.strength == "expressiveness"
    assert result.weakness == "clarity"
    assert result.insight == LONG_ENTRY_INSIGHT


def test_reflective_and_uncertain_words():
    result = analyze_heuristically("Thoughts", "I think maybe tomorrow will be different")

    assert result.strength == "self-reflection"
    assert result.weakness == "certainty"


def test_anxious_insight():
    result = analyze_heuristically("Work", "I am so worried and nervous about the deadline")

    assert result.mood == "anxious"
    assert result.insight == MOOD_INSIGHTS["anxious"]


def test_empty_input_never_raises():
    result = analyze_heuristically("", "")

    assert result.mood == "contemplative"
    assert result.strength == "conciseness"
