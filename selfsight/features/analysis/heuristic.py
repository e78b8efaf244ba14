"""
Offline keyword heuristic for journal entries.

Used whenever the hosted analysis function cannot answer. It depends only on
the entry text and never raises.
"""

from typing import Dict, List

from selfsight.features.analysis.models import AnalysisResult

DEFAULT_MOOD = "contemplative"

# Order matters: on equal counts the earlier mood wins.
MOOD_KEYWORDS: Dict[str, List[str]] = {
    "happy": ["happy", "joy", "excited", "glad", "wonderful", "great", "fantastic", "pleased", "smile", "laugh"],
    "sad": ["sad", "unhappy", "depressed", "down", "upset", "disappointing", "somber", "gloomy", "cry", "hurt"],
    "angry": ["angry", "frustrated", "annoyed", "mad", "irritated", "furious", "rage", "upset", "hostile"],
    "anxious": ["anxious", "worried", "nervous", "stressed", "overwhelmed", "concerned", "tense", "fear", "panic"],
    "calm": ["calm", "peaceful", "relaxed", "tranquil", "serene", "content", "balanced", "quiet", "still"],
}

MOOD_EMOTIONS: Dict[str, List[str]] = {
    "happy": ["joyful", "optimistic", "grateful"],
    "sad": ["melancholy", "reflective", "sensitive"],
    "angry": ["frustrated", "irritated", "passionate"],
    "anxious": ["worried", "cautious", "alert"],
    "calm": ["peaceful", "mindful", "balanced"],
    "curious": ["inquisitive", "thoughtful", "interested"],
    "excited": ["enthusiastic", "eager", "animated"],
    "intense": ["focused", "determined", "serious"],
}
DEFAULT_EMOTIONS = ["thoughtful", "contemplative", "reflective"]

REFLECTIVE_WORDS = {"think", "feel", "realize", "understand", "learn", "reflect", "consider"}
UNCERTAINTY_WORDS = {"maybe", "perhaps", "might", "could", "possibly", "unsure", "wonder"}

PUNCTUATION_THRESHOLD = 3
LONG_ENTRY_CHARS = 500
SHORT_ENTRY_CHARS = 100

DEFAULT_INSIGHT = "Taking time to write down your thoughts shows a commitment to self-reflection."
MOOD_INSIGHTS = {
    "anxious": "Your writing reveals concerns that might benefit from being addressed directly.",
    "happy": "Your positive outlook can be channeled into productive pursuits and shared with others.",
    "sad": "Processing these feelings through writing is a healthy step toward understanding them better.",
}
LONG_ENTRY_INSIGHT = "Your detailed expression suggests deep engagement with your thoughts and experiences."
QUESTION_INSIGHT = "Your questioning nature shows a desire to understand things more deeply."


def count_mood_keywords(tokens: List[str]) -> Dict[str, int]:
    """Count, per mood, the tokens containing at least one of its keywords."""
    counts = {mood: 0 for mood in MOOD_KEYWORDS}
    for token in tokens:
        for mood, keywords in MOOD_KEYWORDS.items():
            if any(keyword in token for keyword in keywords):
                counts[mood] += 1
    return counts


def detect_mood(title: str, content: str) -> str:
    tokens = content.lower().split() + title.lower().split()
    counts = count_mood_keywords(tokens)

    mood = DEFAULT_MOOD
    highest = 0
    for candidate, count in counts.items():
        if count > highest:
            highest = count
            mood = candidate

    if content.count("?") > PUNCTUATION_THRESHOLD:
        mood = "curious"
    elif content.count("!") > PUNCTUATION_THRESHOLD:
        mood = "excited" if counts["happy"] > 0 else "intense"

    return mood


def _strength_and_weakness(content: str, words: List[str]) -> tuple[str, str]:
    strength = "self-awareness"
    weakness = "clarity"

    if len(content) > LONG_ENTRY_CHARS:
        strength = "expressiveness"
    elif len(content) < SHORT_ENTRY_CHARS:
        strength = "conciseness"
        weakness = "detail"

    if REFLECTIVE_WORDS.intersection(words):
        strength = "self-reflection"
    if UNCERTAINTY_WORDS.intersection(words):
        weakness = "certainty"

    return strength, weakness


def _insight(mood: str, content: str) -> str:
    if mood in MOOD_INSIGHTS:
        return MOOD_INSIGHTS[mood]
    if len(content) > LONG_ENTRY_CHARS:
        return LONG_ENTRY_INSIGHT
    if "?" in content:
        return QUESTION_INSIGHT
    return DEFAULT_INSIGHT


def analyze_heuristically(title: str, content: str) -> AnalysisResult:
    """Build a full analysis from keyword counts, punctuation and length."""
    title = title or ""
    content = content or ""

    mood = detect_mood(title, content)
    strength, weakness = _strength_and_weakness(content, content.lower().split())

    return AnalysisResult(
        mood=mood,
        emotions=list(MOOD_EMOTIONS.get(mood, DEFAULT_EMOTIONS)),
        strength=strength,
        weakness=weakness,
        insight=_insight(mood, content),
    )
