"""
Insight Aggregator - views derived from the entry collection.

Pure functions; nothing is stored and every call recomputes from the
entries it is given.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from selfsight.features.entries.dates import format_date
from selfsight.features.entries.models import DiaryEntry

TOP_N = 3
NEUTRAL_VALUE = 5

MOOD_VALENCE: Dict[str, int] = {
    "happy": 8, "excited": 8, "hopeful": 8,
    "calm": 6, "content": 6, "relaxed": 6,
    "anxious": 3, "stressed": 3,
    "sad": 2, "depressed": 2,
    "contemplative": 5, "reflective": 5,
}

POSITIVE_MOODS = {"happy", "excited", "content", "grateful", "hopeful", "inspired"}
NEGATIVE_MOODS = {"sad", "anxious", "angry", "frustrated", "stressed", "overwhelmed"}


class TrendPoint(BaseModel):
    date: str
    value: int
    emotion: str


class StrengthCount(BaseModel):
    strength: str
    count: int


class WeaknessCount(BaseModel):
    weakness: str
    count: int


class EmotionRatio(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    positive_pct: int = 0
    negative_pct: int = 0
    neutral_pct: int = 0


class InsightSummary(BaseModel):
    total_entries: int
    analyzed_entries: int
    latest_entry: Optional[DiaryEntry] = None
    emotion_ratio: EmotionRatio
    top_strengths: List[StrengthCount]
    top_weaknesses: List[WeaknessCount]


def mood_value(mood: str) -> int:
    return MOOD_VALENCE.get(mood, NEUTRAL_VALUE)


def get_emotion_trends(entries: Iterable[DiaryEntry]) -> List[TrendPoint]:
    """One point per analyzed entry, in the order the entries were given."""
    return [
        TrendPoint(date=format_date(entry.created_at), value=mood_value(entry.mood), emotion=entry.mood)
        for entry in entries
        if entry.mood
    ]


def _top(values: Iterable[str]) -> List[tuple[str, int]]:
    # Counter keeps insertion order and sorted() is stable, so ties stay in
    # first-seen order.
    counts = Counter(value for value in values if value)
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:TOP_N]


def get_top_strengths(entries: Iterable[DiaryEntry]) -> List[StrengthCount]:
    return [StrengthCount(strength=name, count=count) for name, count in _top(e.strength for e in entries)]


def get_top_weaknesses(entries: Iterable[DiaryEntry]) -> List[WeaknessCount]:
    return [WeaknessCount(weakness=name, count=count) for name, count in _top(e.weakness for e in entries)]


def _percent(count: int, total: int) -> int:
    # Halves round up (12.5 -> 13), not to even.
    return (count * 200 + total) // (2 * total)


def get_emotion_ratio(entries: Iterable[DiaryEntry]) -> EmotionRatio:
    ratio = EmotionRatio()
    for entry in entries:
        if not entry.mood:
            continue
        mood = entry.mood.lower()
        if mood in POSITIVE_MOODS:
            ratio.positive += 1
        elif mood in NEGATIVE_MOODS:
            ratio.negative += 1
        else:
            ratio.neutral += 1

    total = ratio.positive + ratio.negative + ratio.neutral
    if total:
        ratio.positive_pct = _percent(ratio.positive, total)
        ratio.negative_pct = _percent(ratio.negative, total)
        ratio.neutral_pct = _percent(ratio.neutral, total)
    return ratio


def summarize(entries: List[DiaryEntry]) -> InsightSummary:
    """Dashboard view over all of a user's entries."""
    latest = max(entries, key=lambda entry: entry.created_at) if entries else None
    return InsightSummary(
        total_entries=len(entries),
        analyzed_entries=sum(1 for entry in entries if entry.is_analyzed),
        latest_entry=latest,
        emotion_ratio=get_emotion_ratio(entries),
        top_strengths=get_top_strengths(entries),
        top_weaknesses=get_top_weaknesses(entries),
    )
