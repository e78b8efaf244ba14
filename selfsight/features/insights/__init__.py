"""Insights feature module: trends and frequency views over analyzed entries."""

from selfsight.features.insights.aggregator import (
    get_emotion_ratio,
    get_emotion_trends,
    get_top_strengths,
    get_top_weaknesses,
    summarize,
)

__all__ = [
    "get_emotion_ratio",
    "get_emotion_trends",
    "get_top_strengths",
    "get_top_weaknesses",
    "summarize",
]
