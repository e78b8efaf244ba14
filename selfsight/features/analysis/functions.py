"""
Hosted server functions: ``analyze-journal`` and ``generate-recommendations``.

These run behind ``POST /functions/v1/{name}`` and wrap the LLM provider.
``analyze-journal`` always answers with an analysis object, substituting a
canned one tagged ``_fallback`` (and ``_quotaExceeded`` on rate limits) when
the provider fails. ``generate-recommendations`` raises so the caller can
use its own static list.
"""

import logging
import time
import uuid
from typing import Any, Dict, List

import anthropic

from selfsight.features.analysis.models import AnalysisResult
from selfsight.services.llm import ClaudeJournalAnalyzer
from selfsight.shared.errors import FunctionInvocationError, ValidationError
from selfsight.shared.logging_utils import sanitize_for_logging

logger = logging.getLogger("SelfSight.Functions")

ANALYZE_JOURNAL = "analyze-journal"
GENERATE_RECOMMENDATIONS = "generate-recommendations"

SUMMARY_CONTENT_CHARS = 100

CANNED_ANALYSIS = {
    "mood": "contemplative",
    "emotions": ["thoughtful", "reflective", "curious"],
    "strength": "self-awareness",
    "weakness": "uncertainty",
    "insight": "Taking time to reflect shows a commitment to personal growth.",
}


def _is_rate_limited(exc: Exception) -> bool:
    if isinstance(exc, anthropic.RateLimitError):
        return True
    return getattr(exc, "status_code", None) == 429


def canned_analysis(quota_exceeded: bool = False) -> AnalysisResult:
    return AnalysisResult(**CANNED_ANALYSIS, fallback=True, quota_exceeded=quota_exceeded)


def normalize_analysis(raw: Dict[str, Any]) -> AnalysisResult:
    """Fill missing keys with defaults and attach the patterns block."""
    emotions = raw.get("emotions")
    if not isinstance(emotions, list) or not emotions:
        emotions = ["neutral"]
    weakness = raw.get("weakness") or "unclear"

    return AnalysisResult(
        mood=str(raw.get("mood") or "neutral"),
        emotions=[str(emotion) for emotion in emotions],
        strength=str(raw.get("strength") or "reflection"),
        weakness=str(weakness),
        insight=str(raw.get("insight") or "Continue journaling to develop more insights."),
        patterns={
            "positive": ["journaling"],
            "areas_for_growth": [str(raw.get("weakness") or "self-awareness")],
        },
    )


def analyze_journal(title: str, content: str, analyzer: ClaudeJournalAnalyzer) -> AnalysisResult:
    """Run the ``analyze-journal`` function for one entry."""
    if not title or not content:
        raise ValidationError("Missing required parameters: title and content")

    logger.info("Analyzing journal entry", extra={"title": sanitize_for_logging(title, 40)})

    try:
        raw = analyzer.analyze_entry(title, content)
    except Exception as exc:  # pylint: disable=broad-except
        if _is_rate_limited(exc):
            logger.warning("LLM quota exceeded, returning canned analysis")
            return canned_analysis(quota_exceeded=True)
        logger.error("LLM analysis failed, returning canned analysis: %s", exc)
        return canned_analysis()

    return normalize_analysis(raw)


def new_recommendation_id() -> str:
    return f"rec-{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"


def summarize_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    content = entry.get("content") or ""
    if len(content) > SUMMARY_CONTENT_CHARS:
        content = content[:SUMMARY_CONTENT_CHARS] + "..."
    return {
        "title": entry.get("title"),
        "content": content,
        "mood": entry.get("mood"),
        "emotions": entry.get("emotions"),
        "strength": entry.get("strength"),
        "weakness": entry.get("weakness"),
    }


def generate_recommendations(
    entries: List[Dict[str, Any]],
    analyzer: ClaudeJournalAnalyzer,
) -> List[Dict[str, Any]]:
    """Run the ``generate-recommendations`` function over entry summaries."""
    if not entries or not isinstance(entries, list):
        raise ValidationError("Missing or invalid entries parameter")

    logger.info("Generating recommendations based on %s journal entries", len(entries))

    try:
        recommendations = analyzer.suggest_recommendations([summarize_entry(entry) for entry in entries])
    except Exception as exc:  # pylint: disable=broad-except
        quota = _is_rate_limited(exc)
        logger.error("LLM recommendations failed (quota_exceeded=%s): %s", quota, exc)
        raise FunctionInvocationError(
            "Failed to generate recommendations",
            function_name=GENERATE_RECOMMENDATIONS,
            status_code=429 if quota else None,
            quota_exceeded=quota,
        ) from exc

    return [
        {**rec, "id": rec.get("id") or new_recommendation_id()}
        for rec in recommendations
        if isinstance(rec, dict)
    ]
