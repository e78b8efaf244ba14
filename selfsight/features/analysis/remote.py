"""
Remote Analyzer Client.

Calls the hosted ``analyze-journal`` function once and, if anything goes
wrong, answers with the keyword heuristic instead. The result is always a
populated AnalysisResult; degraded ones carry ``_fallback`` and, when the
cause was a rate limit, ``_quotaExceeded``.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from selfsight.features.analysis.functions import ANALYZE_JOURNAL
from selfsight.features.analysis.heuristic import analyze_heuristically
from selfsight.features.analysis.models import AnalysisResult
from selfsight.services.functions_client import FunctionsClient
from selfsight.shared.errors import FunctionInvocationError

logger = logging.getLogger("SelfSight.Analysis.Remote")


class RemoteAnalyzerClient:
    """Stateless; safe to call concurrently for different entries."""

    def __init__(self, functions: Optional[FunctionsClient] = None):
        self.functions = functions or FunctionsClient()

    async def analyze(self, title: str, content: str) -> AnalysisResult:
        try:
            reply = await self.functions.invoke(ANALYZE_JOURNAL, {"title": title, "content": content})
        except FunctionInvocationError as exc:
            logger.warning("Analysis function failed, using heuristic analysis: %s", exc.message)
            return self._fallback(title, content, quota_exceeded=exc.quota_exceeded)

        if not isinstance(reply, dict):
            logger.warning("Analysis function returned %s instead of an object", type(reply).__name__)
            return self._fallback(title, content)

        if reply.get("error"):
            logger.warning("Analysis function reported an error: %s", reply.get("error"))
            return self._fallback(title, content)

        # The function substitutes a canned answer when its provider fails;
        # the heuristic reads the actual entry, so prefer it.
        if reply.get("_fallback") or reply.get("_quotaExceeded"):
            logger.info("Analysis function answered in degraded mode, using heuristic analysis")
            return self._fallback(title, content, quota_exceeded=bool(reply.get("_quotaExceeded")))

        try:
            return AnalysisResult.model_validate(reply)
        except PydanticValidationError as exc:
            logger.warning("Analysis reply did not match the expected shape: %s", exc.error_count())
            return self._fallback(title, content)

    @staticmethod
    def _fallback(title: str, content: str, quota_exceeded: bool = False) -> AnalysisResult:
        result = analyze_heuristically(title, content)
        result.fallback = True
        result.quota_exceeded = quota_exceeded
        return result


def describe_degradation(result: AnalysisResult) -> Optional[str]:
    """User-facing notice for degraded analyses, None for a full one."""
    if result.quota_exceeded:
        return "AI analysis quota exceeded. Showing an offline analysis instead."
    if result.fallback:
        return "AI analysis is unavailable right now. Showing an offline analysis instead."
    return None


def merge_payload(result: AnalysisResult) -> dict[str, Any]:
    """Columns written onto a journal entry when an analysis is saved."""
    return {
        "mood": result.mood,
        "emotions": result.emotions,
        "strength": result.strength,
        "weakness": result.weakness,
        "insight": result.insight,
        "analysis": result.to_payload(),
    }
