"""
Hosted server function routes.

Mounted under ``/functions/v1`` so the service can stand in for the
Supabase edge functions of the same names. The handlers are sync and run in
the threadpool because the Claude client blocks.
"""

import logging

from fastapi import APIRouter, Depends

from selfsight.api.dependencies import get_llm_analyzer
from selfsight.api.models import AnalyzeJournalRequest, GenerateRecommendationsRequest
from selfsight.features.analysis import functions
from selfsight.services.llm import ClaudeJournalAnalyzer

router = APIRouter(tags=["Functions"])
logger = logging.getLogger("SelfSight.API.Functions")


@router.post(f"/{functions.ANALYZE_JOURNAL}")
def analyze_journal(
    request: AnalyzeJournalRequest,
    analyzer: ClaudeJournalAnalyzer = Depends(get_llm_analyzer),
):
    result = functions.analyze_journal(request.title, request.content, analyzer)
    return result.to_payload()


@router.post(f"/{functions.GENERATE_RECOMMENDATIONS}")
def generate_recommendations(
    request: GenerateRecommendationsRequest,
    analyzer: ClaudeJournalAnalyzer = Depends(get_llm_analyzer),
):
    return functions.generate_recommendations(request.entries, analyzer)
