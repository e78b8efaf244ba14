import logging

from fastapi import APIRouter, Depends

from selfsight.api.dependencies import get_current_user, get_entry_store, get_recommendation_service
from selfsight.api.models import VoteRequest
from selfsight.features.entries.store import EntryStore
from selfsight.features.profiles.models import User
from selfsight.features.recommendations.service import RecommendationBatch, RecommendationService

router = APIRouter(tags=["Recommendations"])
logger = logging.getLogger("SelfSight.API.Recommendations")


@router.get("/recommendations")
async def list_recommendations(
    user: User = Depends(get_current_user),
    service: RecommendationService = Depends(get_recommendation_service),
):
    return {"status": "success", "recommendations": service.list(user.id)}


@router.post("/recommendations", response_model=RecommendationBatch)
async def generate_recommendations(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationBatch:
    """Generate a new batch and append it to the user's list."""
    entries = store.list(user.id).entries
    return await service.generate(user.id, entries)


@router.post("/recommendations/{recommendation_id}/vote")
async def vote_recommendation(
    recommendation_id: str,
    request: VoteRequest,
    user: User = Depends(get_current_user),
    service: RecommendationService = Depends(get_recommendation_service),
):
    recommendation = service.mark(user.id, recommendation_id, request.helpful)
    if request.helpful is None:
        notice = "Vote cleared"
    else:
        notice = "Marked as helpful!" if request.helpful else "Marked as not helpful"
    return {"status": "success", "recommendation": recommendation, "notice": notice}
