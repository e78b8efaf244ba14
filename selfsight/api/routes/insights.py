from typing import List

from fastapi import APIRouter, Depends

from selfsight.api.dependencies import get_current_user, get_entry_store
from selfsight.features.entries.store import EntryStore
from selfsight.features.insights.aggregator import (
    InsightSummary,
    StrengthCount,
    TrendPoint,
    WeaknessCount,
    get_emotion_trends,
    get_top_strengths,
    get_top_weaknesses,
    summarize,
)
from selfsight.features.profiles.models import User

router = APIRouter(tags=["Insights"])


@router.get("/insights", response_model=InsightSummary)
async def get_insights(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> InsightSummary:
    """Dashboard summary recomputed from the user's entries."""
    return summarize(store.list(user.id).entries)


@router.get("/insights/trends", response_model=List[TrendPoint])
async def get_trends(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> List[TrendPoint]:
    return get_emotion_trends(store.list(user.id).entries)


@router.get("/insights/strengths", response_model=List[StrengthCount])
async def get_strengths(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> List[StrengthCount]:
    return get_top_strengths(store.list(user.id).entries)


@router.get("/insights/weaknesses", response_model=List[WeaknessCount])
async def get_weaknesses(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> List[WeaknessCount]:
    return get_top_weaknesses(store.list(user.id).entries)
