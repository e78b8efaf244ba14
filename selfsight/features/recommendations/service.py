"""Per-user recommendation list kept in the local cache."""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from selfsight.features.entries.models import DiaryEntry
from selfsight.features.recommendations.generator import RecommendationGenerator
from selfsight.features.recommendations.models import Recommendation
from selfsight.services.local_cache import LocalCache, recommendations_key
from selfsight.shared.errors import AuthenticationError, NotFoundError

logger = logging.getLogger("SelfSight.Recommendations.Service")

FALLBACK_NOTICE = "Personalized recommendations are unavailable right now. Showing our favourites instead."


class RecommendationBatch(BaseModel):
    generated: List[Recommendation] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    degraded: bool = False
    notice: Optional[str] = None


class RecommendationService:
    """Batches append to the stored list; only the helpfulness vote mutates an item."""

    def __init__(self, cache: LocalCache, generator: Optional[RecommendationGenerator] = None):
        self.cache = cache
        self.generator = generator or RecommendationGenerator()

    def list(self, user_id: str) -> List[Recommendation]:
        if not user_id:
            raise AuthenticationError("User must be logged in")
        return [Recommendation.model_validate(item) for item in self.cache.get(recommendations_key(user_id), [])]

    def _save(self, user_id: str, recommendations: List[Recommendation]) -> None:
        self.cache.set(recommendations_key(user_id), [rec.model_dump(mode="json") for rec in recommendations])

    async def generate(self, user_id: str, entries: List[DiaryEntry]) -> RecommendationBatch:
        existing = self.list(user_id)
        generated, used_fallback = await self.generator.generate(entries)

        combined = existing + generated
        self._save(user_id, combined)
        logger.info("Added %s recommendations (fallback=%s)", len(generated), used_fallback)

        return RecommendationBatch(
            generated=generated,
            recommendations=combined,
            degraded=used_fallback,
            notice=FALLBACK_NOTICE if used_fallback else None,
        )

    def mark(self, user_id: str, recommendation_id: str, helpful: Optional[bool]) -> Recommendation:
        """Record a vote; ``None`` clears it."""
        recommendations = self.list(user_id)

        for index, rec in enumerate(recommendations):
            if rec.id == recommendation_id:
                recommendations[index] = rec.model_copy(update={"is_helpful": helpful})
                self._save(user_id, recommendations)
                return recommendations[index]

        raise NotFoundError("Recommendation not found", resource_type="recommendation", resource_id=recommendation_id)
