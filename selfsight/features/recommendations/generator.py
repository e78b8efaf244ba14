"""
Recommendation Generator.

Asks the hosted ``generate-recommendations`` function once for four
resources; when that fails for any reason it returns the static list of four
(one per resource type).
"""

import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from selfsight.features.analysis.functions import GENERATE_RECOMMENDATIONS, new_recommendation_id
from selfsight.features.entries.models import DiaryEntry
from selfsight.features.recommendations.models import Recommendation, RecommendationType
from selfsight.services.functions_client import FunctionsClient
from selfsight.shared.errors import FunctionInvocationError

logger = logging.getLogger("SelfSight.Recommendations")


def fallback_recommendations() -> List[Recommendation]:
    """The canned set, one per type, with fresh ids."""
    return [
        Recommendation(
            id=new_recommendation_id(),
            type=RecommendationType.YOUTUBE,
            title="The Power of Vulnerability | Brené Brown",
            description="Brené Brown studies human connection -- our ability to empathize, belong, love.",
            url="https://www.youtube.com/watch?v=iCvmsMzlF7o",
        ),
        Recommendation(
            id=new_recommendation_id(),
            type=RecommendationType.BOOK,
            title="Atomic Habits",
            author="James Clear",
            description="Tiny changes, remarkable results: an easy & proven way to build good habits & break bad ones.",
        ),
        Recommendation(
            id=new_recommendation_id(),
            type=RecommendationType.ARTICLE,
            title="The Science of Journaling: Why It Makes You Happier",
            description="Research-backed evidence on how journaling improves mental wellbeing.",
            url="https://example.com/journaling-science",
        ),
        Recommendation(
            id=new_recommendation_id(),
            type=RecommendationType.PODCAST,
            title="The Daily Stoic",
            author="Ryan Holiday",
            description="Practical wisdom for everyday life based on Stoic philosophy.",
            url="https://dailystoic.com/podcast/",
        ),
    ]


def entry_summary(entry: DiaryEntry) -> dict:
    return {
        "title": entry.title,
        "content": entry.content,
        "mood": entry.mood,
        "emotions": entry.emotions,
        "strength": entry.strength,
        "weakness": entry.weakness,
    }


class RecommendationGenerator:
    def __init__(self, functions: Optional[FunctionsClient] = None):
        self.functions = functions or FunctionsClient()

    async def generate(self, entries: List[DiaryEntry]) -> tuple[List[Recommendation], bool]:
        """Return (recommendations, used_fallback)."""
        analyzed = [entry for entry in entries if entry.is_analyzed]
        if not analyzed:
            logger.info("No analyzed entries, using static recommendations")
            return fallback_recommendations(), True

        try:
            reply = await self.functions.invoke(
                GENERATE_RECOMMENDATIONS,
                {"entries": [entry_summary(entry) for entry in analyzed]},
            )
        except FunctionInvocationError as exc:
            logger.warning("Recommendation function failed, using static list: %s", exc.message)
            return fallback_recommendations(), True

        recommendations = self._parse(reply)
        if not recommendations:
            logger.warning("Recommendation function returned nothing usable, using static list")
            return fallback_recommendations(), True
        return recommendations, False

    @staticmethod
    def _parse(reply) -> List[Recommendation]:
        if not isinstance(reply, list):
            return []

        parsed = []
        for item in reply:
            if not isinstance(item, dict):
                continue
            try:
                parsed.append(Recommendation.model_validate(
                    {**item, "id": item.get("id") or new_recommendation_id(), "is_helpful": None}
                ))
            except PydanticValidationError:
                logger.info("Skipping malformed recommendation: %s", item.get("title"))
        return parsed
