"""Resource recommendations feature module."""

from selfsight.features.recommendations.generator import RecommendationGenerator, fallback_recommendations
from selfsight.features.recommendations.models import Recommendation, RecommendationType
from selfsight.features.recommendations.service import RecommendationBatch, RecommendationService

__all__ = [
    "Recommendation",
    "RecommendationBatch",
    "RecommendationGenerator",
    "RecommendationService",
    "RecommendationType",
    "fallback_recommendations",
]
