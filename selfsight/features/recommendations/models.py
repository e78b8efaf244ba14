"""Recommendation models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RecommendationType(str, Enum):
    """Kinds of resources the generator suggests."""
    YOUTUBE = "youtube"
    PODCAST = "podcast"
    ARTICLE = "article"
    BOOK = "book"


class Recommendation(BaseModel):
    id: str
    type: RecommendationType
    title: str
    description: str
    url: Optional[str] = None
    author: Optional[str] = None
    # None until the user votes
    is_helpful: Optional[bool] = None
