"""Analysis result model shared by the heuristic, the server function and the client."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    """
    Mood/emotions/strength/weakness/insight tuple attached to an entry.

    The degradation markers keep their wire names (``_fallback`` and
    ``_quotaExceeded``) so stored payloads stay readable by older clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    mood: str
    emotions: List[str] = Field(min_length=1)
    strength: str
    weakness: str
    insight: str
    patterns: Optional[Dict[str, List[str]]] = None
    fallback: bool = Field(default=False, alias="_fallback")
    quota_exceeded: bool = Field(default=False, alias="_quotaExceeded")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire names, leaving out unset optional blocks."""
        payload = self.model_dump(by_alias=True, exclude_none=True)
        if not self.fallback:
            payload.pop("_fallback", None)
        if not self.quota_exceeded:
            payload.pop("_quotaExceeded", None)
        return payload
