"""Claude-backed text generation for the hosted analysis functions."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from anthropic import Anthropic

from selfsight.core.config import settings
from selfsight.features.analysis.prompts import (
    build_entry_analysis_prompt,
    build_recommendations_prompt,
)

logger = logging.getLogger("SelfSight.LLM")

_FENCE_RE = re.compile(r"```(?:json)?")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model sometimes wraps JSON in."""
    return _FENCE_RE.sub("", text).strip()


class ClaudeJournalAnalyzer:
    """
    One-shot Claude calls for entry analysis and recommendations.

    Every method makes exactly one request and raises on failure; the
    fallback policy lives with the callers.
    """

    ANALYSIS_TEMPERATURE = 0.4
    RECOMMENDATION_TEMPERATURE = 0.7
    MAX_TOKENS = 1024

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Anthropic] = None,
    ) -> None:
        self.client = client or Anthropic(api_key=api_key or settings.ANTHROPIC_API_KEY)
        self.model = model or settings.CLAUDE_MODEL

        logger.info("Claude journal analyzer initialized with model: %s", self.model)

    def analyze_entry(self, title: str, content: str) -> Dict[str, Any]:
        """Return the parsed analysis object for one entry."""
        prompt = build_entry_analysis_prompt(title, content)
        result_text = self._invoke_model(prompt, temperature=self.ANALYSIS_TEMPERATURE)

        try:
            analysis = json.loads(result_text)
        except json.JSONDecodeError:
            logger.error("Model %s returned unparsable JSON | snippet=%s", self.model, result_text[:200])
            raise

        if not isinstance(analysis, dict):
            raise ValueError("Expected a JSON object from the analysis prompt")
        return analysis

    def suggest_recommendations(self, entry_summaries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Return the parsed list of recommended resources."""
        prompt = build_recommendations_prompt(entry_summaries)
        result_text = self._invoke_model(prompt, temperature=self.RECOMMENDATION_TEMPERATURE)

        try:
            recommendations = json.loads(result_text)
        except json.JSONDecodeError:
            logger.error("Model %s returned unparsable JSON | snippet=%s", self.model, result_text[:200])
            raise

        if not isinstance(recommendations, list):
            raise ValueError("Expected a JSON array from the recommendations prompt")
        return recommendations

    def _invoke_model(self, prompt: str, temperature: float) -> str:
        """Send the prompt to Claude and return raw text output."""
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.MAX_TOKENS,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )

        if not response.content:
            raise ValueError(f"Model {self.model} returned empty content")

        block = response.content[0]
        result_text = block.text if hasattr(block, "text") else str(block)
        return strip_code_fences(result_text)
