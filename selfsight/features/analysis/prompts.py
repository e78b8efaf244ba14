"""
LLM prompts for journal analysis and resource recommendations.
Centralized prompt templates for consistent AI behavior.
"""

import json
from typing import Any, Dict, List


def build_entry_analysis_prompt(title: str, content: str) -> str:
    """Prompt asking for the five-key analysis object of one entry."""
    return f"""Analyze the following journal entry.
Title: "{title}"
Content: "{content}"

Provide a detailed analysis with the following components:
1. The overall mood of the writer (single word or short phrase)
2. Three key emotions expressed (as a list of single words)
3. One notable strength demonstrated in the entry (single word or short phrase)
4. One area for growth or weakness (single word or short phrase)
5. A brief insight or pattern (1-2 sentences)

Format the response as a JSON object with this structure:
{{
  "mood": "string",
  "emotions": ["string", "string", "string"],
  "strength": "string",
  "weakness": "string",
  "insight": "string"
}}

Only respond with the JSON object and nothing else."""


def build_recommendations_prompt(entry_summaries: List[Dict[str, Any]]) -> str:
    """Prompt asking for four resources across the four resource types."""
    summaries = json.dumps(entry_summaries, indent=2)

    return f"""Based on these journal entry summaries:
{summaries}

Generate 4 personalized recommendations for resources that would be helpful for the journal writer.
Include a mix of different resource types (youtube videos, books, articles, podcasts).

Format the response as a JSON array with this structure:
[
  {{
    "id": "unique-string",
    "type": "youtube|podcast|article|book",
    "title": "string",
    "description": "string",
    "url": "string (for online resources)",
    "author": "string (if applicable)"
  }}
]

Make sure each recommendation is specific, relevant to the journal content themes, and helpful for personal growth.
Only respond with the JSON array and nothing else."""
