"""
Entry analysis feature module.

- heuristic: offline keyword analysis
- functions: the hosted ``analyze-journal`` / ``generate-recommendations`` functions
- remote: client that calls ``analyze-journal`` and falls back to the heuristic
"""

from selfsight.features.analysis.heuristic import analyze_heuristically
from selfsight.features.analysis.models import AnalysisResult

__all__ = [
    "AnalysisResult",
    "analyze_heuristically",
]
