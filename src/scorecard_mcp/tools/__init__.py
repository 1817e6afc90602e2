"""Company analysis tools."""

from scorecard_mcp.tools.analyze import analyze_company
from scorecard_mcp.tools.session import AnalysisSession, AnalysisSupersededError, analysis_session

__all__ = [
    "analyze_company",
    "AnalysisSession",
    "AnalysisSupersededError",
    "analysis_session",
]
