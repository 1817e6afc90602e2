"""Company Scorecard MCP Server."""

import os


def get_server_version() -> str:
    """Get version with fallback for dev mode."""
    if version := os.environ.get("SERVER_VERSION"):
        return version
    try:
        from importlib.metadata import version as pkg_version

        return pkg_version("scorecard-mcp")
    except Exception:
        return "dev"


SERVER_VERSION = get_server_version()
# Bump when the AnalysisRecord output schema changes materially
# v1: Initial record (scores, newsScore, advancedAnalysis, totalRecommendationScore)
# v2: Surfaced piotroskiScaled/altmanZScaled and qualityWarnings
SCHEMA_VERSION = "2"
