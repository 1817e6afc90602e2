"""Company Scorecard MCP Server using FastMCP."""

import json
import logging
import os

from fastmcp import FastMCP

from scorecard_mcp import SCHEMA_VERSION, SERVER_VERSION
from scorecard_mcp.prompts.templates import get_prompt
from scorecard_mcp.tools import analysis_session, analyze_company

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="company-scorecard",
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def analyze(query: str) -> str:
    """
    Score a listed company on a 0-150 investment scale.

    Asks the analysis provider (with web search grounding) for a structured
    analysis, validates it and derives the composite score:
    base categories (0-50) + news sentiment (0-50) + Piotroski F-Score
    scaled to 0-25 + Altman Z-Score scaled to 0-25.

    Only one analysis runs at a time; a new call cancels a pending one.

    Args:
        query: Company name or ticker (e.g., SAP, Rheinmetall, MUV2)

    Returns:
        JSON with the analysis record, record_fingerprint, display scale
        and provenance, or an error object (error_type: invalid_query,
        unprocessable_response, malformed_analysis, provider_error,
        timeout, superseded)
    """
    result = await analyze_company(query=query, session=analysis_session)
    return json.dumps(result, indent=2, default=str)


# ============================================================================
# PROMPTS
# ============================================================================


@mcp.prompt
def company_analysis(query: str) -> str:
    """Full scorecard analysis prompt for a company, answered as strict JSON."""
    result = get_prompt("company_analysis", {"query": query})
    if result:
        return result["messages"][0]["content"]
    return f"Analyze {query} using the analyze tool."


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Company Scorecard MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    mcp.run()


if __name__ == "__main__":
    main()
