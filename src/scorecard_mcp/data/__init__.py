"""Provider boundary: fetching raw analysis text."""

from scorecard_mcp.data.gemini_client import (
    ProviderConfigError,
    ProviderResponse,
    fetch_analysis,
    get_client,
)

__all__ = [
    "ProviderConfigError",
    "ProviderResponse",
    "fetch_analysis",
    "get_client",
]
