"""Response metadata and provenance utilities."""

from datetime import datetime
from typing import Any

from scorecard_mcp import SCHEMA_VERSION, SERVER_VERSION


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """
    Build standard metadata block for responses.

    Args:
        tool: Name of the tool producing this response
        duration_ms: Execution time in milliseconds (optional)

    Returns:
        Metadata dict with version info
    """
    meta: dict[str, Any] = {
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
        "tool": tool,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    as_of: datetime | str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Build data provenance block for the analysis provider.

    Args:
        source: Provider name (e.g., "gemini")
        as_of: Timestamp of the provider response
        **kwargs: Additional provenance fields (model, attempts, ...)

    Returns:
        Provenance dict, always with a warnings list
    """
    prov: dict[str, Any] = {"source": source}

    if as_of is not None:
        if isinstance(as_of, datetime):
            prov["as_of"] = as_of.isoformat()
        else:
            prov["as_of"] = as_of

    prov.update(kwargs)

    if "warnings" not in prov:
        prov["warnings"] = []

    return prov


def build_error_response(
    error_type: str,
    message: str,
    query: str | None = None,
    detail: str | None = None,
) -> dict[str, Any]:
    """
    Build standardized error response.

    Args:
        error_type: Type of error (invalid_query, unprocessable_response,
            malformed_analysis, provider_error, timeout, superseded)
        message: Human-readable error message
        query: Query that caused the error (if applicable)
        detail: Diagnostic detail (e.g. the missing field path)

    Returns:
        Error response dict
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("error"),
    }

    if query is not None:
        response["query"] = query

    if detail is not None:
        response["detail"] = detail

    return response
