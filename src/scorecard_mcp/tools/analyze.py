"""Analyze company tool."""

import asyncio
import logging
import os
from datetime import datetime, timezone
from time import perf_counter
from typing import Any

from scorecard_mcp.analysis import (
    PayloadParseError,
    PayloadShapeError,
    display_band,
    display_position,
    process_response,
)
from scorecard_mcp.analysis.scoring import COMPOSITE_NOMINAL_MAX
from scorecard_mcp.data.gemini_client import ProviderConfigError, fetch_analysis
from scorecard_mcp.prompts.templates import build_analysis_prompt
from scorecard_mcp.tools.session import AnalysisSession, AnalysisSupersededError
from scorecard_mcp.utils.normalize import record_fingerprint
from scorecard_mcp.utils.provenance import build_error_response, build_meta, build_provenance
from scorecard_mcp.utils.validators import AnalysisRequest

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = float(os.environ.get("PROVIDER_TIMEOUT", "90"))

PARSE_ERROR_MESSAGE = "Could not process the analysis response. Please try again."
SHAPE_ERROR_MESSAGE = "The analysis response was malformed. Please try again."


async def analyze_company(
    query: str,
    session: AnalysisSession | None = None,
) -> dict[str, Any]:
    """
    Run a full scorecard analysis for a company name or ticker.

    Args:
        query: Company name or ticker (e.g. "SAP", "Rheinmetall")
        session: Session enforcing one analysis in flight (optional)

    Returns:
        Dict with the analysis record, fingerprint, display scale and
        provenance, or a standardized error response
    """
    start_time = perf_counter()

    try:
        request = AnalysisRequest(query=query)
    except ValueError as e:
        return build_error_response(error_type="invalid_query", message=str(e), query=query)

    prompt = build_analysis_prompt(request.query)
    operation = asyncio.wait_for(fetch_analysis(prompt), timeout=TIMEOUT_SECONDS)

    try:
        if session is not None:
            response = await session.run(operation)
        else:
            response = await operation
    except AnalysisSupersededError as e:
        return build_error_response(error_type="superseded", message=str(e), query=request.query)
    except asyncio.TimeoutError:
        logger.warning(f"Analysis of {request.query!r} timed out after {TIMEOUT_SECONDS:g}s")
        return build_error_response(
            error_type="timeout",
            message=f"Analysis provider did not respond within {TIMEOUT_SECONDS:g}s",
            query=request.query,
        )
    except ProviderConfigError as e:
        return build_error_response(error_type="provider_error", message=str(e), query=request.query)
    except Exception as e:
        logger.error(f"Analysis provider error for {request.query!r}: {e}")
        return build_error_response(
            error_type="provider_error",
            message=f"Analysis provider request failed: {e}",
            query=request.query,
        )

    try:
        record = process_response(response.text, response.grounding_chunks)
    except PayloadParseError as e:
        return build_error_response(
            error_type="unprocessable_response",
            message=PARSE_ERROR_MESSAGE,
            query=request.query,
            detail=str(e),
        )
    except PayloadShapeError as e:
        logger.warning(f"Malformed analysis for {request.query!r}: {e}")
        return build_error_response(
            error_type="malformed_analysis",
            message=SHAPE_ERROR_MESSAGE,
            query=request.query,
            detail=e.field,
        )

    total = record.total_recommendation_score
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("analyze_company", duration_ms),
        "data_provenance": {
            "analysis": build_provenance(
                source="gemini",
                as_of=datetime.now(timezone.utc),
                warnings=list(record.quality_warnings),
                **response.to_provenance(),
            ),
        },
        "query": request.query,
        "record": record.to_dict(),
        "record_fingerprint": record_fingerprint(record),
        # Clamped for presentation only; record keeps the unclamped value
        "display": {
            "score": display_position(total),
            "scale_max": COMPOSITE_NOMINAL_MAX,
            "band": display_band(total),
        },
    }
