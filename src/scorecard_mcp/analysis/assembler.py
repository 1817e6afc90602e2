"""Assemble the final analysis record and run the full pipeline."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from scorecard_mcp.analysis.extractor import extract_payload
from scorecard_mcp.analysis.schema import CandidatePayload, normalize_payload
from scorecard_mcp.analysis.scoring import (
    composite_score,
    scale_altman_z,
    scale_piotroski,
    sum_category_scores,
)
from scorecard_mcp.analysis.sources import dedupe_sources, sources_from_grounding
from scorecard_mcp.models import AnalysisRecord, GroundingSource

logger = logging.getLogger(__name__)

Extractor = Callable[[str], dict[str, Any]]


def assemble_record(
    candidate: CandidatePayload,
    sources: Iterable[GroundingSource] = (),
) -> AnalysisRecord:
    """
    Compute the derived scores and build the immutable record.

    This is the only place the derived fields are computed.

    Args:
        candidate: Normalized payload
        sources: Citation candidates (grounding first, then payload-listed)

    Returns:
        AnalysisRecord
    """
    advanced = candidate.advanced_analysis

    ai_score = sum_category_scores(candidate.scores)
    piotroski_scaled = scale_piotroski(advanced.piotroski.score)
    altman_z_scaled = scale_altman_z(advanced.altman_z.score)
    total = composite_score(ai_score, piotroski_scaled, altman_z_scaled, candidate.news_score)

    return AnalysisRecord(
        company_name=candidate.company_name,
        ticker=candidate.ticker,
        currency=candidate.currency,
        current_price=candidate.current_price,
        price_trend_30d=candidate.price_trend_30d,
        scores=candidate.scores,
        total_score=ai_score,
        news_score=candidate.news_score,
        advanced_analysis=advanced,
        piotroski_scaled=piotroski_scaled,
        altman_z_scaled=altman_z_scaled,
        total_recommendation_score=total,
        recommendation=candidate.recommendation,
        risk_level=candidate.risk_level,
        hardfacts=candidate.hardfacts,
        business_model_risk=candidate.business_model_risk,
        company_profile=candidate.company_profile,
        summary=candidate.summary,
        disclaimer=candidate.disclaimer,
        news=candidate.news,
        sources=dedupe_sources([*sources, *candidate.sources]),
        quality_warnings=candidate.warnings,
    )


def process_response(
    raw_text: str | None,
    grounding_chunks: Iterable[Any] | None = None,
    extractor: Extractor = extract_payload,
) -> AnalysisRecord:
    """
    Turn raw provider text into a validated AnalysisRecord.

    Pure and deterministic: the same inputs always give an equal record.

    Args:
        raw_text: Provider response text (expected to embed one JSON object)
        grounding_chunks: Grounding metadata chunks ({"web": {"uri", "title"}})
        extractor: Text-to-object strategy (default: fence stripping + JSON)

    Returns:
        AnalysisRecord

    Raises:
        PayloadParseError: If the text cannot be parsed
        PayloadShapeError: If a field required for scoring is missing
    """
    parsed = extractor(raw_text or "")
    candidate = normalize_payload(parsed)
    record = assemble_record(candidate, sources_from_grounding(grounding_chunks))

    logger.debug(
        f"Assembled record for {record.ticker or record.company_name!r}: "
        f"total={record.total_recommendation_score} "
        f"(ai={record.total_score:g}, news={record.news_score:g}, "
        f"piotroski={record.piotroski_scaled:.1f}, altman={record.altman_z_scaled:.1f}), "
        f"sources={len(record.sources)}, warnings={len(record.quality_warnings)}"
    )
    return record
