"""Provider payload extraction, validation and scoring."""

from scorecard_mcp.analysis.assembler import assemble_record, process_response
from scorecard_mcp.analysis.errors import PayloadError, PayloadParseError, PayloadShapeError
from scorecard_mcp.analysis.extractor import extract_payload, strip_fences
from scorecard_mcp.analysis.schema import NEWS_SCORE_DEFAULT, CandidatePayload, normalize_payload
from scorecard_mcp.analysis.scoring import (
    composite_score,
    display_band,
    display_position,
    scale_altman_z,
    scale_piotroski,
    sum_category_scores,
)
from scorecard_mcp.analysis.sources import dedupe_sources, sources_from_grounding

__all__ = [
    # Pipeline
    "assemble_record",
    "process_response",
    # Errors
    "PayloadError",
    "PayloadParseError",
    "PayloadShapeError",
    # Extractor
    "extract_payload",
    "strip_fences",
    # Normalizer
    "NEWS_SCORE_DEFAULT",
    "CandidatePayload",
    "normalize_payload",
    # Scoring
    "composite_score",
    "display_band",
    "display_position",
    "scale_altman_z",
    "scale_piotroski",
    "sum_category_scores",
    # Sources
    "dedupe_sources",
    "sources_from_grounding",
]
