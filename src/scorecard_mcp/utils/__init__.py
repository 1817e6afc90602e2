"""Utility modules."""

from scorecard_mcp.utils.normalize import canonical_dumps, record_fingerprint
from scorecard_mcp.utils.provenance import build_error_response, build_meta, build_provenance
from scorecard_mcp.utils.sanitize import sanitize_query, sanitize_text
from scorecard_mcp.utils.validators import AnalysisRequest, lookup_label

__all__ = [
    "canonical_dumps",
    "record_fingerprint",
    "build_error_response",
    "build_meta",
    "build_provenance",
    "sanitize_query",
    "sanitize_text",
    "AnalysisRequest",
    "lookup_label",
]
