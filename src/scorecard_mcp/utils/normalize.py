"""Canonical serialization for deterministic record comparison.

Two runs of the pipeline over the same provider text must produce the same
record. ``canonical_dumps`` gives a byte-stable JSON form of a record and
``record_fingerprint`` a short hash of it for change detection and logs.
"""

import hashlib
import json
from typing import Any

from scorecard_mcp.models import AnalysisRecord

FINGERPRINT_LENGTH = 16


def canonical_dumps(obj: Any) -> str:
    """Produce canonical JSON string with sorted keys and minimal separators.

    Uses allow_nan=False to fail fast if NaN/inf values slip through
    normalization. This ensures JSON validity across all parsers.
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def record_fingerprint(record: AnalysisRecord) -> str:
    """SHA-256 of the record's canonical JSON, truncated to 16 hex chars."""
    canonical_json = canonical_dumps(record.to_dict())
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]
