"""Request validation and provider label tables."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from scorecard_mcp.models import AltmanZone, Recommendation, RiskLevel
from scorecard_mcp.utils.sanitize import sanitize_query

E = TypeVar("E", bound=Enum)

MAX_QUERY_LENGTH = 120

# Provider labels (case-insensitive) -> canonical enum.
# The German labels are what the provider emits for German-market prompts.
RECOMMENDATION_ALIASES: dict[str, Recommendation] = {
    "buy": Recommendation.BUY,
    "kaufen": Recommendation.BUY,
    "hold": Recommendation.HOLD,
    "halten": Recommendation.HOLD,
    "sell": Recommendation.SELL,
    "verkaufen": Recommendation.SELL,
}
RISK_LEVEL_ALIASES: dict[str, RiskLevel] = {
    "low": RiskLevel.LOW,
    "niedrig": RiskLevel.LOW,
    "medium": RiskLevel.MEDIUM,
    "mittel": RiskLevel.MEDIUM,
    "high": RiskLevel.HIGH,
    "hoch": RiskLevel.HIGH,
}
ALTMAN_ZONE_ALIASES: dict[str, AltmanZone] = {
    "safe": AltmanZone.SAFE,
    "grey": AltmanZone.GREY,
    "gray": AltmanZone.GREY,
    "distress": AltmanZone.DISTRESS,
}


@dataclass(frozen=True)
class AnalysisRequest:
    """Immutable analysis request: a company name or ticker."""

    query: str

    def __post_init__(self) -> None:
        if not isinstance(self.query, str):
            raise ValueError("Query must be a string")

        # Normalize: drop control characters and prompt quotes, collapse whitespace
        query = sanitize_query(self.query)

        if not query:
            raise ValueError("Query must not be empty")
        if len(query) > MAX_QUERY_LENGTH:
            raise ValueError(
                f"Query is too long ({len(query)} chars). Maximum is {MAX_QUERY_LENGTH}"
            )

        object.__setattr__(self, "query", query)


def lookup_label(value: object, aliases: Mapping[str, E]) -> E | None:
    """
    Resolve a provider label against an alias table.

    Returns None (not an error) if the value is not a known label.
    """
    if not isinstance(value, str):
        return None
    return aliases.get(value.strip().lower())
