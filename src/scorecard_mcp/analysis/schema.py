"""Validate a parsed provider payload and resolve defaults.

The normalizer is the only place that looks at the untyped object tree. It
either produces a fully typed ``CandidatePayload`` or raises
``PayloadShapeError`` naming the missing field, so scoring never dereferences
an absent value.

Defaults policy:
- newsScore null/absent -> NEWS_SCORE_DEFAULT (neutral)
- sources absent -> ()
- free-text fields absent -> ""

Out-of-range values are never silently accepted: category scores are clamped
to [0, 10], a negative Piotroski score is clamped to 0, and every correction
is recorded as a quality warning on the payload.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from scorecard_mcp.analysis.errors import PayloadShapeError
from scorecard_mcp.analysis.sources import coerce_source
from scorecard_mcp.models import (
    AdvancedAnalysis,
    AltmanZone,
    AltmanZScore,
    GroundingSource,
    Hardfacts,
    NewsItem,
    PiotroskiScore,
    Recommendation,
    RiskLevel,
    ScoreItem,
)
from scorecard_mcp.utils.validators import (
    ALTMAN_ZONE_ALIASES,
    RECOMMENDATION_ALIASES,
    RISK_LEVEL_ALIASES,
    lookup_label,
)

logger = logging.getLogger(__name__)

# Neutral news sentiment, used when the provider omits newsScore
NEWS_SCORE_DEFAULT = 25.0
NEWS_SCORE_MAX = 50.0

CATEGORY_SCORE_MIN = 0.0
CATEGORY_SCORE_MAX = 10.0
EXPECTED_CATEGORY_COUNT = 5

PIOTROSKI_MIN = 0.0

# Zone boundaries used only to flag label/score disagreement
ALTMAN_SAFE_THRESHOLD = 3.0
ALTMAN_DISTRESS_THRESHOLD = 1.8

HARDFACT_KEYS: dict[str, str] = {
    "revenue": "revenue",
    "profit": "profit",
    "peRatio": "pe_ratio",
    "dividend": "dividend",
    "dividendYield": "dividend_yield",
    "equityRatio": "equity_ratio",
}


@dataclass(frozen=True)
class CandidatePayload:
    """Typed view of a provider payload with every scoring input resolved."""

    company_name: str
    ticker: str
    currency: str
    current_price: str
    price_trend_30d: str
    scores: tuple[ScoreItem, ...]
    news_score: float
    advanced_analysis: AdvancedAnalysis
    recommendation: Recommendation
    risk_level: RiskLevel
    hardfacts: Hardfacts
    business_model_risk: str
    company_profile: str
    summary: str
    disclaimer: str
    news: tuple[NewsItem, ...] = ()
    sources: tuple[GroundingSource, ...] = ()
    warnings: tuple[str, ...] = ()


def normalize_payload(obj: Mapping[str, Any]) -> CandidatePayload:
    """
    Validate required scoring fields and apply defaults.

    Args:
        obj: Parsed provider object

    Returns:
        CandidatePayload ready for scoring

    Raises:
        PayloadShapeError: If scores, advancedAnalysis.piotroski.score or
            advancedAnalysis.altmanZ.score (or an enum label) is missing/invalid
    """
    if not isinstance(obj, Mapping):
        raise PayloadShapeError("Payload is not an object", field="$")

    warnings: list[str] = []

    scores = _normalize_scores(obj.get("scores"), warnings)
    advanced = _normalize_advanced(obj.get("advancedAnalysis"), warnings)
    news_score = _resolve_news_score(obj.get("newsScore"), warnings)

    recommendation = lookup_label(obj.get("recommendation"), RECOMMENDATION_ALIASES)
    if recommendation is None:
        raise PayloadShapeError(
            f"Unknown recommendation: {obj.get('recommendation')!r}", field="recommendation"
        )

    risk_level = lookup_label(obj.get("riskLevel"), RISK_LEVEL_ALIASES)
    if risk_level is None:
        raise PayloadShapeError(f"Unknown riskLevel: {obj.get('riskLevel')!r}", field="riskLevel")

    for message in warnings:
        logger.warning(f"Payload quality: {message}")

    return CandidatePayload(
        company_name=_text(obj.get("companyName")),
        ticker=_text(obj.get("ticker")),
        currency=_text(obj.get("currency")),
        current_price=_text(obj.get("currentPrice")),
        price_trend_30d=_text(obj.get("priceTrend30d")),
        scores=scores,
        news_score=news_score,
        advanced_analysis=advanced,
        recommendation=recommendation,
        risk_level=risk_level,
        hardfacts=_normalize_hardfacts(obj.get("hardfacts")),
        business_model_risk=_text(obj.get("businessModelRisk")),
        company_profile=_text(obj.get("companyProfile")),
        summary=_text(obj.get("summary")),
        disclaimer=_text(obj.get("disclaimer")),
        news=_normalize_news(obj.get("news")),
        sources=_normalize_sources(obj.get("sources")),
        warnings=tuple(warnings),
    )


# ---------------- Scoring inputs ----------------

def _normalize_scores(raw: Any, warnings: list[str]) -> tuple[ScoreItem, ...]:
    """Validate the category array, clamping each score to [0, 10]."""
    if not isinstance(raw, list):
        raise PayloadShapeError("Missing scores array", field="scores")

    if len(raw) != EXPECTED_CATEGORY_COUNT:
        warnings.append(
            f"scores has {len(raw)} categories, expected {EXPECTED_CATEGORY_COUNT}"
        )

    items: list[ScoreItem] = []
    for i, entry in enumerate(raw):
        path = f"scores[{i}]"
        if not isinstance(entry, Mapping):
            raise PayloadShapeError(f"{path} is not an object", field=path)

        score = _require_number(entry.get("score"), f"{path}.score", warnings)
        clamped = float(np.clip(score, CATEGORY_SCORE_MIN, CATEGORY_SCORE_MAX))
        if clamped != score:
            warnings.append(
                f"{path}.score={score:g} outside [{CATEGORY_SCORE_MIN:g}, "
                f"{CATEGORY_SCORE_MAX:g}], clamped to {clamped:g}"
            )

        items.append(
            ScoreItem(
                category=_text(entry.get("category")),
                score=clamped,
                reasoning=_text(entry.get("reasoning")),
            )
        )
    return tuple(items)


def _normalize_advanced(raw: Any, warnings: list[str]) -> AdvancedAnalysis:
    if not isinstance(raw, Mapping):
        raise PayloadShapeError("Missing advancedAnalysis", field="advancedAnalysis")

    piotroski_raw = raw.get("piotroski")
    if not isinstance(piotroski_raw, Mapping):
        raise PayloadShapeError(
            "Missing advancedAnalysis.piotroski", field="advancedAnalysis.piotroski"
        )
    altman_raw = raw.get("altmanZ")
    if not isinstance(altman_raw, Mapping):
        raise PayloadShapeError(
            "Missing advancedAnalysis.altmanZ", field="advancedAnalysis.altmanZ"
        )

    p_score = _require_number(
        piotroski_raw.get("score"), "advancedAnalysis.piotroski.score", warnings
    )
    if p_score < PIOTROSKI_MIN:
        warnings.append(
            f"advancedAnalysis.piotroski.score={p_score:g} is negative, clamped to 0"
        )
        p_score = PIOTROSKI_MIN

    z_score = _require_number(altman_raw.get("score"), "advancedAnalysis.altmanZ.score", warnings)

    zone = lookup_label(altman_raw.get("zone"), ALTMAN_ZONE_ALIASES)
    if zone is None:
        warnings.append(f"advancedAnalysis.altmanZ.zone={altman_raw.get('zone')!r} not recognized")
    else:
        _check_zone_consistency(z_score, zone, warnings)

    return AdvancedAnalysis(
        piotroski=PiotroskiScore(
            score=p_score,
            interpretation=_text(piotroski_raw.get("interpretation")),
        ),
        altman_z=AltmanZScore(
            score=z_score,
            zone=zone,
            interpretation=_text(altman_raw.get("interpretation")),
        ),
    )


def _check_zone_consistency(z: float, zone: AltmanZone, warnings: list[str]) -> None:
    """Flag a provider zone label that disagrees with its own Z-score."""
    if z >= ALTMAN_SAFE_THRESHOLD:
        expected = AltmanZone.SAFE
    elif z <= ALTMAN_DISTRESS_THRESHOLD:
        expected = AltmanZone.DISTRESS
    else:
        expected = AltmanZone.GREY

    if zone is not expected:
        warnings.append(
            f"advancedAnalysis.altmanZ.zone={zone.value} disagrees with score {z:g} "
            f"(expected {expected.value})"
        )


def _resolve_news_score(raw: Any, warnings: list[str]) -> float:
    """Resolve newsScore, defaulting to neutral. An explicit 0 is kept."""
    if raw is None:
        return NEWS_SCORE_DEFAULT

    value = _coerce_number(raw, "newsScore", warnings)
    if value is None:
        warnings.append(
            f"newsScore={raw!r} is not numeric, using default {NEWS_SCORE_DEFAULT:g}"
        )
        return NEWS_SCORE_DEFAULT

    # Kept as supplied: the composite is intentionally unclamped
    if not 0 <= value <= NEWS_SCORE_MAX:
        warnings.append(f"newsScore={value:g} outside [0, {NEWS_SCORE_MAX:g}]")
    return value


def _require_number(raw: Any, path: str, warnings: list[str]) -> float:
    value = _coerce_number(raw, path, warnings)
    if value is None:
        if raw is None:
            raise PayloadShapeError(f"Missing {path}", field=path)
        raise PayloadShapeError(f"{path} is not numeric: {raw!r}", field=path)
    return value


def _coerce_number(raw: Any, path: str, warnings: list[str]) -> float | None:
    """
    Convert a payload value to a finite float.

    Numeric strings are accepted with a warning. Booleans, NaN/inf and
    anything else return None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            # json parses integer literals exactly; huge ones do not fit a float
            return None
        return value if math.isfinite(value) else None
    if isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        warnings.append(f"{path} supplied as string {raw!r}, coerced to {value:g}")
        return value
    return None


# ---------------- Pass-through fields ----------------

def _text(value: Any) -> str:
    """Free text passes through unchanged; absent becomes ""."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _normalize_hardfacts(raw: Any) -> Hardfacts:
    if not isinstance(raw, Mapping):
        return Hardfacts()
    return Hardfacts(**{attr: _text(raw.get(key)) for key, attr in HARDFACT_KEYS.items()})


def _normalize_news(raw: Any) -> tuple[NewsItem, ...]:
    if not isinstance(raw, list):
        return ()

    items: list[NewsItem] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        url = entry.get("url")
        items.append(
            NewsItem(
                title=_text(entry.get("title")),
                source=_text(entry.get("source")),
                date=_text(entry.get("date")),
                url=url if isinstance(url, str) and url else None,
            )
        )
    return tuple(items)


def _normalize_sources(raw: Any) -> tuple[GroundingSource, ...]:
    """Sources listed inside the payload itself. Absent -> ()."""
    if not isinstance(raw, list):
        return ()
    return tuple(s for s in map(coerce_source, raw) if s is not None)
