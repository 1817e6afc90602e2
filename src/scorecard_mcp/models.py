"""Typed analysis record and its parts.

All record types are frozen dataclasses and hold sequences as tuples, so a
record is immutable once the assembler has built it. ``to_dict()`` emits the
camelCase JSON contract consumed by presentation layers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Recommendation(str, Enum):
    """Provider's semantic call. Independent of the numeric score."""

    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AltmanZone(str, Enum):
    """Altman Z zone as classified by the provider (never recomputed)."""

    SAFE = "Safe"
    GREY = "Grey"
    DISTRESS = "Distress"


@dataclass(frozen=True)
class ScoreItem:
    """One category of the base scoreboard (nominal 0-10)."""

    category: str
    score: float
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "score": self.score, "reasoning": self.reasoning}


@dataclass(frozen=True)
class NewsItem:
    title: str
    source: str
    date: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {"title": self.title, "source": self.source, "date": self.date}
        if self.url is not None:
            item["url"] = self.url
        return item


@dataclass(frozen=True)
class GroundingSource:
    """Citation the provider claims to have used as evidence."""

    title: str
    uri: str

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "uri": self.uri}


@dataclass(frozen=True)
class Hardfacts:
    """Fundamental metrics as display strings. Never parsed as numbers."""

    revenue: str = ""
    profit: str = ""
    pe_ratio: str = ""
    dividend: str = ""
    dividend_yield: str = ""
    equity_ratio: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "revenue": self.revenue,
            "profit": self.profit,
            "peRatio": self.pe_ratio,
            "dividend": self.dividend,
            "dividendYield": self.dividend_yield,
            "equityRatio": self.equity_ratio,
        }


@dataclass(frozen=True)
class PiotroskiScore:
    score: float  # nominal 0-9
    interpretation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "interpretation": self.interpretation}


@dataclass(frozen=True)
class AltmanZScore:
    score: float  # unbounded
    zone: AltmanZone | None
    interpretation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "interpretation": self.interpretation,
            "zone": self.zone.value if self.zone is not None else None,
        }


@dataclass(frozen=True)
class AdvancedAnalysis:
    piotroski: PiotroskiScore
    altman_z: AltmanZScore

    def to_dict(self) -> dict[str, Any]:
        return {"piotroski": self.piotroski.to_dict(), "altmanZ": self.altman_z.to_dict()}


@dataclass(frozen=True)
class AnalysisRecord:
    """
    Validated, numerically consistent investment record.

    Built exactly once per successful analysis by the assembler. The derived
    fields (total_score, scaled sub-scores, total_recommendation_score) are
    computed there and never recomputed afterwards.
    """

    company_name: str
    ticker: str
    currency: str
    current_price: str
    price_trend_30d: str
    scores: tuple[ScoreItem, ...]
    total_score: float
    news_score: float
    advanced_analysis: AdvancedAnalysis
    piotroski_scaled: float
    altman_z_scaled: float
    total_recommendation_score: int
    recommendation: Recommendation
    risk_level: RiskLevel
    hardfacts: Hardfacts
    business_model_risk: str
    company_profile: str
    summary: str
    disclaimer: str
    news: tuple[NewsItem, ...] = ()
    sources: tuple[GroundingSource, ...] = ()
    quality_warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase record contract."""
        return {
            "companyName": self.company_name,
            "ticker": self.ticker,
            "currentPrice": self.current_price,
            "currency": self.currency,
            "priceTrend30d": self.price_trend_30d,
            "scores": [s.to_dict() for s in self.scores],
            "totalScore": self.total_score,
            "newsScore": self.news_score,
            "advancedAnalysis": self.advanced_analysis.to_dict(),
            "piotroskiScaled": self.piotroski_scaled,
            "altmanZScaled": self.altman_z_scaled,
            "totalRecommendationScore": self.total_recommendation_score,
            "recommendation": self.recommendation.value,
            "riskLevel": self.risk_level.value,
            "hardfacts": self.hardfacts.to_dict(),
            "businessModelRisk": self.business_model_risk,
            "companyProfile": self.company_profile,
            "summary": self.summary,
            "disclaimer": self.disclaimer,
            "news": [n.to_dict() for n in self.news],
            "sources": [s.to_dict() for s in self.sources],
            "qualityWarnings": list(self.quality_warnings),
        }
