"""Pytest configuration and fixtures."""

import copy
import json
from typing import Any

import pytest

SAMPLE_PAYLOAD: dict[str, Any] = {
    "companyName": "SAP SE",
    "ticker": "SAP",
    "currentPrice": "234.10",
    "currency": "EUR",
    "priceTrend30d": "+5.8%",
    "scores": [
        {"category": "Valuation (P/E, P/B)", "score": 6, "reasoning": "Premium multiple"},
        {"category": "Growth & Profitability", "score": 9, "reasoning": "Cloud growth"},
        {"category": "Dividend & Safety", "score": 7, "reasoning": "Stable payout"},
        {"category": "Technical Analysis (Trend)", "score": 8, "reasoning": "Uptrend"},
        {"category": "Sentiment & News", "score": 10, "reasoning": "Upgrades"},
    ],
    "newsScore": 30,
    "recommendation": "Buy",
    "riskLevel": "Medium",
    "companyProfile": "Enterprise software.",
    "hardfacts": {
        "revenue": "31.2 bn EUR",
        "peRatio": "48",
        "profit": "3.1 bn EUR",
        "dividend": "2.20 EUR",
        "dividendYield": "0.9%",
        "equityRatio": "61%",
    },
    "businessModelRisk": "Low churn, high switching costs.",
    "advancedAnalysis": {
        "piotroski": {"score": 9, "interpretation": "Excellent"},
        "altmanZ": {"score": 2.4, "interpretation": "Grey zone", "zone": "Grey"},
    },
    "news": [
        {"title": "SAP raises outlook", "source": "Reuters", "date": "2024-10-21", "url": "https://example.com/a"},
        {"title": "Cloud backlog grows", "source": "Handelsblatt", "date": "2024-10-20"},
    ],
    "summary": "Quality compounder.",
    "disclaimer": "This is AI-generated and not financial advice.",
}

SAMPLE_CHUNKS: list[dict[str, Any]] = [
    {"web": {"uri": "https://a.example", "title": "A1"}},
    {"web": {"uri": "https://b.example", "title": "B"}},
    {"web": {"uri": "https://a.example", "title": "A2"}},
    {"web": {"uri": "https://c.example"}},
    {},
]


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """A complete, in-range provider payload (deep copy, safe to mutate)."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_raw_text(sample_payload: dict[str, Any]) -> str:
    """Provider text: the sample payload wrapped in a json code fence."""
    return "```json\n" + json.dumps(sample_payload, indent=2) + "\n```"


@pytest.fixture
def sample_chunks() -> list[dict[str, Any]]:
    """Grounding chunks with a duplicate URI, a missing title and an empty chunk."""
    return copy.deepcopy(SAMPLE_CHUNKS)
