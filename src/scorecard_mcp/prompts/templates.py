"""Prompt templates for company analysis."""

from typing import Any

# JSON contract the provider must answer with. Keep in sync with
# analysis.schema.normalize_payload.
RESPONSE_CONTRACT = """{
  "companyName": "Name",
  "ticker": "Symbol",
  "currentPrice": "Price",
  "currency": "EUR",
  "priceTrend30d": "Change over the last 30 days (e.g. +5.2% or -1.5%)",
  "scores": [
    { "category": "Valuation (P/E, P/B)", "score": 0, "reasoning": "..." },
    { "category": "Growth & Profitability", "score": 0, "reasoning": "..." },
    { "category": "Dividend & Safety", "score": 0, "reasoning": "..." },
    { "category": "Technical Analysis (Trend)", "score": 0, "reasoning": "..." },
    { "category": "Sentiment & News", "score": 0, "reasoning": "..." }
  ],
  "newsScore": 0,
  "recommendation": "Buy" | "Hold" | "Sell",
  "riskLevel": "Low" | "Medium" | "High",
  "companyProfile": "Profile...",
  "hardfacts": {
    "revenue": "Revenue",
    "peRatio": "P/E",
    "profit": "Net income",
    "dividend": "Dividend per share",
    "dividendYield": "%",
    "equityRatio": "%"
  },
  "businessModelRisk": "Assessment of the business model...",
  "advancedAnalysis": {
    "piotroski": { "score": 7, "interpretation": "..." },
    "altmanZ": { "score": 2.8, "interpretation": "...", "zone": "Safe" | "Grey" | "Distress" }
  },
  "news": [
    { "title": "...", "source": "...", "date": "...", "url": "..." }
  ],
  "summary": "Summary...",
  "disclaimer": "This is AI-generated and not financial advice."
}"""

ANALYSIS_TEMPLATE = """You are a team of equity analysts covering the German stock market (DAX, MDAX, SDAX, TecDAX).
Analyze the company "{query}".

1. Research current financials (revenue, profit, P/E, dividend, balance sheet), today's share price and the price trend over the last 30 days.
2. Find the 3 most recent, reputable, market-relevant news items.
3. Base scoreboard (0-50): award 0-10 points in each of 5 categories (valuation, growth, dividend, trend, sentiment).
4. News sentiment score (0-50), assessed separately: 50 = extremely positive news, 25 = neutral or mixed, 0 = extremely negative news. Report it as "newsScore".
5. Piotroski F-Score: go through the 9 criteria (profitability: ROA>0, CFO>0, ROA rising, CFO>net income; leverage: debt falling, current ratio rising, no new shares; efficiency: gross margin rising, asset turnover rising) and sum the points (0-9).
6. Altman Z-Score for non-financials (1.2*A + 1.4*B + 3.3*C + 0.6*D + 1.0*E). Zones: > 3.0 Safe, 1.8-3.0 Grey, < 1.8 Distress. For banks and insurers use an adjusted model and say so in the interpretation; the score must still be a number.

Return ONLY valid JSON with exactly this structure:
{contract}
"""

# Prompt definitions
PROMPTS = {
    "company_analysis": {
        "description": "Full scorecard analysis of a listed company, answered as strict JSON",
        "arguments": [{"name": "query", "required": True}],
    },
}


def build_analysis_prompt(query: str) -> str:
    """Fill the analysis template for a (validated) company query."""
    return ANALYSIS_TEMPLATE.format(query=query, contract=RESPONSE_CONTRACT)


def list_prompts() -> list[dict[str, Any]]:
    """List available prompts."""
    return [
        {
            "name": name,
            "description": info["description"],
            "arguments": info["arguments"],
        }
        for name, info in PROMPTS.items()
    ]


def get_prompt(name: str, arguments: dict[str, str]) -> dict[str, Any] | None:
    """
    Get a prompt by name with arguments filled in.

    Returns dict with 'messages' key for MCP GetPromptResult.
    """
    if name not in PROMPTS:
        return None

    if name == "company_analysis":
        query = arguments.get("query", "")
        return {
            "messages": [
                {
                    "role": "user",
                    "content": build_analysis_prompt(query),
                }
            ]
        }

    return None
