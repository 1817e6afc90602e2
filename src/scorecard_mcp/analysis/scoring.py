"""Sub-score scalers and the composite recommendation score.

Composite (nominal 0-150):
    base categories   0-50   sum of five 0-10 category scores
    news sentiment    0-50   provider newsScore
    Piotroski F       0-25   scale_piotroski
    Altman Z          0-25   scale_altman_z

The composite is rounded once, at the end, and is deliberately not clamped:
out-of-range inputs surface as an out-of-range score. Display layers clamp
on their own (see ``display_position``).
"""

import math
from collections.abc import Iterable

import numpy as np

from scorecard_mcp.models import ScoreItem

SUBSCORE_MAX = 25.0

PIOTROSKI_MAX = 9.0

# Altman Z zone boundaries (Safe >= 3.0, Distress <= 1.8)
ALTMAN_SAFE = 3.0
ALTMAN_DISTRESS = 1.8
ALTMAN_GREY_WIDTH = ALTMAN_SAFE - ALTMAN_DISTRESS

COMPOSITE_NOMINAL_MAX = 150


def scale_piotroski(raw: float) -> float:
    """
    Scale a Piotroski F-Score (0-9) to a 0-25 contribution.

    Values above 9 are clamped to 9 so a provider overshoot cannot exceed
    25; negative values are clamped to 0.
    """
    clamped = float(np.clip(raw, 0.0, PIOTROSKI_MAX))
    return (clamped / PIOTROSKI_MAX) * SUBSCORE_MAX


def scale_altman_z(z: float) -> float:
    """
    Scale an Altman Z-Score to a 0-25 contribution.

    z >= 3.0        -> 25 (Safe)
    z <= 1.8        -> 0  (Distress)
    1.8 < z < 3.0   -> linear interpolation (Grey)
    """
    if z >= ALTMAN_SAFE:
        return SUBSCORE_MAX
    if z <= ALTMAN_DISTRESS:
        return 0.0
    return ((z - ALTMAN_DISTRESS) / ALTMAN_GREY_WIDTH) * SUBSCORE_MAX


def sum_category_scores(scores: Iterable[ScoreItem]) -> float:
    """Base AI score: plain sum of the category scores."""
    return sum((item.score for item in scores), 0.0)


# Float noise from the Altman interpolation (e.g. 2.4 -> 12.499999999999998)
# must not push an exact .5 composite down
ROUNDING_PRECISION = 9


def round_half_up(value: float) -> int:
    """Round halves toward +inf (107.5 -> 108, 106.5 -> 107, -2.5 -> -2)."""
    return math.floor(round(value, ROUNDING_PRECISION) + 0.5)


def composite_score(
    ai_score: float,
    piotroski_scaled: float,
    altman_z_scaled: float,
    news_score: float,
) -> int:
    """
    Total recommendation score on the nominal 0-150 scale.

    Args:
        ai_score: Sum of the category scores (nominal 0-50)
        piotroski_scaled: Output of scale_piotroski (0-25)
        altman_z_scaled: Output of scale_altman_z (0-25)
        news_score: Resolved news sentiment score (nominal 0-50)

    Returns:
        Rounded, unclamped composite
    """
    return round_half_up(ai_score + piotroski_scaled + altman_z_scaled + news_score)


def display_position(score: float) -> float:
    """Clamp a composite to [0, 150] for presentation. Never stored."""
    return float(np.clip(score, 0, COMPOSITE_NOMINAL_MAX))


def display_band(score: float) -> str:
    """Coarse band for a composite: strong (>= 100), moderate (>= 50), weak."""
    position = display_position(score)
    if position >= 100:
        return "strong"
    if position >= 50:
        return "moderate"
    return "weak"
