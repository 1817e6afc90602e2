"""Tests for sub-score scalers and the composite score."""

import pytest

from scorecard_mcp.analysis.scoring import (
    composite_score,
    display_band,
    display_position,
    round_half_up,
    scale_altman_z,
    scale_piotroski,
    sum_category_scores,
)
from scorecard_mcp.models import ScoreItem


class TestScalePiotroski:
    """Tests for scale_piotroski function."""

    def test_max(self) -> None:
        """Test 9 maps to the full 25 points."""
        assert scale_piotroski(9) == 25.0

    def test_zero(self) -> None:
        """Test 0 maps to 0."""
        assert scale_piotroski(0) == 0.0

    def test_overshoot_clamped(self) -> None:
        """Test values above 9 cannot exceed 25."""
        assert scale_piotroski(12) == 25.0

    def test_midpoint_not_rounded(self) -> None:
        """Test scaling keeps full precision (rounding happens only in the composite)."""
        assert scale_piotroski(5) == pytest.approx(13.8888888, rel=1e-6)
        assert scale_piotroski(5) != 14

    def test_negative_clamped(self) -> None:
        """Test negative input contributes 0."""
        assert scale_piotroski(-3) == 0.0

    def test_returns_python_float(self) -> None:
        """Test the result is a plain float (JSON-serializable, hashable)."""
        assert type(scale_piotroski(7)) is float


class TestScaleAltmanZ:
    """Tests for scale_altman_z function."""

    def test_safe(self) -> None:
        """Test safe zone gets full points."""
        assert scale_altman_z(3.5) == 25.0

    def test_distress(self) -> None:
        """Test distress zone gets 0."""
        assert scale_altman_z(1.0) == 0.0

    def test_grey_interpolation(self) -> None:
        """Test grey zone interpolates linearly."""
        assert scale_altman_z(2.4) == pytest.approx(12.5)

    def test_lower_boundary_inclusive(self) -> None:
        """Test 1.8 exactly is distress."""
        assert scale_altman_z(1.8) == 0.0

    def test_upper_boundary_inclusive(self) -> None:
        """Test 3.0 exactly is safe."""
        assert scale_altman_z(3.0) == 25.0

    def test_negative_z(self) -> None:
        """Test deeply negative Z-scores still contribute 0."""
        assert scale_altman_z(-4.2) == 0.0

    def test_monotonic_in_grey(self) -> None:
        """Test the grey zone is increasing."""
        values = [scale_altman_z(z) for z in (1.9, 2.2, 2.5, 2.8, 2.99)]
        assert values == sorted(values)
        assert all(0 < v < 25 for v in values)


class TestCompositeScore:
    """Tests for composite aggregation."""

    def test_reference_example(self) -> None:
        """Test 40 + 25 + 12.5 + 30 = 107.5 rounds to 108."""
        assert composite_score(40, 25, 12.5, 30) == 108

    def test_interpolated_half_rounds_up(self) -> None:
        """Test float noise from the Altman interpolation does not round down."""
        assert composite_score(40, 25, scale_altman_z(2.4), 30) == 108

    def test_nominal_max(self) -> None:
        """Test all maxima give 150."""
        assert composite_score(50, 25, 25, 50) == 150

    def test_not_clamped(self) -> None:
        """Test out-of-range inputs are not masked."""
        assert composite_score(50, 25, 25, 80) == 180
        assert composite_score(0, 0, 0, -10) == -10

    def test_returns_int(self) -> None:
        """Test the composite is an integer."""
        assert isinstance(composite_score(31, 13.888, 0, 25), int)

    def test_default_news_reflected(self) -> None:
        """Test the neutral default contributes 25."""
        assert composite_score(40, 25, 12.5, 25) == 103


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(107.5, 108), (106.5, 107), (0.5, 1), (107.49, 107), (-2.5, -2), (99.0, 99)],
    )
    def test_values(self, value: float, expected: int) -> None:
        """Test halves round toward +inf, unlike banker's rounding."""
        assert round_half_up(value) == expected


class TestSumCategoryScores:
    """Tests for sum_category_scores function."""

    def test_sum(self) -> None:
        """Test scores are summed as stored."""
        items = [ScoreItem(category=str(i), score=s, reasoning="") for i, s in enumerate([6, 9, 7, 8, 10])]
        assert sum_category_scores(items) == 40.0

    def test_empty(self) -> None:
        """Test no categories sum to 0.0."""
        assert sum_category_scores([]) == 0.0


class TestDisplay:
    """Tests for display clamping."""

    def test_position_clamped(self) -> None:
        """Test display position stays within 0-150."""
        assert display_position(180) == 150.0
        assert display_position(-5) == 0.0
        assert display_position(108) == 108.0

    def test_bands(self) -> None:
        """Test band thresholds."""
        assert display_band(100) == "strong"
        assert display_band(99) == "moderate"
        assert display_band(50) == "moderate"
        assert display_band(49) == "weak"
        assert display_band(400) == "strong"
