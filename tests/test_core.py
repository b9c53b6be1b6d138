"""Tests for coherent noise primitives."""

import math

import pytest

from noisegraph.core import (
    cubic_interp,
    gradient_coherent_noise,
    gradient_noise,
    int_value_noise,
    lattice_floor,
    linear_interp,
    make_int32_range,
    s_curve3,
    s_curve5,
    value_coherent_noise,
    value_noise,
)
from noisegraph.types import NoiseQuality

INT32_RANGE = 2.0**30


class TestInterpolation:
    """Tests for interpolation helpers."""

    def test_linear_interp_endpoints(self) -> None:
        """Alpha 0 and 1 return the endpoints."""
        assert linear_interp(2.0, 4.0, 0.0) == 2.0
        assert linear_interp(2.0, 4.0, 1.0) == 4.0

    def test_linear_interp_midpoint(self) -> None:
        """Alpha 0.5 returns the midpoint."""
        assert linear_interp(2.0, 4.0, 0.5) == 3.0

    def test_cubic_interp_endpoints(self) -> None:
        """Cubic interpolation passes through the inner two points."""
        assert cubic_interp(-3.0, 1.0, 5.0, 2.0, 0.0) == 1.0
        assert cubic_interp(-3.0, 1.0, 5.0, 2.0, 1.0) == pytest.approx(5.0)

    def test_cubic_interp_preserves_lines(self) -> None:
        """Collinear points interpolate to the line at the midpoint."""
        assert cubic_interp(-1.0, 0.0, 1.0, 2.0, 0.5) == pytest.approx(0.5)

    @pytest.mark.parametrize("curve", [s_curve3, s_curve5])
    def test_s_curves_fixed_points(self, curve) -> None:
        """S-curves map 0, 0.5 and 1 onto themselves."""
        assert curve(0.0) == 0.0
        assert curve(0.5) == 0.5
        assert curve(1.0) == 1.0

    @pytest.mark.parametrize("curve", [s_curve3, s_curve5])
    def test_s_curves_monotonic(self, curve) -> None:
        """S-curves are non-decreasing on [0, 1]."""
        values = [curve(i / 100.0) for i in range(101)]
        assert all(a <= b for a, b in zip(values, values[1:]))


class TestMakeInt32Range:
    """Tests for coordinate range folding."""

    @pytest.mark.parametrize(
        "n",
        [0.0, 1.5, -1.5, 123456.789, -INT32_RANGE, INT32_RANGE - 1.0, -INT32_RANGE + 0.5],
    )
    def test_in_range_unchanged(self, n: float) -> None:
        """Values inside [-2^30, 2^30) pass through unchanged."""
        assert make_int32_range(n) == n

    @pytest.mark.parametrize(
        "n",
        [
            INT32_RANGE,
            INT32_RANGE * 1.5,
            -INT32_RANGE - 0.5,
            -INT32_RANGE * 1.5,
            3.5e9,
            -3.5e9,
            1e15 + 0.25,
            -1e15 - 0.25,
            1e300,
            -1e300,
        ],
    )
    def test_out_of_range_folded_into_range(self, n: float) -> None:
        """Values outside the range fold back inside it."""
        folded = make_int32_range(n)
        assert -INT32_RANGE <= folded < INT32_RANGE

    def test_positive_fold_value(self) -> None:
        """Positive overflow folds by 2n mod 2^30 minus 2^30."""
        n = INT32_RANGE + 10.25
        assert make_int32_range(n) == math.fmod(2.0 * n, INT32_RANGE) - INT32_RANGE

    def test_negative_fold_value(self) -> None:
        """Negative overflow folds by 2n mod 2^30 plus 2^30."""
        n = -INT32_RANGE - 10.25
        assert make_int32_range(n) == math.fmod(2.0 * n, INT32_RANGE) + INT32_RANGE

    def test_non_finite_passes_through(self) -> None:
        """Infinities are returned as is and NaN stays NaN."""
        assert make_int32_range(math.inf) == math.inf
        assert make_int32_range(-math.inf) == -math.inf
        assert math.isnan(make_int32_range(math.nan))


class TestLatticeNoise:
    """Tests for integer lattice hashes."""

    def test_lattice_floor(self) -> None:
        """Positive values truncate, non-positive values step down."""
        assert lattice_floor(1.7) == 1
        assert lattice_floor(2.0) == 2
        assert lattice_floor(-0.3) == -1
        assert lattice_floor(0.0) == -1
        assert lattice_floor(-2.0) == -3

    def test_int_value_noise_range(self) -> None:
        """Integer hash stays within [0, 2^31)."""
        for ix in range(-5, 6):
            for seed in (0, 1, 2**31 - 1, -5):
                value = int_value_noise(ix, ix * 3, -ix, seed)
                assert 0 <= value < 2**31

    def test_value_noise_range(self) -> None:
        """Value noise stays within [-1, 1]."""
        for ix in range(-10, 10):
            for iy in range(-3, 3):
                assert -1.0 <= value_noise(ix, iy, 7, 0) <= 1.0

    def test_value_noise_deterministic(self) -> None:
        """Same lattice point and seed give the same value."""
        assert value_noise(3, -4, 5, 11) == value_noise(3, -4, 5, 11)

    def test_value_noise_seed_changes_value(self) -> None:
        """Different seeds give different values."""
        values = {value_noise(1, 2, 3, seed) for seed in range(10)}
        assert len(values) > 1

    def test_gradient_noise_zero_at_lattice_point(self) -> None:
        """Gradient contribution vanishes at its own lattice point."""
        assert gradient_noise(2.0, -3.0, 4.0, 2, -3, 4, 0) == 0.0


class TestGradientCoherentNoise:
    """Tests for gradient coherent noise."""

    def test_deterministic(self) -> None:
        """Repeated calls return identical values."""
        first = gradient_coherent_noise(0.3, 0.7, 0.1, 5, NoiseQuality.BEST)
        # Unrelated calls in between must not affect the result
        gradient_coherent_noise(9.1, -2.2, 4.4, 1, NoiseQuality.FAST)
        second = gradient_coherent_noise(0.3, 0.7, 0.1, 5, NoiseQuality.BEST)
        assert first == second

    @pytest.mark.parametrize("quality", list(NoiseQuality))
    def test_zero_on_lattice_points(self, quality: NoiseQuality) -> None:
        """Gradient noise is zero at integer coordinates."""
        assert gradient_coherent_noise(1.0, 2.0, 3.0, 0, quality) == 0.0
        assert gradient_coherent_noise(-1.0, 0.0, -2.0, 0, quality) == 0.0

    @pytest.mark.parametrize("quality", list(NoiseQuality))
    def test_continuous_across_cell_boundary(self, quality: NoiseQuality) -> None:
        """Values just either side of a lattice plane nearly agree."""
        below = gradient_coherent_noise(1.0 - 1e-9, 0.4, 0.6, 3, quality)
        above = gradient_coherent_noise(1.0 + 1e-9, 0.4, 0.6, 3, quality)
        assert abs(below - above) < 1e-6

    def test_seed_changes_value(self) -> None:
        """Different seeds give different noise."""
        a = gradient_coherent_noise(0.3, 0.7, 0.1, 0)
        b = gradient_coherent_noise(0.3, 0.7, 0.1, 1)
        assert a != b

    def test_quality_changes_value(self) -> None:
        """Quality tiers interpolate differently off the lattice."""
        fast = gradient_coherent_noise(0.3, 0.7, 0.1, 0, NoiseQuality.FAST)
        best = gradient_coherent_noise(0.3, 0.7, 0.1, 0, NoiseQuality.BEST)
        assert fast != best

    def test_output_range_reasonable(self) -> None:
        """Output stays roughly within [-1, 1]."""
        for i in range(200):
            v = gradient_coherent_noise(i * 0.173, i * 0.311, i * 0.057, 0)
            assert -2.0 <= v <= 2.0

    def test_nan_input_gives_nan(self) -> None:
        """Non-finite coordinates propagate as NaN."""
        assert math.isnan(gradient_coherent_noise(math.nan, 0.0, 0.0))
        assert math.isnan(gradient_coherent_noise(0.0, math.inf, 0.0))


class TestValueCoherentNoise:
    """Tests for value coherent noise."""

    def test_matches_lattice_values(self) -> None:
        """On a lattice point the result is that point's value noise."""
        assert value_coherent_noise(2.0, 3.0, 4.0, 9) == value_noise(2, 3, 4, 9)

    def test_output_range(self) -> None:
        """Output stays within [-1, 1]."""
        for i in range(100):
            v = value_coherent_noise(i * 0.37, -i * 0.11, i * 0.05, 2)
            assert -1.0 - 1e-12 <= v <= 1.0 + 1e-12
