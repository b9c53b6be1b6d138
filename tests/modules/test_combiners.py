"""Tests for combiner modules."""

import math

import pytest

from noisegraph.exceptions import ConfigurationError
from noisegraph.modules import (
    Add,
    Blend,
    Const,
    Displace,
    Max,
    Min,
    Multiply,
    Power,
    Select,
    Subtract,
)
from noisegraph.modules.combiners import ieee_pow


def _wire(module, *sources):
    for index, source in enumerate(sources):
        module.set_source(index, source)
    return module


class TestArithmetic:
    """Tests for the two-source arithmetic combiners."""

    @pytest.mark.parametrize(
        "module_cls,expected",
        [(Add, 5.0), (Subtract, -1.0), (Multiply, 6.0), (Min, 2.0), (Max, 3.0)],
    )
    def test_combines_sources(self, const, module_cls, expected: float) -> None:
        """Each combiner applies its operation to source 0 and source 1."""
        module = _wire(module_cls(), const(2.0), const(3.0))
        assert module.evaluate(0.0, 0.0, 0.0) == expected

    def test_follows_coordinates(self, x_axis, y_axis) -> None:
        """Sources are evaluated at the same coordinate."""
        module = _wire(Subtract(), x_axis, y_axis)
        assert module.evaluate(5.0, 2.0, 0.0) == 3.0

    def test_min_prefers_second_on_tie(self, const) -> None:
        """Min and Max compare strictly, so ties return source 1."""
        neg_zero = const(-0.0)
        pos_zero = const(0.0)
        assert math.copysign(1.0, _wire(Min(), neg_zero, pos_zero).evaluate(0, 0, 0)) == 1.0
        assert math.copysign(1.0, _wire(Max(), pos_zero, neg_zero).evaluate(0, 0, 0)) == -1.0


class TestPower:
    """Tests for the Power combiner."""

    def test_power(self, const) -> None:
        """Source 0 is raised to source 1."""
        assert _wire(Power(), const(2.0), const(3.0)).evaluate(0, 0, 0) == 8.0

    def test_negative_base_fractional_exponent(self, const) -> None:
        """Invalid powers give NaN instead of raising."""
        assert math.isnan(_wire(Power(), const(-8.0), const(0.5)).evaluate(0, 0, 0))

    def test_zero_to_negative_power(self, const) -> None:
        """Zero to a negative power gives infinity."""
        assert _wire(Power(), const(0.0), const(-1.0)).evaluate(0, 0, 0) == math.inf

    def test_overflow(self, const) -> None:
        """Overflow gives infinity."""
        assert _wire(Power(), const(10.0), const(400.0)).evaluate(0, 0, 0) == math.inf


class TestIeeePow:
    """Tests for the exception-free power helper."""

    def test_regular_values(self) -> None:
        """Regular inputs match math.pow."""
        assert ieee_pow(3.0, 2.0) == 9.0
        assert ieee_pow(4.0, 0.5) == 2.0

    def test_negative_zero_odd_exponent(self) -> None:
        """Negative zero keeps its sign for odd negative exponents."""
        assert ieee_pow(-0.0, -3.0) == -math.inf
        assert ieee_pow(-0.0, -2.0) == math.inf

    def test_negative_overflow_odd_exponent(self) -> None:
        """Negative bases overflow to negative infinity for odd exponents."""
        assert ieee_pow(-10.0, 401.0) == -math.inf
        assert ieee_pow(-10.0, 400.0) == math.inf


class TestBlend:
    """Tests for the Blend combiner."""

    @pytest.mark.parametrize("control,expected", [(-1.0, 2.0), (1.0, 6.0), (0.0, 4.0), (0.5, 5.0)])
    def test_blend(self, const, control: float, expected: float) -> None:
        """Control -1 selects source 0, +1 source 1, linear in between."""
        module = _wire(Blend(), const(2.0), const(6.0), const(control))
        assert module.evaluate(0.0, 0.0, 0.0) == pytest.approx(expected)

    def test_control_module_property(self, const) -> None:
        """The control module is slot 2."""
        module = Blend()
        control = const(0.0)
        module.control_module = control
        assert module.get_source(2) is control
        assert module.control_module is control


class TestSelect:
    """Tests for the Select combiner."""

    @pytest.fixture
    def control(self, const) -> Const:
        return const(0.0)

    @pytest.fixture
    def select(self, const, control: Const) -> Select:
        module = _wire(Select(), const(-1.0), const(1.0), control)
        module.set_bounds(-0.5, 0.5)
        return module

    def test_defaults(self) -> None:
        """Default band is [-1, 1] with no falloff."""
        module = Select()
        assert module.bounds == (-1.0, 1.0)
        assert module.lower_bound == -1.0
        assert module.upper_bound == 1.0
        assert module.edge_falloff == 0.0

    @pytest.mark.parametrize(
        "value,expected",
        [(-0.6, -1.0), (-0.5, 1.0), (0.0, 1.0), (0.5, 1.0), (0.6, -1.0)],
    )
    def test_hard_edges(self, select: Select, control: Const, value: float, expected: float) -> None:
        """Without falloff the band is inclusive and switches abruptly."""
        control.value = value
        assert select.evaluate(0.0, 0.0, 0.0) == expected

    def test_falloff_blends_at_bound(self, select: Select, control: Const) -> None:
        """Exactly on a bound the falloff gives the midpoint."""
        select.edge_falloff = 0.1
        control.value = -0.5
        assert select.evaluate(0.0, 0.0, 0.0) == pytest.approx(0.0)
        control.value = 0.5
        assert select.evaluate(0.0, 0.0, 0.0) == pytest.approx(0.0)

    @pytest.mark.parametrize("edge", [-0.7, -0.3, 0.3, 0.7])
    def test_falloff_is_continuous(self, select: Select, control: Const, edge: float) -> None:
        """With falloff there is no jump at either end of a transition."""
        select.edge_falloff = 0.2
        control.value = edge - 1e-9
        below = select.evaluate(0.0, 0.0, 0.0)
        control.value = edge + 1e-9
        above = select.evaluate(0.0, 0.0, 0.0)
        assert abs(below - above) < 1e-6

    def test_falloff_outside_band(self, select: Select, control: Const) -> None:
        """Far from the band the first source is returned unchanged."""
        select.edge_falloff = 0.2
        control.value = 5.0
        assert select.evaluate(0.0, 0.0, 0.0) == -1.0
        control.value = 0.0
        assert select.evaluate(0.0, 0.0, 0.0) == 1.0

    def test_falloff_capped_at_half_band(self, select: Select) -> None:
        """Falloff never exceeds half the band width."""
        select.edge_falloff = 2.0
        assert select.edge_falloff == 0.5
        select.set_bounds(0.0, 0.2)
        assert select.edge_falloff == pytest.approx(0.1)

    def test_inverted_bounds_rejected(self, select: Select) -> None:
        """Lower bound above upper bound is rejected."""
        with pytest.raises(ConfigurationError, match="greater than"):
            select.set_bounds(1.0, 0.0)
        assert select.bounds == (-0.5, 0.5)

    def test_bounds_property_setter(self) -> None:
        """Bounds can be set as a pair."""
        module = Select()
        module.bounds = [0.0, 2.0]
        assert module.bounds == (0.0, 2.0)

    @pytest.mark.parametrize("bounds", [0.5, "ab", (None, 1.0)])
    def test_malformed_bounds_rejected(self, select: Select, bounds: object) -> None:
        """Bounds must be a pair of numbers."""
        with pytest.raises(ConfigurationError, match="bound"):
            select.bounds = bounds
        assert select.bounds == (-0.5, 0.5)

    def test_edge_falloff_must_be_number(self, select: Select) -> None:
        """A textual falloff is rejected before it is capped."""
        with pytest.raises(ConfigurationError, match="edge_falloff"):
            select.edge_falloff = "soft"
        assert select.edge_falloff == 0.0


class TestDisplace:
    """Tests for the Displace combiner."""

    def test_offsets_coordinates(self, x_axis, y_axis, z_axis, const) -> None:
        """Source 0 is sampled at the displaced coordinate."""
        module = Displace()
        module.set_source(0, x_axis)
        module.set_displace_modules(const(0.5), const(0.0), const(0.0))
        assert module.evaluate(1.0, 2.0, 3.0) == 1.5

        module.set_source(0, z_axis)
        module.z_displace_module = const(-3.0)
        assert module.evaluate(1.0, 2.0, 3.0) == 0.0

        module.set_source(0, y_axis)
        assert module.y_displace_module.evaluate(0, 0, 0) == 0.0
        assert module.evaluate(1.0, 2.0, 3.0) == 2.0

    def test_displace_module_slots(self, const) -> None:
        """Displacement modules live in slots 1 to 3."""
        module = Displace()
        x_mod, y_mod, z_mod = const(1.0), const(2.0), const(3.0)
        module.set_displace_modules(x_mod, y_mod, z_mod)
        assert module.sources == (None, x_mod, y_mod, z_mod)
