"""Combiner modules: derive one value from two or more source modules.

Every declared source slot must be set before evaluation.
"""

import math

from ..core import linear_interp, s_curve3
from ..exceptions import ConfigurationError
from ..module import Module
from ..types import check_float


class Add(Module):
    """Sum of two sources."""

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(x, y, z) + self._sources[1].evaluate(x, y, z)


class Subtract(Module):
    """First source minus the second."""

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(x, y, z) - self._sources[1].evaluate(x, y, z)


class Multiply(Module):
    """Product of two sources."""

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(x, y, z) * self._sources[1].evaluate(x, y, z)


class Min(Module):
    """Smaller of two sources."""

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        v0 = self._sources[0].evaluate(x, y, z)
        v1 = self._sources[1].evaluate(x, y, z)
        return v0 if v0 < v1 else v1


class Max(Module):
    """Larger of two sources."""

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        v0 = self._sources[0].evaluate(x, y, z)
        v1 = self._sources[1].evaluate(x, y, z)
        return v0 if v0 > v1 else v1


def ieee_pow(base: float, exponent: float) -> float:
    """Floating-point power with IEEE 754 results instead of exceptions.

    A negative base with a fractional exponent gives NaN, overflow gives
    infinity and zero to a negative power gives infinity.
    """
    try:
        result = math.pow(base, exponent)
    except ValueError:
        if base == 0.0:
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan
    except OverflowError:
        if base < 0.0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    return result


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and math.fmod(value, 2.0) != 0.0


class Power(Module):
    """First source raised to the power of the second.

    Invalid combinations propagate as NaN or infinity.
    """

    source_count = 2

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return ieee_pow(self._sources[0].evaluate(x, y, z), self._sources[1].evaluate(x, y, z))


class Blend(Module):
    """Linear blend of the first two sources, weighted by the third.

    A control value of -1 gives the first source, +1 the second.
    """

    source_count = 3

    @property
    def control_module(self) -> Module:
        return self.get_source(2)

    @control_module.setter
    def control_module(self, module: Module) -> None:
        self.set_source(2, module)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        v0 = self._sources[0].evaluate(x, y, z)
        v1 = self._sources[1].evaluate(x, y, z)
        alpha = (self._sources[2].evaluate(x, y, z) + 1.0) / 2.0
        return linear_interp(v0, v1, alpha)


class Select(Module):
    """Chooses between two sources based on a control source.

    Where the control value lies within [lower_bound, upper_bound] the
    output is the second source, elsewhere the first. A positive
    ``edge_falloff`` smooths each boundary with a cubic S-curve across
    ``±edge_falloff``; the falloff is capped at half the band width so the
    two transitions never overlap.
    """

    source_count = 3

    DEFAULT_EDGE_FALLOFF = 0.0
    DEFAULT_LOWER_BOUND = -1.0
    DEFAULT_UPPER_BOUND = 1.0

    def __init__(self) -> None:
        super().__init__()
        self._lower_bound = self.DEFAULT_LOWER_BOUND
        self._upper_bound = self.DEFAULT_UPPER_BOUND
        self._edge_falloff = self.DEFAULT_EDGE_FALLOFF

    @property
    def control_module(self) -> Module:
        return self.get_source(2)

    @control_module.setter
    def control_module(self, module: Module) -> None:
        self.set_source(2, module)

    @property
    def lower_bound(self) -> float:
        return self._lower_bound

    @property
    def upper_bound(self) -> float:
        return self._upper_bound

    @property
    def bounds(self) -> tuple[float, float]:
        return (self._lower_bound, self._upper_bound)

    @bounds.setter
    def bounds(self, value: tuple[float, float]) -> None:
        try:
            lower, upper = value
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"bounds must be a (lower, upper) pair, got {value!r}"
            ) from None
        self.set_bounds(lower, upper)

    def set_bounds(self, lower_bound: float, upper_bound: float) -> None:
        """Set the selection band.

        Raises:
            ConfigurationError: If a bound is not a number or
                lower_bound > upper_bound.
        """
        lower_bound = check_float("lower_bound", lower_bound)
        upper_bound = check_float("upper_bound", upper_bound)
        if lower_bound > upper_bound:
            raise ConfigurationError(
                f"lower_bound {lower_bound} is greater than upper_bound {upper_bound}"
            )
        self._lower_bound = lower_bound
        self._upper_bound = upper_bound
        # Re-cap the falloff against the new band width
        self.edge_falloff = self._edge_falloff

    @property
    def edge_falloff(self) -> float:
        return self._edge_falloff

    @edge_falloff.setter
    def edge_falloff(self, value: float) -> None:
        value = check_float("edge_falloff", value)
        half_band = (self._upper_bound - self._lower_bound) / 2.0
        self._edge_falloff = half_band if value > half_band else value

    def _evaluate(self, x: float, y: float, z: float) -> float:
        control_value = self._sources[2].evaluate(x, y, z)
        lower = self._lower_bound
        upper = self._upper_bound
        falloff = self._edge_falloff

        if falloff > 0.0:
            if control_value < (lower - falloff):
                return self._sources[0].evaluate(x, y, z)

            if control_value < (lower + falloff):
                lower_curve = lower - falloff
                upper_curve = lower + falloff
                alpha = s_curve3((control_value - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._sources[0].evaluate(x, y, z),
                    self._sources[1].evaluate(x, y, z),
                    alpha,
                )

            if control_value < (upper - falloff):
                return self._sources[1].evaluate(x, y, z)

            if control_value < (upper + falloff):
                lower_curve = upper - falloff
                upper_curve = upper + falloff
                alpha = s_curve3((control_value - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._sources[1].evaluate(x, y, z),
                    self._sources[0].evaluate(x, y, z),
                    alpha,
                )

            return self._sources[0].evaluate(x, y, z)

        if control_value < lower or control_value > upper:
            return self._sources[0].evaluate(x, y, z)
        return self._sources[1].evaluate(x, y, z)


class Displace(Module):
    """Evaluates the first source at a coordinate offset by three others.

    Sources 1, 2 and 3 supply the x, y and z displacements.
    """

    source_count = 4

    @property
    def x_displace_module(self) -> Module:
        return self.get_source(1)

    @x_displace_module.setter
    def x_displace_module(self, module: Module) -> None:
        self.set_source(1, module)

    @property
    def y_displace_module(self) -> Module:
        return self.get_source(2)

    @y_displace_module.setter
    def y_displace_module(self, module: Module) -> None:
        self.set_source(2, module)

    @property
    def z_displace_module(self) -> Module:
        return self.get_source(3)

    @z_displace_module.setter
    def z_displace_module(self, module: Module) -> None:
        self.set_source(3, module)

    def set_displace_modules(self, x_module: Module, y_module: Module, z_module: Module) -> None:
        self.x_displace_module = x_module
        self.y_displace_module = y_module
        self.z_displace_module = z_module

    def _evaluate(self, x: float, y: float, z: float) -> float:
        x_displace = x + self._sources[1].evaluate(x, y, z)
        y_displace = y + self._sources[2].evaluate(x, y, z)
        z_displace = z + self._sources[3].evaluate(x, y, z)
        return self._sources[0].evaluate(x_displace, y_displace, z_displace)
