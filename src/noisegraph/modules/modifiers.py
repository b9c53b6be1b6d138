"""Modifier modules: reshape the output of a single source module."""

import bisect

import structlog

from ..core import cubic_interp, linear_interp
from ..exceptions import ConfigurationError
from ..module import Module
from ..types import check_bool, check_float
from .combiners import ieee_pow

logger = structlog.get_logger()


class Abs(Module):
    """Absolute value of the source."""

    source_count = 1

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return abs(self._sources[0].evaluate(x, y, z))


class Invert(Module):
    """Negated source output."""

    source_count = 1

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return -self._sources[0].evaluate(x, y, z)


class ScaleBias(Module):
    """Source output multiplied by ``scale`` then offset by ``bias``."""

    source_count = 1

    def __init__(self, scale: float = 1.0, bias: float = 0.0) -> None:
        super().__init__()
        self.scale = scale
        self.bias = bias

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = check_float("scale", value)

    @property
    def bias(self) -> float:
        return self._bias

    @bias.setter
    def bias(self, value: float) -> None:
        self._bias = check_float("bias", value)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(x, y, z) * self._scale + self._bias


class Exponent(Module):
    """Applies an exponential curve to the source output.

    The source is assumed to lie in [-1, 1]; it is mapped to [0, 1],
    raised to ``exponent`` and mapped back.
    """

    source_count = 1

    def __init__(self, exponent: float = 1.0) -> None:
        super().__init__()
        self.exponent = exponent

    @property
    def exponent(self) -> float:
        return self._exponent

    @exponent.setter
    def exponent(self, value: float) -> None:
        self._exponent = check_float("exponent", value)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        value = self._sources[0].evaluate(x, y, z)
        return ieee_pow(abs((value + 1.0) / 2.0), self._exponent) * 2.0 - 1.0


class Clamp(Module):
    """Clips the source output to [lower_bound, upper_bound]."""

    source_count = 1

    DEFAULT_LOWER_BOUND = -1.0
    DEFAULT_UPPER_BOUND = 1.0

    def __init__(
        self,
        lower_bound: float = DEFAULT_LOWER_BOUND,
        upper_bound: float = DEFAULT_UPPER_BOUND,
    ) -> None:
        super().__init__()
        self.set_bounds(lower_bound, upper_bound)

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
        """Set the clamping range.

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

    def _evaluate(self, x: float, y: float, z: float) -> float:
        value = self._sources[0].evaluate(x, y, z)
        if value < self._lower_bound:
            return self._lower_bound
        if value > self._upper_bound:
            return self._upper_bound
        return value


class Terrace(Module):
    """Maps the source output onto a terrace-forming curve.

    The curve passes through each control point and flattens just after
    it, producing plateaus separated by steep rises. With
    ``invert_terraces`` the curve flattens just before each control point
    instead.
    """

    source_count = 1

    def __init__(self) -> None:
        super().__init__()
        self._control_points: list[float] = []
        self._invert_terraces = False

    @property
    def invert_terraces(self) -> bool:
        """Whether the curve flattens before each control point instead of after."""
        return self._invert_terraces

    @invert_terraces.setter
    def invert_terraces(self, value: bool) -> None:
        self._invert_terraces = check_bool("invert_terraces", value)

    @property
    def control_points(self) -> tuple[float, ...]:
        """Control points in increasing order."""
        return tuple(self._control_points)

    def control_point_count(self) -> int:
        return len(self._control_points)

    def add_control_point(self, value: float) -> None:
        """Insert a control point, keeping the list sorted.

        Raises:
            ConfigurationError: If a control point with this value exists.
        """
        value = check_float("control point", value)
        pos = bisect.bisect_left(self._control_points, value)
        if pos < len(self._control_points) and self._control_points[pos] == value:
            raise ConfigurationError(f"Duplicate terrace control point: {value}")
        self._control_points.insert(pos, value)

    def clear_control_points(self) -> None:
        self._control_points.clear()

    def make_control_points(self, count: int) -> None:
        """Replace the control points with ``count`` evenly spaced over [-1, 1].

        Raises:
            ConfigurationError: If count < 2.
        """
        if count < 2:
            raise ConfigurationError(f"Terrace needs at least 2 control points, got {count}")

        self.clear_control_points()
        terrace_step = 2.0 / (count - 1.0)
        cur_value = -1.0
        for _ in range(count):
            self.add_control_point(cur_value)
            cur_value += terrace_step
        logger.debug("terrace_points_generated", count=count)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        points = self._control_points
        count = len(points)
        if count < 2:
            raise ConfigurationError(
                f"Terrace needs at least 2 control points to evaluate, has {count}"
            )

        source_value = self._sources[0].evaluate(x, y, z)

        # First control point strictly greater than the source value
        index_pos = bisect.bisect_right(points, source_value)
        index0 = min(max(index_pos - 1, 0), count - 1)
        index1 = min(max(index_pos, 0), count - 1)

        # Outside the control point range: snap to the nearest end
        if index0 == index1:
            return points[index1]

        value0 = points[index0]
        value1 = points[index1]
        alpha = (source_value - value0) / (value1 - value0)
        if self._invert_terraces:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0

        alpha *= alpha
        return linear_interp(value0, value1, alpha)


class Curve(Module):
    """Maps the source output onto an arbitrary curve.

    The curve is defined by (input, output) control points and
    interpolated with a cubic spline through neighbouring points. At least
    four control points are needed.
    """

    source_count = 1

    def __init__(self) -> None:
        super().__init__()
        self._inputs: list[float] = []
        self._outputs: list[float] = []

    @property
    def control_points(self) -> tuple[tuple[float, float], ...]:
        """(input, output) pairs in increasing input order."""
        return tuple(zip(self._inputs, self._outputs))

    def control_point_count(self) -> int:
        return len(self._inputs)

    def add_control_point(self, input_value: float, output_value: float) -> None:
        """Insert a control point, keeping inputs sorted.

        Raises:
            ConfigurationError: If a control point with this input exists.
        """
        input_value = check_float("control point input", input_value)
        output_value = check_float("control point output", output_value)
        pos = bisect.bisect_left(self._inputs, input_value)
        if pos < len(self._inputs) and self._inputs[pos] == input_value:
            raise ConfigurationError(f"Duplicate curve control point input: {input_value}")
        self._inputs.insert(pos, input_value)
        self._outputs.insert(pos, output_value)

    def clear_control_points(self) -> None:
        self._inputs.clear()
        self._outputs.clear()

    def _evaluate(self, x: float, y: float, z: float) -> float:
        count = len(self._inputs)
        if count < 4:
            raise ConfigurationError(
                f"Curve needs at least 4 control points to evaluate, has {count}"
            )

        source_value = self._sources[0].evaluate(x, y, z)

        index_pos = bisect.bisect_right(self._inputs, source_value)
        last = count - 1
        index0 = min(max(index_pos - 2, 0), last)
        index1 = min(max(index_pos - 1, 0), last)
        index2 = min(max(index_pos, 0), last)
        index3 = min(max(index_pos + 1, 0), last)

        if index1 == index2:
            return self._outputs[index1]

        input0 = self._inputs[index1]
        input1 = self._inputs[index2]
        alpha = (source_value - input0) / (input1 - input0)

        return cubic_interp(
            self._outputs[index0],
            self._outputs[index1],
            self._outputs[index2],
            self._outputs[index3],
            alpha,
        )
