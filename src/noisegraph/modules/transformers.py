"""Transformer modules: alter the input coordinate before sampling a source."""

import math

from ..module import Module
from ..types import DEG_TO_RAD, check_float
from .generators import DEFAULT_FREQUENCY, DEFAULT_SEED, Perlin, check_seed, octave_seed


class ScalePoint(Module):
    """Scales the input coordinate per axis before sampling the source."""

    source_count = 1

    def __init__(self, x_scale: float = 1.0, y_scale: float = 1.0, z_scale: float = 1.0) -> None:
        super().__init__()
        self.set_scale(x_scale, y_scale, z_scale)

    @property
    def x_scale(self) -> float:
        return self._x_scale

    @x_scale.setter
    def x_scale(self, value: float) -> None:
        self._x_scale = check_float("x_scale", value)

    @property
    def y_scale(self) -> float:
        return self._y_scale

    @y_scale.setter
    def y_scale(self, value: float) -> None:
        self._y_scale = check_float("y_scale", value)

    @property
    def z_scale(self) -> float:
        return self._z_scale

    @z_scale.setter
    def z_scale(self, value: float) -> None:
        self._z_scale = check_float("z_scale", value)

    def set_scale(self, x_scale: float, y_scale: float, z_scale: float) -> None:
        x_scale = check_float("x_scale", x_scale)
        y_scale = check_float("y_scale", y_scale)
        z_scale = check_float("z_scale", z_scale)
        self._x_scale, self._y_scale, self._z_scale = x_scale, y_scale, z_scale

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(x * self._x_scale, y * self._y_scale, z * self._z_scale)


class TranslatePoint(Module):
    """Offsets the input coordinate per axis before sampling the source."""

    source_count = 1

    def __init__(
        self,
        x_translation: float = 0.0,
        y_translation: float = 0.0,
        z_translation: float = 0.0,
    ) -> None:
        super().__init__()
        self.set_translation(x_translation, y_translation, z_translation)

    @property
    def x_translation(self) -> float:
        return self._x_translation

    @x_translation.setter
    def x_translation(self, value: float) -> None:
        self._x_translation = check_float("x_translation", value)

    @property
    def y_translation(self) -> float:
        return self._y_translation

    @y_translation.setter
    def y_translation(self, value: float) -> None:
        self._y_translation = check_float("y_translation", value)

    @property
    def z_translation(self) -> float:
        return self._z_translation

    @z_translation.setter
    def z_translation(self, value: float) -> None:
        self._z_translation = check_float("z_translation", value)

    def set_translation(self, x_translation: float, y_translation: float, z_translation: float) -> None:
        x_translation = check_float("x_translation", x_translation)
        y_translation = check_float("y_translation", y_translation)
        z_translation = check_float("z_translation", z_translation)
        self._x_translation = x_translation
        self._y_translation = y_translation
        self._z_translation = z_translation

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._sources[0].evaluate(
            x + self._x_translation,
            y + self._y_translation,
            z + self._z_translation,
        )


class RotatePoint(Module):
    """Rotates the input coordinate around the origin.

    Angles are in degrees. The rotation matrix is rebuilt whenever an
    angle changes.
    """

    source_count = 1

    def __init__(self, x_angle: float = 0.0, y_angle: float = 0.0, z_angle: float = 0.0) -> None:
        super().__init__()
        self.set_angles(x_angle, y_angle, z_angle)

    @property
    def x_angle(self) -> float:
        return self._x_angle

    @x_angle.setter
    def x_angle(self, value: float) -> None:
        self.set_angles(value, self._y_angle, self._z_angle)

    @property
    def y_angle(self) -> float:
        return self._y_angle

    @y_angle.setter
    def y_angle(self, value: float) -> None:
        self.set_angles(self._x_angle, value, self._z_angle)

    @property
    def z_angle(self) -> float:
        return self._z_angle

    @z_angle.setter
    def z_angle(self, value: float) -> None:
        self.set_angles(self._x_angle, self._y_angle, value)

    def set_angles(self, x_angle: float, y_angle: float, z_angle: float) -> None:
        x_angle = check_float("x_angle", x_angle)
        y_angle = check_float("y_angle", y_angle)
        z_angle = check_float("z_angle", z_angle)
        x_cos = math.cos(x_angle * DEG_TO_RAD)
        y_cos = math.cos(y_angle * DEG_TO_RAD)
        z_cos = math.cos(z_angle * DEG_TO_RAD)
        x_sin = math.sin(x_angle * DEG_TO_RAD)
        y_sin = math.sin(y_angle * DEG_TO_RAD)
        z_sin = math.sin(z_angle * DEG_TO_RAD)

        self._matrix = (
            (
                y_sin * x_sin * z_sin + y_cos * z_cos,
                x_cos * z_sin,
                y_sin * z_cos - y_cos * x_sin * z_sin,
            ),
            (
                y_sin * x_sin * z_cos - y_cos * z_sin,
                x_cos * z_cos,
                -y_cos * x_sin * z_cos - y_sin * z_sin,
            ),
            (
                -y_sin * x_cos,
                x_sin,
                y_cos * x_cos,
            ),
        )
        self._x_angle = x_angle
        self._y_angle = y_angle
        self._z_angle = z_angle

    def _evaluate(self, x: float, y: float, z: float) -> float:
        (x1, y1, z1), (x2, y2, z2), (x3, y3, z3) = self._matrix
        nx = (x1 * x) + (y1 * y) + (z1 * z)
        ny = (x2 * x) + (y2 * y) + (z2 * z)
        nz = (x3 * x) + (y3 * y) + (z3 * z)
        return self._sources[0].evaluate(nx, ny, nz)


class Turbulence(Module):
    """Randomly displaces the input coordinate before sampling the source.

    Three internal Perlin modules, one per axis, supply the displacement.
    ``power`` scales it, ``frequency`` sets how quickly it changes and
    ``roughness`` is the octave count of the displacement noise.
    """

    source_count = 1

    DEFAULT_POWER = 1.0
    DEFAULT_ROUGHNESS = 3

    # Sample offsets keep the distortion noise away from lattice points,
    # where gradient noise is always zero.
    X_OFFSETS = (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0)
    Y_OFFSETS = (26519.0 / 65536.0, 18128.0 / 65536.0, 60493.0 / 65536.0)
    Z_OFFSETS = (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0)

    def __init__(self) -> None:
        super().__init__()
        self._power = self.DEFAULT_POWER
        self._x_distort = Perlin()
        self._y_distort = Perlin()
        self._z_distort = Perlin()
        self.frequency = DEFAULT_FREQUENCY
        self.roughness = self.DEFAULT_ROUGHNESS
        self.seed = DEFAULT_SEED

    @property
    def power(self) -> float:
        """Scale of the coordinate displacement."""
        return self._power

    @power.setter
    def power(self, value: float) -> None:
        self._power = check_float("power", value)

    @property
    def frequency(self) -> float:
        """Frequency of the displacement noise."""
        return self._x_distort.frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._x_distort.frequency = value
        self._y_distort.frequency = value
        self._z_distort.frequency = value

    @property
    def roughness(self) -> int:
        """Octave count of the displacement noise."""
        return self._x_distort.octave_count

    @roughness.setter
    def roughness(self, value: int) -> None:
        self._x_distort.octave_count = value
        self._y_distort.octave_count = value
        self._z_distort.octave_count = value

    @property
    def seed(self) -> int:
        return self._x_distort.seed

    @seed.setter
    def seed(self, value: int) -> None:
        value = check_seed(value)
        self._x_distort.seed = value
        self._y_distort.seed = octave_seed(value, 1)
        self._z_distort.seed = octave_seed(value, 2)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        ox, oy, oz = self.X_OFFSETS
        x_distort = x + self._x_distort.evaluate(x + ox, y + oy, z + oz) * self._power
        ox, oy, oz = self.Y_OFFSETS
        y_distort = y + self._y_distort.evaluate(x + ox, y + oy, z + oz) * self._power
        ox, oy, oz = self.Z_OFFSETS
        z_distort = z + self._z_distort.evaluate(x + ox, y + oy, z + oz) * self._power
        return self._sources[0].evaluate(x_distort, y_distort, z_distort)
