"""Generator modules: sources that produce noise directly from coordinates.

Provides fractal gradient noise (Perlin, Billow, RidgedMulti), cellular
noise (Voronoi), and simple test patterns (Checkerboard, Const,
Cylinders, Spheres). Generators have no source slots.
"""

import math

from ..core import (
    gradient_coherent_noise,
    lattice_floor,
    make_int32_range,
    value_noise,
)
from ..exceptions import ConfigurationError
from ..module import Module
from ..types import (
    MAX_OCTAVE_COUNT,
    SQRT_3,
    NoiseQuality,
    check_bool,
    check_float,
    check_int,
)

DEFAULT_FREQUENCY = 1.0
DEFAULT_LACUNARITY = 2.0
DEFAULT_OCTAVE_COUNT = 6
DEFAULT_PERSISTENCE = 0.5
DEFAULT_SEED = 0
DEFAULT_QUALITY = NoiseQuality.STANDARD


def check_octave_count(octave_count: int) -> int:
    """Validate an octave count.

    Raises:
        ConfigurationError: If octave_count is not a whole number in
            [1, MAX_OCTAVE_COUNT].
    """
    octave_count = check_int("octave_count", octave_count)
    if not 1 <= octave_count <= MAX_OCTAVE_COUNT:
        raise ConfigurationError(
            f"octave_count must be between 1 and {MAX_OCTAVE_COUNT}, got {octave_count}"
        )
    return octave_count


def check_seed(seed: int) -> int:
    """Validate a 32-bit seed.

    Raises:
        ConfigurationError: If seed is not a whole number that fits a
            signed 32-bit integer.
    """
    seed = check_int("seed", seed)
    if not -(2**31) <= seed < 2**31:
        raise ConfigurationError(f"seed must fit in 32 bits, got {seed}")
    return seed


def octave_seed(seed: int, octave: int) -> int:
    """Seed for one octave, kept non-negative."""
    return (seed + octave) & 0x7FFFFFFF


class _FractalGenerator(Module):
    """Shared parameters for octave-summing gradient noise."""

    def __init__(self) -> None:
        super().__init__()
        self._frequency = DEFAULT_FREQUENCY
        self._lacunarity = DEFAULT_LACUNARITY
        self._octave_count = DEFAULT_OCTAVE_COUNT
        self._persistence = DEFAULT_PERSISTENCE
        self._seed = DEFAULT_SEED
        self._quality = DEFAULT_QUALITY

    @property
    def frequency(self) -> float:
        """Frequency of the first octave."""
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = check_float("frequency", value)

    @property
    def lacunarity(self) -> float:
        """Frequency multiplier between successive octaves."""
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = check_float("lacunarity", value)

    @property
    def octave_count(self) -> int:
        """Number of octaves summed, in [1, 30]."""
        return self._octave_count

    @octave_count.setter
    def octave_count(self, value: int) -> None:
        self._octave_count = check_octave_count(value)

    @property
    def persistence(self) -> float:
        """Amplitude multiplier between successive octaves."""
        return self._persistence

    @persistence.setter
    def persistence(self, value: float) -> None:
        self._persistence = check_float("persistence", value)

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = check_seed(value)

    @property
    def quality(self) -> NoiseQuality:
        return self._quality

    @quality.setter
    def quality(self, value: NoiseQuality | int | str) -> None:
        self._quality = NoiseQuality.coerce(value)


class Perlin(_FractalGenerator):
    """Fractal sum of gradient coherent noise.

    Each octave samples at ``lacunarity`` times the previous frequency and
    contributes ``persistence`` times the previous amplitude. Output is
    unbounded in principle but stays close to [-1, 1] with the default
    persistence.
    """

    def _evaluate(self, x: float, y: float, z: float) -> float:
        value = 0.0
        cur_persistence = 1.0

        x *= self._frequency
        y *= self._frequency
        z *= self._frequency

        for octave in range(self._octave_count):
            nx = make_int32_range(x)
            ny = make_int32_range(y)
            nz = make_int32_range(z)

            signal = gradient_coherent_noise(
                nx, ny, nz, octave_seed(self._seed, octave), self._quality
            )
            value += signal * cur_persistence

            x *= self._lacunarity
            y *= self._lacunarity
            z *= self._lacunarity
            cur_persistence *= self._persistence

        return value


class Billow(_FractalGenerator):
    """Perlin variant that folds each octave into billowy lumps.

    Every octave signal is replaced by ``2 * |signal| - 1`` before it is
    summed, giving rounded, cloud-like bumps.
    """

    def _evaluate(self, x: float, y: float, z: float) -> float:
        value = 0.0
        cur_persistence = 1.0

        x *= self._frequency
        y *= self._frequency
        z *= self._frequency

        for octave in range(self._octave_count):
            nx = make_int32_range(x)
            ny = make_int32_range(y)
            nz = make_int32_range(z)

            signal = gradient_coherent_noise(
                nx, ny, nz, octave_seed(self._seed, octave), self._quality
            )
            signal = 2.0 * abs(signal) - 1.0
            value += signal * cur_persistence

            x *= self._lacunarity
            y *= self._lacunarity
            z *= self._lacunarity
            cur_persistence *= self._persistence

        return value + 0.5


class RidgedMulti(Module):
    """Ridged multifractal noise.

    Each octave turns the noise into ridges with ``(1 - |noise|)^2`` and
    weights it by the previous octave's signal, so detail accumulates on
    ridge crests and valleys stay smooth. The per-octave spectral weights
    depend on lacunarity and are recomputed whenever it changes.
    """

    # Spectral exponent and feedback gain of the ridge signal
    SPECTRAL_EXPONENT = 1.0
    OFFSET = 1.0
    GAIN = 2.0

    def __init__(self) -> None:
        super().__init__()
        self._frequency = DEFAULT_FREQUENCY
        self._octave_count = DEFAULT_OCTAVE_COUNT
        self._seed = DEFAULT_SEED
        self._quality = DEFAULT_QUALITY
        self._spectral_weights: tuple[float, ...] = ()
        self.lacunarity = DEFAULT_LACUNARITY

    @property
    def frequency(self) -> float:
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = check_float("frequency", value)

    @property
    def lacunarity(self) -> float:
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = check_float("lacunarity", value)
        self._spectral_weights = self._calc_spectral_weights(self._lacunarity)

    @property
    def spectral_weights(self) -> tuple[float, ...]:
        """Weight applied to each octave, one entry per possible octave."""
        return self._spectral_weights

    @property
    def octave_count(self) -> int:
        return self._octave_count

    @octave_count.setter
    def octave_count(self, value: int) -> None:
        self._octave_count = check_octave_count(value)

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = check_seed(value)

    @property
    def quality(self) -> NoiseQuality:
        return self._quality

    @quality.setter
    def quality(self, value: NoiseQuality | int | str) -> None:
        self._quality = NoiseQuality.coerce(value)

    @classmethod
    def _calc_spectral_weights(cls, lacunarity: float) -> tuple[float, ...]:
        weights = []
        frequency = 1.0
        for _ in range(MAX_OCTAVE_COUNT):
            weights.append(math.pow(frequency, -cls.SPECTRAL_EXPONENT))
            frequency *= lacunarity
        return tuple(weights)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        x *= self._frequency
        y *= self._frequency
        z *= self._frequency

        value = 0.0
        weight = 1.0

        for octave in range(self._octave_count):
            nx = make_int32_range(x)
            ny = make_int32_range(y)
            nz = make_int32_range(z)

            signal = gradient_coherent_noise(
                nx, ny, nz, octave_seed(self._seed, octave), self._quality
            )

            # Make the ridges, then sharpen them
            signal = self.OFFSET - abs(signal)
            signal *= signal
            signal *= weight

            weight = signal * self.GAIN
            if weight > 1.0:
                weight = 1.0
            if weight < 0.0:
                weight = 0.0

            value += signal * self._spectral_weights[octave]

            x *= self._lacunarity
            y *= self._lacunarity
            z *= self._lacunarity

        return (value * 1.25) - 1.0


class Voronoi(Module):
    """Cellular noise built from randomly placed seed points.

    One seed point is placed in every unit cube. Each input point takes
    the pseudo-random value of the nearest seed point's cell, scaled by
    ``displacement``. With ``enable_distance`` the distance to that seed
    point is added as well, producing cone-shaped cell interiors.
    """

    DEFAULT_DISPLACEMENT = 1.0

    def __init__(self) -> None:
        super().__init__()
        self._frequency = DEFAULT_FREQUENCY
        self._displacement = self.DEFAULT_DISPLACEMENT
        self._seed = DEFAULT_SEED
        self._enable_distance = False

    @property
    def enable_distance(self) -> bool:
        """Whether the distance to the nearest seed point is added."""
        return self._enable_distance

    @enable_distance.setter
    def enable_distance(self, value: bool) -> None:
        self._enable_distance = check_bool("enable_distance", value)

    @property
    def frequency(self) -> float:
        """Frequency of the seed points."""
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = check_float("frequency", value)

    @property
    def displacement(self) -> float:
        """Scale of the random value assigned to each cell."""
        return self._displacement

    @displacement.setter
    def displacement(self, value: float) -> None:
        self._displacement = check_float("displacement", value)

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = check_seed(value)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        x *= self._frequency
        y *= self._frequency
        z *= self._frequency

        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            return math.nan

        x_int = lattice_floor(x)
        y_int = lattice_floor(y)
        z_int = lattice_floor(z)

        seed = self._seed
        min_dist = 2147483647.0
        x_candidate = 0.0
        y_candidate = 0.0
        z_candidate = 0.0

        # Scan the 5x5x5 block of cubes around the point for the nearest seed
        for z_cur in range(z_int - 2, z_int + 3):
            for y_cur in range(y_int - 2, y_int + 3):
                for x_cur in range(x_int - 2, x_int + 3):
                    x_pos = x_cur + value_noise(x_cur, y_cur, z_cur, seed)
                    y_pos = y_cur + value_noise(x_cur, y_cur, z_cur, seed + 1)
                    z_pos = z_cur + value_noise(x_cur, y_cur, z_cur, seed + 2)
                    x_dist = x_pos - x
                    y_dist = y_pos - y
                    z_dist = z_pos - z
                    dist = x_dist * x_dist + y_dist * y_dist + z_dist * z_dist

                    if dist < min_dist:
                        min_dist = dist
                        x_candidate = x_pos
                        y_candidate = y_pos
                        z_candidate = z_pos

        if self._enable_distance:
            x_dist = x_candidate - x
            y_dist = y_candidate - y
            z_dist = z_candidate - z
            value = math.sqrt(x_dist * x_dist + y_dist * y_dist + z_dist * z_dist) * SQRT_3 - 1.0
        else:
            value = 0.0

        return value + self._displacement * value_noise(
            math.floor(x_candidate),
            math.floor(y_candidate),
            math.floor(z_candidate),
            seed,
        )


class Checkerboard(Module):
    """Alternating +1/-1 unit cubes, useful as a test pattern."""

    def _evaluate(self, x: float, y: float, z: float) -> float:
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            return math.nan
        ix = math.floor(make_int32_range(x))
        iy = math.floor(make_int32_range(y))
        iz = math.floor(make_int32_range(z))
        return -1.0 if (ix & 1) ^ (iy & 1) ^ (iz & 1) else 1.0


class Const(Module):
    """Outputs the same value everywhere."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__()
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self._value = check_float("value", value)

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return self._value


class _ConcentricShape(Module):
    """Shared frequency parameter for the concentric shape patterns."""

    def __init__(self) -> None:
        super().__init__()
        self._frequency = DEFAULT_FREQUENCY

    @property
    def frequency(self) -> float:
        """Number of shells per unit distance."""
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = check_float("frequency", value)


class Cylinders(_ConcentricShape):
    """Concentric unit-spaced cylinders around the y axis.

    Output is 1.0 on each cylinder surface and falls to -1.0 halfway
    between neighbouring cylinders.
    """

    def _evaluate(self, x: float, y: float, z: float) -> float:
        x *= self._frequency
        z *= self._frequency

        dist_from_center = math.sqrt(x * x + z * z)
        if not math.isfinite(dist_from_center):
            return math.nan
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest * 4.0)


class Spheres(_ConcentricShape):
    """Concentric unit-spaced spheres around the origin."""

    def _evaluate(self, x: float, y: float, z: float) -> float:
        x *= self._frequency
        y *= self._frequency
        z *= self._frequency

        dist_from_center = math.sqrt(x * x + y * y + z * z)
        if not math.isfinite(dist_from_center):
            return math.nan
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest * 4.0)
