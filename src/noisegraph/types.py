"""Core types for coherent noise generation."""

import math
import numbers
from enum import IntEnum

from .exceptions import ConfigurationError


class NoiseQuality(IntEnum):
    """Interpolation tier used when sampling the noise lattice.

    FAST uses linear interpolation, STANDARD a cubic S-curve and BEST a
    quintic S-curve. Higher tiers remove the visible lattice artifacts of
    the lower ones at the cost of a few extra multiplications.
    """

    FAST = 0
    STANDARD = 1
    BEST = 2

    @classmethod
    def coerce(cls, value: "NoiseQuality | int | str") -> "NoiseQuality":
        """Accept an enum member, its integer value, or its name (any case).

        Raises:
            ConfigurationError: If value names no quality tier.
        """
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ConfigurationError(f"Unknown noise quality: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Unknown noise quality: {value!r}") from None


# Limits shared by the fractal generators
MAX_OCTAVE_COUNT = 30

SQRT_3 = 1.7320508075688772935
DEG_TO_RAD = 3.1415926535897932385 / 180.0


def check_float(name: str, value: object) -> float:
    """Validate a real-valued parameter.

    Raises:
        ConfigurationError: If value is not a real number (bools excluded).
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    return float(value)


def check_int(name: str, value: object) -> int:
    """Validate an integer parameter. Integral floats such as 3.0 are accepted.

    Raises:
        ConfigurationError: If value is not a whole number.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if not (math.isfinite(value) and float(value).is_integer()):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(value)


def check_bool(name: str, value: object) -> bool:
    """Validate a flag parameter.

    Raises:
        ConfigurationError: If value is not a bool.
    """
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")
    return value
