"""Coherent noise primitives.

Provides the integer lattice hashes, gradient and value coherent noise,
and the interpolation curves used by every generator module.

All functions here are pure: the same arguments always produce the same
result, bit for bit, regardless of call history. Integer arithmetic is
masked to reproduce 32-bit wraparound so lattice hashes match other
implementations of the same algorithm.
"""

import math

from .types import NoiseQuality
from .vectors import RANDOM_VECTORS

# Lattice hash multipliers
X_NOISE_GEN = 1619
Y_NOISE_GEN = 31337
Z_NOISE_GEN = 6971
SEED_NOISE_GEN = 1013
SHIFT_NOISE_GEN = 8

_INT32_RANGE = 1073741824.0  # 2^30


def linear_interp(n0: float, n1: float, a: float) -> float:
    """Linear interpolation between n0 (a=0) and n1 (a=1)."""
    return ((1.0 - a) * n0) + (a * n1)


def cubic_interp(n0: float, n1: float, n2: float, n3: float, a: float) -> float:
    """Cubic interpolation between n1 (a=0) and n2 (a=1).

    n0 and n3 are the values just outside the interpolated span and shape
    the tangents at either end.
    """
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    return p * a * a * a + q * a * a + r * a + n1


def s_curve3(a: float) -> float:
    """Cubic S-curve: 3a^2 - 2a^3."""
    return a * a * (3.0 - 2.0 * a)


def s_curve5(a: float) -> float:
    """Quintic S-curve: 6a^5 - 15a^4 + 10a^3."""
    a3 = a * a * a
    a4 = a3 * a
    a5 = a4 * a
    return (6.0 * a5) - (15.0 * a4) + (10.0 * a3)


def make_int32_range(n: float) -> float:
    """Fold a coordinate into the range a 32-bit lattice index can address.

    Values in [-2^30, 2^30) are returned unchanged. Larger magnitudes are
    folded back into that range so that the lattice arithmetic downstream
    never depends on float width.

    Args:
        n: Coordinate to fold.

    Returns:
        Folded coordinate in [-2^30, 2^30). Non-finite input is returned as is.
    """
    if math.isinf(n):
        return n
    if n >= _INT32_RANGE:
        # 2 * fmod(n, 2^29) == fmod(2n, 2^30) exactly, without overflowing 2n
        return 2.0 * math.fmod(n, _INT32_RANGE / 2.0) - _INT32_RANGE
    if n < -_INT32_RANGE:
        folded = 2.0 * math.fmod(n, _INT32_RANGE / 2.0) + _INT32_RANGE
        if folded >= _INT32_RANGE:
            return -_INT32_RANGE
        return folded
    return n


def lattice_floor(n: float) -> int:
    """Lower lattice index for a coordinate.

    Non-positive values step down one cell even when already integral,
    matching the reference lattice layout.
    """
    return int(n) if n > 0.0 else int(n) - 1


def int_value_noise(ix: int, iy: int, iz: int, seed: int) -> int:
    """Integer hash of a lattice point.

    Returns:
        Pseudo-random integer in [0, 2^31).
    """
    n = (
        X_NOISE_GEN * ix + Y_NOISE_GEN * iy + Z_NOISE_GEN * iz + SEED_NOISE_GEN * seed
    ) & 0x7FFFFFFF
    n = (n >> 13) ^ n
    return (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7FFFFFFF


def value_noise(ix: int, iy: int, iz: int, seed: int) -> float:
    """Pseudo-random value in [-1, 1] for a lattice point."""
    return 1.0 - (int_value_noise(ix, iy, iz, seed) / 1073741824.0)


def gradient_noise(
    fx: float,
    fy: float,
    fz: float,
    ix: int,
    iy: int,
    iz: int,
    seed: int,
) -> float:
    """Gradient noise contribution of one lattice point.

    Picks a pseudo-random unit gradient for the lattice point (ix, iy, iz)
    and returns its dot product with the offset from that point to
    (fx, fy, fz).

    Args:
        fx, fy, fz: Sample position.
        ix, iy, iz: Lattice point near the sample position.
        seed: Noise seed.

    Returns:
        Gradient noise value, roughly in [-1, 1] for offsets within a cell.
    """
    vector_index = (
        X_NOISE_GEN * ix + Y_NOISE_GEN * iy + Z_NOISE_GEN * iz + SEED_NOISE_GEN * seed
    ) & 0xFFFFFFFF
    vector_index ^= vector_index >> SHIFT_NOISE_GEN
    vector_index &= 0xFF

    offset = vector_index << 2
    xv_gradient = RANDOM_VECTORS[offset]
    yv_gradient = RANDOM_VECTORS[offset + 1]
    zv_gradient = RANDOM_VECTORS[offset + 2]

    xv_point = fx - ix
    yv_point = fy - iy
    zv_point = fz - iz

    return (
        (xv_gradient * xv_point) + (yv_gradient * yv_point) + (zv_gradient * zv_point)
    ) * 2.12


def _map_curve(t: float, quality: NoiseQuality) -> float:
    if quality == NoiseQuality.FAST:
        return t
    if quality == NoiseQuality.STANDARD:
        return s_curve3(t)
    return s_curve5(t)


def gradient_coherent_noise(
    x: float,
    y: float,
    z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STANDARD,
) -> float:
    """Gradient coherent noise at a point.

    Combines the gradient noise of the eight lattice corners of the unit
    cube containing (x, y, z), weighted along each axis by the curve
    selected by ``quality``. The result is zero on every lattice point.

    Args:
        x, y, z: Sample position, already folded with make_int32_range.
        seed: Noise seed.
        quality: Interpolation tier.

    Returns:
        Noise value, roughly in [-1, 1]. NaN for non-finite input.
    """
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    x0 = lattice_floor(x)
    x1 = x0 + 1
    y0 = lattice_floor(y)
    y1 = y0 + 1
    z0 = lattice_floor(z)
    z1 = z0 + 1

    xs = _map_curve(x - x0, quality)
    ys = _map_curve(y - y0, quality)
    zs = _map_curve(z - z0, quality)

    n0 = gradient_noise(x, y, z, x0, y0, z0, seed)
    n1 = gradient_noise(x, y, z, x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise(x, y, z, x0, y1, z0, seed)
    n1 = gradient_noise(x, y, z, x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)

    n0 = gradient_noise(x, y, z, x0, y0, z1, seed)
    n1 = gradient_noise(x, y, z, x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise(x, y, z, x0, y1, z1, seed)
    n1 = gradient_noise(x, y, z, x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)


def value_coherent_noise(
    x: float,
    y: float,
    z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STANDARD,
) -> float:
    """Value coherent noise at a point.

    Like gradient_coherent_noise, but interpolates the lattice corner
    values themselves, so the result is not pinned to zero on lattice
    points.

    Returns:
        Noise value in [-1, 1]. NaN for non-finite input.
    """
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    x0 = lattice_floor(x)
    x1 = x0 + 1
    y0 = lattice_floor(y)
    y1 = y0 + 1
    z0 = lattice_floor(z)
    z1 = z0 + 1

    xs = _map_curve(x - x0, quality)
    ys = _map_curve(y - y0, quality)
    zs = _map_curve(z - z0, quality)

    ix0 = linear_interp(value_noise(x0, y0, z0, seed), value_noise(x1, y0, z0, seed), xs)
    ix1 = linear_interp(value_noise(x0, y1, z0, seed), value_noise(x1, y1, z0, seed), xs)
    iy0 = linear_interp(ix0, ix1, ys)
    ix0 = linear_interp(value_noise(x0, y0, z1, seed), value_noise(x1, y0, z1, seed), xs)
    ix1 = linear_interp(value_noise(x0, y1, z1, seed), value_noise(x1, y1, z1, seed), xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)
