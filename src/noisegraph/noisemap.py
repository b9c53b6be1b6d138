"""Sampling module output onto a regular grid.

Samples a module over a rectangle of the y = const plane into a numpy
array, row by row, for terrain heightmaps and texture previews.
"""

import numpy as np
import structlog
from numpy.typing import NDArray
from pydantic import BaseModel

from .exceptions import ConfigurationError
from .module import Module

logger = structlog.get_logger()


class PlaneBounds(BaseModel, frozen=True):
    """Rectangle on the sampling plane, in module coordinates."""

    lower_x: float = -1.0
    upper_x: float = 1.0
    lower_z: float = -1.0
    upper_z: float = 1.0

    def validate_extent(self) -> None:
        """Check that the rectangle has positive width and depth.

        Raises:
            ConfigurationError: If a lower bound is not below its upper bound.
        """
        if self.lower_x >= self.upper_x:
            raise ConfigurationError("lower_x must be less than upper_x")
        if self.lower_z >= self.upper_z:
            raise ConfigurationError("lower_z must be less than upper_z")


def build_plane_map(
    module: Module,
    width: int,
    height: int,
    bounds: PlaneBounds | None = None,
    y: float = 0.0,
) -> NDArray[np.float64]:
    """Sample a module over a rectangle of the plane at height ``y``.

    Column ``i`` samples x = lower_x + i * (upper_x - lower_x) / width and
    row ``j`` samples z = lower_z + j * (upper_z - lower_z) / height, so
    the upper bounds themselves are not sampled.

    Args:
        module: Fully wired module to sample.
        width: Number of samples along x.
        height: Number of samples along z.
        bounds: Sampled rectangle, defaults to [-1, 1] on both axes.
        y: Plane height.

    Returns:
        Array of shape (height, width) with the module output.

    Raises:
        ConfigurationError: If the size or bounds are invalid.
        MissingSourceError: If the module graph is not fully wired.
    """
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Map size must be positive, got {width}x{height}")
    if bounds is None:
        bounds = PlaneBounds()
    bounds.validate_extent()

    x_delta = (bounds.upper_x - bounds.lower_x) / width
    z_delta = (bounds.upper_z - bounds.lower_z) / height
    xs = bounds.lower_x + np.arange(width, dtype=np.float64) * x_delta
    zs = bounds.lower_z + np.arange(height, dtype=np.float64) * z_delta

    result = np.empty((height, width), dtype=np.float64)
    for row, z in enumerate(zs.tolist()):
        for col, x in enumerate(xs.tolist()):
            result[row, col] = module.evaluate(x, y, z)

    logger.info(
        "plane_map_built",
        module=type(module).__name__,
        width=width,
        height=height,
    )
    return result
