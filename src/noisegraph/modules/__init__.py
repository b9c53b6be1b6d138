"""Noise module implementations.

Generators produce noise from coordinates alone, combiners merge several
sources, modifiers reshape one source and transformers move the input
coordinate before sampling one.
"""

from .combiners import (
    Add,
    Blend,
    Displace,
    Max,
    Min,
    Multiply,
    Power,
    Select,
    Subtract,
)
from .generators import (
    Billow,
    Checkerboard,
    Const,
    Cylinders,
    Perlin,
    RidgedMulti,
    Spheres,
    Voronoi,
)
from .modifiers import (
    Abs,
    Clamp,
    Curve,
    Exponent,
    Invert,
    ScaleBias,
    Terrace,
)
from .transformers import RotatePoint, ScalePoint, TranslatePoint, Turbulence

__all__ = [
    # Generators
    "Billow",
    "Checkerboard",
    "Const",
    "Cylinders",
    "Perlin",
    "RidgedMulti",
    "Spheres",
    "Voronoi",
    # Combiners
    "Add",
    "Blend",
    "Displace",
    "Max",
    "Min",
    "Multiply",
    "Power",
    "Select",
    "Subtract",
    # Modifiers
    "Abs",
    "Clamp",
    "Curve",
    "Exponent",
    "Invert",
    "ScaleBias",
    "Terrace",
    # Transformers
    "RotatePoint",
    "ScalePoint",
    "TranslatePoint",
    "Turbulence",
]
