"""Composable coherent noise modules."""

from .config import GraphConfig, NodeConfig, find_config, list_configs, load_config
from .core import (
    gradient_coherent_noise,
    make_int32_range,
    value_coherent_noise,
    value_noise,
)
from .exceptions import ConfigurationError, MissingSourceError, NoiseError
from .graph import MODULE_TYPES, build_graph, build_graph_nodes
from .module import Module
from .modules import (
    Abs,
    Add,
    Billow,
    Blend,
    Checkerboard,
    Clamp,
    Const,
    Curve,
    Cylinders,
    Displace,
    Exponent,
    Invert,
    Max,
    Min,
    Multiply,
    Perlin,
    Power,
    RidgedMulti,
    RotatePoint,
    ScaleBias,
    ScalePoint,
    Select,
    Spheres,
    Subtract,
    Terrace,
    TranslatePoint,
    Turbulence,
    Voronoi,
)
from .noisemap import PlaneBounds, build_plane_map
from .types import NoiseQuality

__all__ = [
    # Types
    "Module",
    "NoiseQuality",
    # Core
    "gradient_coherent_noise",
    "make_int32_range",
    "value_coherent_noise",
    "value_noise",
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
    # Graph assembly
    "GraphConfig",
    "NodeConfig",
    "MODULE_TYPES",
    "build_graph",
    "build_graph_nodes",
    "find_config",
    "list_configs",
    "load_config",
    # Noise maps
    "PlaneBounds",
    "build_plane_map",
    # Exceptions
    "NoiseError",
    "ConfigurationError",
    "MissingSourceError",
]
