"""Module graph assembly from configuration.

Builds live module graphs from a GraphConfig: one module per node,
parameters applied through the module's public properties, slots wired by
node name. A node referenced by several parents is built once and shared.
"""

import inspect

import structlog

from .config import GraphConfig, NodeConfig
from .exceptions import ConfigurationError
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

logger = structlog.get_logger()

MODULE_TYPES: dict[str, type[Module]] = {
    cls.__name__: cls
    for cls in (
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
}

def create_module(name: str, node: NodeConfig) -> Module:
    """Instantiate and parameterize the module for one node.

    Sources are not wired here; see build_graph_nodes.

    Raises:
        ConfigurationError: If the type is unknown or a parameter or
            control point is invalid for it.
    """
    module_cls = MODULE_TYPES.get(node.type)
    if module_cls is None:
        raise ConfigurationError(
            f"Node '{name}' has unknown type '{node.type}'. "
            f"Known types: {sorted(MODULE_TYPES)}"
        )
    module = module_cls()

    for param, value in node.params.items():
        _apply_param(name, module, param, value)

    if node.control_points:
        _apply_control_points(name, module, node.control_points)

    return module


def _apply_param(name: str, module: Module, param: str, value: object) -> None:
    type_name = type(module).__name__
    # Parameters are public properties; their setters validate the value
    attr = inspect.getattr_static(type(module), param, None)
    if param.startswith("_") or not isinstance(attr, property):
        raise ConfigurationError(f"Node '{name}': {type_name} has no parameter '{param}'")
    if attr.fset is None:
        raise ConfigurationError(f"Node '{name}': {type_name}.{param} is read-only")

    try:
        setattr(module, param, value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Node '{name}': invalid value {value!r} for {type_name}.{param}: {e}"
        ) from e


def _apply_control_points(
    name: str,
    module: Module,
    points: list[float | tuple[float, float]],
) -> None:
    if isinstance(module, Terrace):
        for point in points:
            if isinstance(point, tuple):
                raise ConfigurationError(
                    f"Node '{name}': Terrace control points are single values, got {point!r}"
                )
            module.add_control_point(point)
    elif isinstance(module, Curve):
        for point in points:
            if not isinstance(point, tuple):
                raise ConfigurationError(
                    f"Node '{name}': Curve control points are (input, output) pairs, "
                    f"got {point!r}"
                )
            module.add_control_point(*point)
    else:
        raise ConfigurationError(
            f"Node '{name}': {type(module).__name__} does not take control points"
        )


def build_graph_nodes(config: GraphConfig) -> dict[str, Module]:
    """Build every node of a graph and wire their sources.

    Args:
        config: Graph configuration.

    Returns:
        Mapping of node name to its module.

    Raises:
        ConfigurationError: For unknown types, parameters or node
            references, too many sources, or cyclic wiring.
    """
    modules = {name: create_module(name, node) for name, node in config.nodes.items()}

    for name, node in config.nodes.items():
        module = modules[name]
        if len(node.sources) > module.source_module_count():
            raise ConfigurationError(
                f"Node '{name}': {node.type} takes {module.source_module_count()} "
                f"sources, got {len(node.sources)}"
            )
        for index, source_name in enumerate(node.sources):
            if source_name is None:
                continue
            if source_name not in modules:
                raise ConfigurationError(
                    f"Node '{name}' references unknown node '{source_name}'"
                )
            module.set_source(index, modules[source_name])

    return modules


def build_graph(config: GraphConfig) -> Module:
    """Build a graph and return its output module.

    Raises:
        ConfigurationError: If the output node is missing or any node is
            invalid (see build_graph_nodes).
    """
    if config.output not in config.nodes:
        raise ConfigurationError(f"Output node '{config.output}' is not defined")

    modules = build_graph_nodes(config)
    logger.info("graph_built", output=config.output, node_count=len(modules))
    return modules[config.output]
