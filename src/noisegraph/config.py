"""Module graph configuration from TOML files."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Graphs shipped inside the package, looked up by find_config
BUNDLED_CONFIGS_DIR = Path(__file__).parent / "configs"


class NodeConfig(BaseModel):
    """One module in a graph.

    ``params`` are applied in order, so parameters that depend on others
    (such as Select's edge_falloff, capped by its bounds) should come
    after them.
    """

    type: str  # Module class name, e.g. "Perlin"
    params: dict[str, Any] = Field(default_factory=dict)
    sources: list[str | None] = Field(default_factory=list)  # Node names by slot
    control_points: list[float | tuple[float, float]] = Field(default_factory=list)


class GraphConfig(BaseModel):
    """Complete module graph configuration."""

    output: str  # Name of the node whose value the graph produces
    nodes: dict[str, NodeConfig] = Field(default_factory=dict)


def load_config(config_path: Path) -> GraphConfig:
    """Load a graph configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GraphConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GraphConfig.model_validate(data)


def find_config(name: str, configs_dir: Path | None = None) -> Path:
    """Resolve a graph config name to a file.

    A name containing a path separator or ending in ``.toml`` is taken as a
    path. Any other name is looked up as ``{name}.toml`` in ``configs_dir``,
    which defaults to the graphs bundled with the package.

    Args:
        name: Graph name or path.
        configs_dir: Directory of named graphs.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If no matching file exists.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {name}")
        return path

    if configs_dir is None:
        configs_dir = BUNDLED_CONFIGS_DIR
    path = configs_dir / f"{name}.toml"
    if path.is_file():
        return path

    raise FileNotFoundError(
        f"Graph '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs(configs_dir)}"
    )


def list_configs(configs_dir: Path | None = None) -> list[str]:
    """Names of the graphs in ``configs_dir``, bundled graphs by default."""
    if configs_dir is None:
        configs_dir = BUNDLED_CONFIGS_DIR
    if not configs_dir.is_dir():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
