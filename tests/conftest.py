"""Shared test fixtures for noise module tests."""

from typing import Callable

import pytest

from noisegraph.module import Module
from noisegraph.modules.generators import Const


class AxisModule(Module):
    """Outputs one input coordinate unchanged."""

    def __init__(self, axis: str) -> None:
        super().__init__()
        self.axis = axis

    def _evaluate(self, x: float, y: float, z: float) -> float:
        return {"x": x, "y": y, "z": z}[self.axis]


class CountingModule(Module):
    """Constant output that records how often it was evaluated."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__()
        self.value = value
        self.calls = 0

    def _evaluate(self, x: float, y: float, z: float) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def const() -> Callable[[float], Const]:
    """Factory for constant-valued modules."""
    return Const


@pytest.fixture
def x_axis() -> AxisModule:
    """Module whose output is the x coordinate."""
    return AxisModule("x")


@pytest.fixture
def y_axis() -> AxisModule:
    """Module whose output is the y coordinate."""
    return AxisModule("y")


@pytest.fixture
def z_axis() -> AxisModule:
    """Module whose output is the z coordinate."""
    return AxisModule("z")


@pytest.fixture
def counter() -> CountingModule:
    """Constant 1.0 module that counts evaluations."""
    return CountingModule(1.0)


@pytest.fixture
def sample_graph_toml() -> str:
    """Sample graph config as TOML string."""
    return """
output = "blend"

[nodes.low]
type = "Perlin"
params = { frequency = 2.0, octave_count = 3, seed = 7 }

[nodes.high]
type = "RidgedMulti"
params = { lacunarity = 2.5, quality = "best" }

[nodes.mix]
type = "Const"
params = { value = 0.25 }

[nodes.blend]
type = "Blend"
sources = ["low", "high", "mix"]
"""
