"""Base class for every noise module.

A module maps a 3D coordinate to a scalar. Modules with source slots
combine or reshape the output of other modules, so wiring modules
together builds a directed acyclic graph that is walked recursively on
every call to ``evaluate``.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Iterator

import structlog

from .exceptions import ConfigurationError, MissingSourceError

logger = structlog.get_logger()


class Module(ABC):
    """Abstract noise module with a fixed number of source slots.

    Subclasses set ``source_count`` and implement ``_evaluate``. Slots may
    be left empty while a graph is being assembled; the check happens when
    ``evaluate`` is called.

    Modules hold no evaluation state, so a fully configured graph can be
    shared freely. Changing parameters or slots while another thread is
    evaluating the same graph is not supported.
    """

    source_count: ClassVar[int] = 0

    def __init__(self) -> None:
        self._sources: list["Module | None"] = [None] * self.source_count

    def source_module_count(self) -> int:
        """Number of source slots this module type declares."""
        return self.source_count

    @property
    def sources(self) -> tuple["Module | None", ...]:
        """Current slot contents, None for unset slots."""
        return tuple(self._sources)

    def get_source(self, index: int) -> "Module":
        """Get the module connected to a source slot.

        Raises:
            MissingSourceError: If index is out of range or the slot is unset.
        """
        if not 0 <= index < self.source_count:
            raise MissingSourceError(self, index)
        source = self._sources[index]
        if source is None:
            raise MissingSourceError(self, index)
        return source

    def set_source(self, index: int, module: "Module") -> None:
        """Connect a module to a source slot.

        The same module may feed any number of parents. Connections that
        would make this module one of its own inputs are rejected.

        Args:
            index: Slot index in [0, source_module_count()).
            module: Module to connect.

        Raises:
            ConfigurationError: If index is out of range, module is not a
                Module, or the connection would create a cycle.
        """
        if not 0 <= index < self.source_count:
            raise ConfigurationError(
                f"Source index {index} out of range for {type(self).__name__} "
                f"(expects 0..{self.source_count - 1})"
            )
        if not isinstance(module, Module):
            raise ConfigurationError(
                f"Expected Module, got {type(module).__name__}"
            )
        if module is self or self in module.iter_descendants():
            raise ConfigurationError(
                f"Connecting {type(module).__name__} to {type(self).__name__} "
                "would create a cycle"
            )
        self._sources[index] = module
        logger.debug(
            "source_connected",
            module=type(self).__name__,
            index=index,
            source=type(module).__name__,
        )

    def iter_descendants(self) -> Iterator["Module"]:
        """Yield every module reachable through the source slots, once each."""
        seen: set[int] = set()
        stack = [s for s in self._sources if s is not None]
        while stack:
            current = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))
            yield current
            stack.extend(s for s in current._sources if s is not None)

    def evaluate(self, x: float, y: float, z: float) -> float:
        """Output value at (x, y, z).

        Raises:
            MissingSourceError: If any source slot is unset.
        """
        for index, source in enumerate(self._sources):
            if source is None:
                raise MissingSourceError(self, index)
        return self._evaluate(x, y, z)

    @abstractmethod
    def _evaluate(self, x: float, y: float, z: float) -> float:
        """Compute the output once all slots are known to be set."""

    def __repr__(self) -> str:
        filled = sum(1 for s in self._sources if s is not None)
        return f"{type(self).__name__}(sources={filled}/{self.source_count})"
