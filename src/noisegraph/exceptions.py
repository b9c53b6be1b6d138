"""Custom exceptions for noise module graphs."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .module import Module


class NoiseError(Exception):
    """Base exception for noise errors."""

    pass


class ConfigurationError(NoiseError, ValueError):
    """Raised when a module parameter or graph wiring is invalid."""

    pass


class MissingSourceError(NoiseError):
    """Raised when a required source module slot is unset."""

    def __init__(self, module: "Module", index: int):
        self.module = module
        self.index = index
        super().__init__(
            f"{type(module).__name__} has no source module in slot {index}"
        )
