"""Exception types raised by the graph builder and its collaborators."""

from __future__ import annotations


class BomGraphError(Exception):
    """Base class for errors surfaced to callers of :mod:`bomgraph`."""


class ConfigError(BomGraphError):
    """Configuration file could not be interpreted."""


class DescriptorResolutionError(BomGraphError):
    """A package descriptor could not be resolved for a module path."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class DescriptorNotFound(DescriptorResolutionError):
    """No package descriptor exists at or above the given path."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "No package descriptor found")


class InvalidDescriptor(DescriptorResolutionError):
    """A package descriptor exists but cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, f"Invalid package descriptor ({reason})")
        self.reason = reason


class InvalidToolVersion(BomGraphError, ValueError):
    """Tool metadata was given a version that is not a semantic version."""
