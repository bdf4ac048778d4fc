"""
Exception types for the normalize/denormalize engine.
"""

from typing import Optional


class GraphnormError(Exception):
    """Base class for all graphnorm errors."""
    pass


class CircularReferenceError(GraphnormError):
    """Raised when a composite is seen twice while references are disabled."""

    def __init__(self, path: tuple, first_seen: tuple) -> None:
        super().__init__(
            f"reference found at {list(path)} to {list(first_seen)} while no_refs=True"
        )
        self.path = path
        self.first_seen = first_seen


class UnregisteredTypeError(GraphnormError):
    """Raised when no converter is registered for a type or type identifier."""

    def __init__(self, type_id: str, path: Optional[tuple] = None) -> None:
        where = f" at {list(path)}" if path is not None else ""
        super().__init__(f"no converter registered for {type_id!r}{where}")
        self.type_id = type_id
        self.path = path


class MalformedItemError(GraphnormError):
    """Raised when an intermediate item has an unknown shape or a dangling reference."""
    pass


class ConfigurationError(GraphnormError):
    """Raised when a registry or engine is configured inconsistently."""
    pass


class DuplicateConverterError(ConfigurationError):
    """Raised when a type identifier or class is registered twice."""
    pass
