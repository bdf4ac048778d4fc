"""
Ready-made converters.

Provides:
- Converter shapes: value_of, from_iterable, items_of, all_props, pick, error_of
- all_of: apply a shape to several classes at once
- DEFAULT_CONVERTERS: converters for common standard library types
"""

from .shapes import all_of, all_props, error_of, from_iterable, items_of, pick, value_of
from .builtins import (
    CONTAINER_CONVERTERS,
    DEFAULT_CONVERTERS,
    ERROR_CONVERTERS,
    SCALAR_CONVERTERS,
)

__all__ = [
    "value_of",
    "from_iterable",
    "items_of",
    "all_props",
    "pick",
    "error_of",
    "all_of",
    "SCALAR_CONVERTERS",
    "CONTAINER_CONVERTERS",
    "ERROR_CONVERTERS",
    "DEFAULT_CONVERTERS",
]
