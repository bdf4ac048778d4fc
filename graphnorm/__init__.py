"""
graphnorm

Normalizes arbitrary Python value graphs (shared values, cycles, custom
classes) into a JSON-friendly intermediate tree and rebuilds them, keeping
object identity relationships intact.

Usage:
    from graphnorm import default_engine, all_props

    engine = default_engine.with_converters(all_props(Person))
    text = engine.serialize(company)
    restored = engine.deserialize(text)
"""

from .core import (
    Engine,
    Options,
    Converter,
    ConverterRegistry,
    TextCodec,
    GraphnormError,
    CircularReferenceError,
    UnregisteredTypeError,
    MalformedItemError,
    ConfigurationError,
    DuplicateConverterError,
)
from .converters import (
    DEFAULT_CONVERTERS,
    all_of,
    all_props,
    error_of,
    from_iterable,
    items_of,
    pick,
    value_of,
)

__version__ = "0.1.0"

# Engine pre-configured with the standard converters and default options
default_engine = Engine.default()

__all__ = [
    "Engine",
    "Options",
    "Converter",
    "ConverterRegistry",
    "TextCodec",
    "GraphnormError",
    "CircularReferenceError",
    "UnregisteredTypeError",
    "MalformedItemError",
    "ConfigurationError",
    "DuplicateConverterError",
    "DEFAULT_CONVERTERS",
    "all_of",
    "all_props",
    "error_of",
    "from_iterable",
    "items_of",
    "pick",
    "value_of",
    "default_engine",
]
