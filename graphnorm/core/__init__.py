"""
Core normalize/denormalize primitives.

This module provides:
- Items: the tagged intermediate tree and its wire form
- Paths: tree addressing and deferred fixup actions
- Converters: the converter protocol and immutable registry
- normalize / denormalize: the two transforms
- Engine: immutable (registry, options) facade
"""

from .errors import (
    GraphnormError,
    CircularReferenceError,
    UnregisteredTypeError,
    MalformedItemError,
    ConfigurationError,
    DuplicateConverterError,
)
from .items import (
    Item,
    Value,
    Reference,
    ObjectItem,
    ArrayItem,
    FunctionItem,
    SymbolItem,
    TypedState,
    to_wire,
    from_wire,
)
from .paths import Path, ReferenceFixup, ConversionFixup, schedule
from .converters import Converter, ConverterConfig, ConverterRegistry
from .codec import TextCodec, JSON_CODEC
from .options import (
    Options,
    DEFAULT_FUNCTION_CONVERTER,
    DEFAULT_SYMBOL_CONVERTER,
    IMPORTABLE_FUNCTION_CONVERTER,
)
from .normalizer import normalize
from .denormalizer import denormalize
from .engine import Engine

__all__ = [
    "GraphnormError",
    "CircularReferenceError",
    "UnregisteredTypeError",
    "MalformedItemError",
    "ConfigurationError",
    "DuplicateConverterError",
    "Item",
    "Value",
    "Reference",
    "ObjectItem",
    "ArrayItem",
    "FunctionItem",
    "SymbolItem",
    "TypedState",
    "to_wire",
    "from_wire",
    "Path",
    "ReferenceFixup",
    "ConversionFixup",
    "schedule",
    "Converter",
    "ConverterConfig",
    "ConverterRegistry",
    "TextCodec",
    "JSON_CODEC",
    "Options",
    "DEFAULT_FUNCTION_CONVERTER",
    "DEFAULT_SYMBOL_CONVERTER",
    "IMPORTABLE_FUNCTION_CONVERTER",
    "normalize",
    "denormalize",
    "Engine",
]
