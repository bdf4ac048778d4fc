"""
Normalizer: value graph -> intermediate tree.

Each composite gets a canonical path the first time it is visited. Any later
visit of the same object (by identity, never by equality) becomes a Reference
to that path, which is what makes shared values and cycles representable in a
plain tree.
"""

import enum
import inspect
from typing import Any, Dict, Tuple

from .converters import ConverterRegistry
from .errors import CircularReferenceError, UnregisteredTypeError
from .items import (
    PRIMITIVE_TYPES,
    ArrayItem,
    FunctionItem,
    Item,
    ObjectItem,
    Reference,
    SymbolItem,
    TypedState,
    Value,
)
from .options import Options
from .paths import ROOT, Path, child


def is_function(value: Any) -> bool:
    """Functions, methods, builtins and classes are all treated as functions."""
    return inspect.isroutine(value) or inspect.isclass(value)


def is_primitive(value: Any) -> bool:
    return value is None or type(value) in PRIMITIVE_TYPES


def is_plain_object(value: Any) -> bool:
    """A dict whose keys are all strings needs no converter."""
    return type(value) is dict and all(type(k) is str for k in value)


def normalize(value: Any, registry: ConverterRegistry, options: Options) -> Item:
    """
    Convert a value graph into an intermediate item tree.

    Args:
        value: Any value made of primitives, lists, dicts, functions, enum
            members and instances of registered types
        registry: Converters for custom types
        options: Engine options

    Returns:
        Root item of the intermediate tree

    Raises:
        CircularReferenceError: If options.no_refs and a composite repeats
        UnregisteredTypeError: If a custom-typed value has no converter
    """
    # id -> (canonical path, object); holding the object keeps its id from
    # being reused by a temporary state object later in the same call
    seen: Dict[int, Tuple[Path, Any]] = {}

    def walk(item: Any, path: Path) -> Item:
        # callable instances without a converter of their own are functions too
        if is_function(item) or (callable(item) and registry.type_id_for(item) is None):
            return FunctionItem(walk(options.function_converter.extract_state(item), path))

        if is_primitive(item):
            return Value(item)

        if isinstance(item, enum.Enum):
            return SymbolItem(options.symbol_converter.extract_state(item))

        prev = seen.get(id(item))
        if prev is not None:
            if options.no_refs:
                raise CircularReferenceError(path, prev[0])
            return Reference(prev[0])

        seen[id(item)] = (path, item)

        if type(item) is list:
            return ArrayItem(tuple(walk(elem, child(path, i)) for i, elem in enumerate(item)))

        if is_plain_object(item):
            return ObjectItem({key: walk(entry, child(path, key)) for key, entry in item.items()})

        type_id = registry.type_id_for(item)
        if type_id is None:
            raise UnregisteredTypeError(type(item).__qualname__, path)

        # State lives at the same path as the instance it came from
        converter = registry[type_id]
        return TypedState(type_id, walk(converter.extract_state(item), path))

    return walk(value, ROOT)
