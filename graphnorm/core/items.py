"""
Intermediate item model.

The intermediate tree is a closed tagged variant: every node is exactly one of
the item classes below. Its wire form is plain JSON-compatible data:

    Value        {"val": raw}
    Reference    {"ref": ["path", "segments"]}
    ObjectItem   {"obj": {"key": item, ...}}
    ArrayItem    [item, ...]
    FunctionItem {"fun": item}
    SymbolItem   {"sym": "descriptor"}
    TypedState   {"proto": "type_id", "state": item}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from .errors import MalformedItemError

PRIMITIVE_TYPES = (bool, int, float, str)


@dataclass(frozen=True)
class Value:
    """A primitive: None, bool, int, float or str."""
    raw: Any = None


@dataclass(frozen=True)
class Reference:
    """Points at the canonical path of an already-normalized composite."""
    path: Tuple[str, ...]


@dataclass(frozen=True)
class ObjectItem:
    """A plain keyed structure (dict with str keys)."""
    fields: Dict[str, "Item"] = field(default_factory=dict)


@dataclass(frozen=True)
class ArrayItem:
    """An ordered sequence (list)."""
    elements: Tuple["Item", ...] = ()


@dataclass(frozen=True)
class FunctionItem:
    """A callable reduced by the function converter."""
    inner: "Item"


@dataclass(frozen=True)
class SymbolItem:
    """An opaque identifier reduced by the symbol converter."""
    descriptor: str


@dataclass(frozen=True)
class TypedState:
    """A custom-typed instance reduced to its registered converter's state."""
    type_id: str
    state: "Item"


Item = Union[Value, Reference, ObjectItem, ArrayItem, FunctionItem, SymbolItem, TypedState]

_TAGS = {"val", "ref", "obj", "fun", "sym"}


def to_wire(item: Item) -> Any:
    """
    Convert an item tree to its JSON-compatible wire form.

    Raises:
        MalformedItemError: If a node is not an item
    """
    if isinstance(item, Value):
        return {"val": item.raw}
    if isinstance(item, Reference):
        return {"ref": list(item.path)}
    if isinstance(item, ObjectItem):
        return {"obj": {k: to_wire(v) for k, v in item.fields.items()}}
    if isinstance(item, ArrayItem):
        return [to_wire(e) for e in item.elements]
    if isinstance(item, FunctionItem):
        return {"fun": to_wire(item.inner)}
    if isinstance(item, SymbolItem):
        return {"sym": item.descriptor}
    if isinstance(item, TypedState):
        return {"proto": item.type_id, "state": to_wire(item.state)}
    raise MalformedItemError(f"not an intermediate item: {type(item).__name__}")


def from_wire(data: Any) -> Item:
    """
    Parse wire-form data back into an item tree.

    Raises:
        MalformedItemError: If data matches none of the tagged shapes
    """
    if isinstance(data, list):
        return ArrayItem(tuple(from_wire(e) for e in data))

    if not isinstance(data, dict):
        raise MalformedItemError(f"unknown item: {data!r}")

    keys = set(data.keys())

    if keys == {"proto", "state"}:
        if not isinstance(data["proto"], str):
            raise MalformedItemError(f"type id must be a string: {data['proto']!r}")
        return TypedState(data["proto"], from_wire(data["state"]))

    if len(keys) != 1 or not keys <= _TAGS:
        raise MalformedItemError(f"unknown item with keys {sorted(map(str, keys))}")

    (tag,) = keys
    payload = data[tag]

    if tag == "val":
        if payload is not None and not isinstance(payload, PRIMITIVE_TYPES):
            raise MalformedItemError(f"value is not a primitive: {payload!r}")
        return Value(payload)
    if tag == "ref":
        if not isinstance(payload, list) or not all(isinstance(p, str) for p in payload):
            raise MalformedItemError(f"reference path must be a list of strings: {payload!r}")
        return Reference(tuple(payload))
    if tag == "obj":
        if not isinstance(payload, dict):
            raise MalformedItemError(f"object fields must be a mapping: {payload!r}")
        return ObjectItem({k: from_wire(v) for k, v in payload.items()})
    if tag == "fun":
        return FunctionItem(from_wire(payload))
    if not isinstance(payload, str):
        raise MalformedItemError(f"symbol descriptor must be a string: {payload!r}")
    return SymbolItem(payload)
