"""
Converter shapes.

Each shape takes a class and returns a one-entry registry fragment
{type_id: Converter}. The type id defaults to the class __qualname__.
"""

from typing import Any, Callable, Dict, Optional

from ..core.converters import Converter, ConverterConfig
from ..core.errors import DuplicateConverterError


def _fragment(cls: type, type_id: Optional[str], extract_state, instantiate) -> ConverterConfig:
    return {type_id or cls.__qualname__: Converter(extract_state, instantiate, cls)}


def _assign_onto(cls: type) -> Callable[[Dict[str, Any]], Any]:
    def instantiate(state: Dict[str, Any]) -> Any:
        obj = cls.__new__(cls)
        for name, value in state.items():
            setattr(obj, name, value)
        return obj

    return instantiate


def value_of(
    cls: type,
    unwrap: Callable[[Any], Any] = str,
    rebox: Optional[Callable[[Any], Any]] = None,
    type_id: Optional[str] = None,
) -> ConverterConfig:
    """
    Converter for a boxed scalar.

    Args:
        cls: The class
        unwrap: instance -> inner value (default: str)
        rebox: inner value -> instance (default: cls)
        type_id: Registry key (default: cls.__qualname__)
    """
    return _fragment(cls, type_id, unwrap, rebox or cls)


def from_iterable(cls: type, type_id: Optional[str] = None) -> ConverterConfig:
    """Converter for a container that iterates over its elements and accepts them back as cls(list)."""
    return _fragment(cls, type_id, list, cls)


def items_of(cls: type, type_id: Optional[str] = None) -> ConverterConfig:
    """Converter for a mapping with arbitrary keys, stored as [key, value] pairs."""

    def extract(obj: Any) -> list:
        return [[key, value] for key, value in obj.items()]

    def instantiate(pairs: list) -> Any:
        return cls((key, value) for key, value in pairs)

    return _fragment(cls, type_id, extract, instantiate)


def all_props(cls: type, type_id: Optional[str] = None) -> ConverterConfig:
    """
    Converter that copies every instance attribute.

    The instance is rebuilt without calling __init__: a bare instance is
    allocated with cls.__new__ and the attributes are assigned onto it.
    """

    def extract(obj: Any) -> Dict[str, Any]:
        return dict(vars(obj))

    return _fragment(cls, type_id, extract, _assign_onto(cls))


def pick(cls: type, *props: str, type_id: Optional[str] = None) -> ConverterConfig:
    """Like all_props, restricted to the listed attribute names."""

    def extract(obj: Any) -> Dict[str, Any]:
        return {name: getattr(obj, name) for name in props}

    return _fragment(cls, type_id, extract, _assign_onto(cls))


def error_of(cls: type, type_id: Optional[str] = None) -> ConverterConfig:
    """Converter for an exception class, rebuilt as cls(*args)."""

    def instantiate(args: list) -> BaseException:
        return cls(*args)

    return _fragment(cls, type_id, lambda e: list(e.args), instantiate)


def all_of(shape: Callable[[type], ConverterConfig], *classes: type) -> ConverterConfig:
    """
    Apply one shape to several classes and merge the fragments.

    Usage:
        all_of(all_props, Employee, Manager, Company)

    Raises:
        DuplicateConverterError: If two classes end up with the same type id
    """
    result: Dict[str, Converter] = {}
    for cls in classes:
        for type_id, converter in shape(cls).items():
            if type_id in result:
                raise DuplicateConverterError(f"type id {type_id!r} produced twice")
            result[type_id] = converter
    return result
