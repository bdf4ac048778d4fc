"""
Converter protocol and the immutable converter registry.

A converter is a two-way function pair: extract_state reduces an instance to
something the normalizer can walk, instantiate rebuilds an instance from the
denormalized state. Converters are registered under application-chosen type
identifiers.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from .errors import ConfigurationError, DuplicateConverterError, UnregisteredTypeError


@dataclass(frozen=True)
class Converter:
    """
    Two-way converter between an instance and its state.

    Fields:
        extract_state: instance -> state
        instantiate: state -> instance
        cls: Class whose instances this converter handles (None for
            converters that are only used to rebuild values)
    """
    extract_state: Callable[[Any], Any]
    instantiate: Callable[[Any], Any]
    cls: Optional[type] = None


# A registry fragment: type identifier -> converter
ConverterConfig = Mapping[str, Converter]


class ConverterRegistry(Mapping):
    """
    Immutable mapping from type identifier to converter.

    Usage:
        registry = ConverterRegistry({"Point": point_converter})
        registry = registry.merge(more_converters)
        type_id = registry.type_id_for(Point(1, 2))
    """

    def __init__(self, entries: Optional[ConverterConfig] = None) -> None:
        entries = dict(entries or {})
        by_type: Dict[type, str] = {}

        for type_id, converter in entries.items():
            if not isinstance(type_id, str) or not type_id:
                raise ConfigurationError(f"type id must be a non-empty string: {type_id!r}")
            if not isinstance(converter, Converter):
                raise ConfigurationError(f"not a Converter for {type_id!r}: {converter!r}")
            if converter.cls is None:
                continue
            other = by_type.get(converter.cls)
            if other is not None:
                raise DuplicateConverterError(
                    f"{converter.cls.__qualname__} registered as both {other!r} and {type_id!r}"
                )
            by_type[converter.cls] = type_id

        self._entries = MappingProxyType(entries)
        self._by_type = MappingProxyType(by_type)

    def __getitem__(self, type_id: str) -> Converter:
        return self._entries[type_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"ConverterRegistry({sorted(self._entries)})"

    def merge(self, *fragments: ConverterConfig) -> "ConverterRegistry":
        """
        Create a new registry with the given fragments added.

        The original registry is left untouched.

        Raises:
            DuplicateConverterError: If a type id is already bound to a different converter
        """
        merged = dict(self._entries)
        for fragment in fragments:
            for type_id, converter in fragment.items():
                existing = merged.get(type_id)
                if existing is not None and existing is not converter:
                    raise DuplicateConverterError(f"type id {type_id!r} is already registered")
                merged[type_id] = converter
        return ConverterRegistry(merged)

    def type_id_for(self, value: Any) -> Optional[str]:
        """Get the type id registered for the exact class of value, if any."""
        return self._by_type.get(type(value))

    def resolve(self, type_id: str, path: Optional[Tuple[str, ...]] = None) -> Converter:
        """
        Get the converter for a type id.

        Raises:
            UnregisteredTypeError: If nothing is registered under type_id
        """
        converter = self._entries.get(type_id)
        if converter is None:
            raise UnregisteredTypeError(type_id, path)
        return converter


EMPTY_REGISTRY = ConverterRegistry()
