"""
Engine options and the default function/symbol converters.
"""

import enum
import importlib
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from .converters import Converter
from .codec import JSON_CODEC, TextCodec
from .errors import MalformedItemError

logger = logging.getLogger(__name__)


def qualified_name(obj: Any) -> str:
    """Import path of a function, class or enum class as 'module:qualname'."""
    return f"{obj.__module__}:{obj.__qualname__}"


def import_qualified(name: str) -> Any:
    """Resolve a 'module:qualname' import path."""
    module_name, _, qualname = name.partition(":")
    target: Any = importlib.import_module(module_name)
    for attr in qualname.split("."):
        target = getattr(target, attr)
    return target


def _function_name(func: Any) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or type(func).__qualname__
    module = getattr(func, "__module__", None)
    return f"{module}:{name}" if module else name


def _function_stand_in(name: str) -> str:
    return f"[function {name.rpartition(':')[2]}]"


DEFAULT_FUNCTION_CONVERTER = Converter(_function_name, _function_stand_in)

# Rebuilds module-level functions and classes by importing them again.
IMPORTABLE_FUNCTION_CONVERTER = Converter(qualified_name, import_qualified)


def _symbol_descriptor(member: enum.Enum) -> str:
    return f"{qualified_name(type(member))}.{member.name}"


def _symbol_from_descriptor(descriptor: str) -> enum.Enum:
    enum_name, _, member_name = descriptor.rpartition(".")
    try:
        enum_cls = import_qualified(enum_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise MalformedItemError(f"unknown symbol: {descriptor!r}") from e
    if not (isinstance(enum_cls, type) and issubclass(enum_cls, enum.Enum)):
        raise MalformedItemError(f"symbol does not name an enum member: {descriptor!r}")
    try:
        return enum_cls[member_name]
    except KeyError as e:
        raise MalformedItemError(f"unknown symbol: {descriptor!r}") from e


DEFAULT_SYMBOL_CONVERTER = Converter(_symbol_descriptor, _symbol_from_descriptor)


@dataclass(frozen=True)
class Options:
    """
    Immutable engine options.

    Fields:
        no_refs: Fail with CircularReferenceError instead of emitting references
        function_converter: Converter applied to functions and classes
        symbol_converter: Converter applied to enum members
        text_codec: Encode/decode pair used by serialize and deserialize
    """
    no_refs: bool = False
    function_converter: Converter = DEFAULT_FUNCTION_CONVERTER
    symbol_converter: Converter = DEFAULT_SYMBOL_CONVERTER
    text_codec: TextCodec = field(default=JSON_CODEC)

    def patch(self, changes: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "Options":
        """
        Create new options with the given keys replaced.

        Unrecognized keys are ignored.
        """
        merged = dict(changes or {})
        merged.update(kwargs)

        known = {f.name for f in fields(self)}
        ignored = sorted(k for k in merged if k not in known)
        if ignored:
            logger.debug("Ignoring unrecognized options: %s", ", ".join(ignored))

        return replace(self, **{k: v for k, v in merged.items() if k in known})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Options":
        """
        Build options from environment variables.

        Environment Variables:
            GRAPHNORM_NO_REFS: 1/true/yes enables no_refs (default: false)
        """
        env = os.environ if environ is None else environ
        no_refs = env.get("GRAPHNORM_NO_REFS", "false").strip().lower() in ("1", "true", "yes")
        return cls(no_refs=no_refs)


DEFAULT_OPTIONS = Options()