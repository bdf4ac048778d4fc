"""
Engine: immutable (registry, options) pair exposing the public operations.

Usage:
    from graphnorm import default_engine
    from graphnorm.converters import all_props

    engine = default_engine.with_converters(all_props(Person))
    text = engine.serialize(company)
    copy = engine.clone(company)
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .converters import EMPTY_REGISTRY, ConverterConfig, ConverterRegistry
from .denormalizer import denormalize
from .items import Item
from .normalizer import normalize
from .options import DEFAULT_OPTIONS, Options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Engine:
    """
    Normalizes, denormalizes, clones and (de)serializes value graphs.

    Engines are immutable. with_converters() and with_options() return new
    engines and leave the current one untouched, so an engine can be shared
    freely between threads.
    """
    registry: ConverterRegistry = EMPTY_REGISTRY
    options: Options = DEFAULT_OPTIONS

    @classmethod
    def empty(cls, options: Optional[Options] = None) -> "Engine":
        """Engine without any converters."""
        return cls(EMPTY_REGISTRY, options or DEFAULT_OPTIONS)

    @classmethod
    def default(cls, options: Optional[Options] = None) -> "Engine":
        """Engine with the standard library converters pre-registered."""
        from ..converters import DEFAULT_CONVERTERS

        return cls(ConverterRegistry(DEFAULT_CONVERTERS), options or DEFAULT_OPTIONS)

    def with_converters(self, *fragments: ConverterConfig) -> "Engine":
        """
        Create a new engine with the given converter fragments added.

        Raises:
            DuplicateConverterError: If a fragment rebinds an existing type id
        """
        registry = self.registry.merge(*fragments)
        logger.debug("Extended registry from %d to %d converters", len(self.registry), len(registry))
        return Engine(registry, self.options)

    def with_options(self, patch: Optional[Mapping[str, Any]] = None, **changes: Any) -> "Engine":
        """Create a new engine with the given options replaced."""
        return Engine(self.registry, self.options.patch(patch, **changes))

    def normalize(self, value: Any) -> Item:
        """Convert a value graph into an intermediate item tree."""
        return normalize(value, self.registry, self.options)

    def denormalize(self, item: Item) -> Any:
        """Rebuild a value graph from an intermediate item tree."""
        return denormalize(item, self.registry, self.options)

    def clone(self, value: Any) -> Any:
        """Deep copy of value that keeps shared references and cycles."""
        return self.denormalize(self.normalize(value))

    def serialize(self, value: Any) -> str:
        """Normalize value and encode it with the configured text codec."""
        return self.options.text_codec.encode(self.normalize(value))

    def deserialize(self, text: str) -> Any:
        """Decode text with the configured text codec and denormalize it."""
        return self.denormalize(self.options.text_codec.decode(text))
