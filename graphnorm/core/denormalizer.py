"""
Denormalizer: intermediate tree -> value graph.

Works in two passes:
1. Walk the tree once, building plain dicts/lists and recording a fixup
   action for every Reference (placeholder None) and every TypedState
   (state placed where the instance will go).
2. Apply the fixups in scheduled order: nested conversions before the ones
   holding them, each reference as soon as its source is final. Slots below
   an already rebuilt instance are reached through that instance.
"""

import logging
from typing import Any, Dict, List, Tuple

from .converters import ConverterRegistry
from .errors import MalformedItemError
from .items import (
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
from .paths import ROOT, Action, ConversionFixup, Path, ReferenceFixup, assign, child, find, schedule

logger = logging.getLogger(__name__)

_MISSING = object()


def denormalize(item: Item, registry: ConverterRegistry, options: Options) -> Any:
    """
    Rebuild a value graph from an intermediate item tree.

    Args:
        item: Root item, as produced by normalize or a text codec
        registry: Converters for the type ids found in the tree
        options: Engine options

    Returns:
        Reconstructed value, with shared references and cycles restored

    Raises:
        MalformedItemError: If the tree contains an unknown node or a dangling reference
        UnregisteredTypeError: If a TypedState has no registered converter
    """
    actions: List[Action] = []

    def walk(node: Item, path: Path) -> Any:
        if isinstance(node, Value):
            return node.raw

        if isinstance(node, FunctionItem):
            return options.function_converter.instantiate(walk(node.inner, path))

        if isinstance(node, SymbolItem):
            return options.symbol_converter.instantiate(node.descriptor)

        if isinstance(node, Reference):
            actions.append(ReferenceFixup(target=path, source=tuple(node.path)))
            return None

        if isinstance(node, ObjectItem):
            result: Dict[str, Any] = {}
            for key, entry in node.fields.items():
                result[key] = walk(entry, child(path, key))
            return result

        if isinstance(node, ArrayItem):
            return [walk(elem, child(path, i)) for i, elem in enumerate(node.elements)]

        if isinstance(node, TypedState):
            actions.append(ConversionFixup(type_id=node.type_id, path=path))
            return walk(node.state, path)

        raise MalformedItemError(f"unknown item: {node!r}")

    root = walk(item, ROOT)

    ordered = schedule(actions)
    logger.debug("Applying %d fixup actions", len(ordered))

    # path -> instance built there; below a rebuilt container the state's
    # layout is gone, so deeper slots are reached from these instances
    built: Dict[Path, Any] = {}

    def locate(path: Path, limit: int) -> Tuple[Any, Path]:
        """Deepest built instance among the first limit prefixes of path, and the rest."""
        for k in range(limit, 0, -1):
            instance = built.get(path[:k], _MISSING)
            if instance is not _MISSING:
                return instance, path[k:]
        return root, path

    for action in ordered:
        if isinstance(action, ReferenceFixup):
            if not action.target:
                raise MalformedItemError("the root item cannot be a reference")
            value = find(*locate(action.source, len(action.source)))
            assign(*locate(action.target, len(action.target) - 1), value)
            continue

        path = action.path
        converter = registry.resolve(action.type_id, path)
        instance = converter.instantiate(find(*locate(path, len(path))))
        if not path:
            root = instance
        else:
            assign(*locate(path, len(path) - 1), instance)
            built[path] = instance

    return root
