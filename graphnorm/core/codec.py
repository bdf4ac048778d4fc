"""
Text codecs for the intermediate tree.

serialize and deserialize go through a TextCodec so the text format stays
pluggable. The default writes the wire form as compact JSON.
"""

import json
from dataclasses import dataclass
from typing import Callable

from .errors import MalformedItemError
from .items import Item, from_wire, to_wire


@dataclass(frozen=True)
class TextCodec:
    """
    Encode/decode pair over the intermediate tree.

    Fields:
        encode: item tree -> text
        decode: text -> item tree
    """
    encode: Callable[[Item], str]
    decode: Callable[[str], Item]


def json_encode(item: Item) -> str:
    """
    Compact JSON text for an item tree.

    Guarantees:
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 text as-is
    """
    return json.dumps(to_wire(item), separators=(",", ":"), ensure_ascii=False)


def json_decode(text: str) -> Item:
    """
    Parse JSON text produced by json_encode.

    Raises:
        MalformedItemError: If text is not JSON or not a valid item tree
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedItemError(f"invalid JSON: {e}") from e
    return from_wire(data)


JSON_CODEC = TextCodec(encode=json_encode, decode=json_decode)
