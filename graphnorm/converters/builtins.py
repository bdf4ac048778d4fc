"""
Default converters for standard library types.
"""

import base64
import datetime as dt
from collections import deque
from decimal import Decimal
from typing import Dict
from uuid import UUID

from ..core.converters import Converter
from .shapes import all_of, error_of, from_iterable, items_of, value_of


def _timedelta_parts(td: dt.timedelta) -> list:
    return [td.days, td.seconds, td.microseconds]


def _timedelta_from_parts(parts: list) -> dt.timedelta:
    return dt.timedelta(days=parts[0], seconds=parts[1], microseconds=parts[2])


def _bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _bytes_from_base64(text: str) -> bytes:
    return base64.b64decode(text)


SCALAR_CONVERTERS: Dict[str, Converter] = {
    **value_of(dt.datetime, dt.datetime.isoformat, dt.datetime.fromisoformat),
    **value_of(dt.date, dt.date.isoformat, dt.date.fromisoformat),
    **value_of(dt.time, dt.time.isoformat, dt.time.fromisoformat),
    **value_of(dt.timedelta, _timedelta_parts, _timedelta_from_parts),
    **value_of(Decimal),
    **value_of(UUID),
    **value_of(complex, lambda c: [c.real, c.imag], lambda parts: complex(*parts)),
    **value_of(bytes, _bytes_to_base64, _bytes_from_base64),
}

CONTAINER_CONVERTERS: Dict[str, Converter] = {
    **all_of(from_iterable, set, frozenset, tuple, deque),
    # dicts with only str keys are plain objects and never reach this
    **items_of(dict),
}

ERROR_CONVERTERS: Dict[str, Converter] = all_of(
    error_of,
    Exception,
    ArithmeticError,
    AssertionError,
    AttributeError,
    IndexError,
    KeyError,
    LookupError,
    NotImplementedError,
    RuntimeError,
    TypeError,
    ValueError,
    ZeroDivisionError,
)

DEFAULT_CONVERTERS: Dict[str, Converter] = {
    **SCALAR_CONVERTERS,
    **CONTAINER_CONVERTERS,
    **ERROR_CONVERTERS,
}
