"""
Tests for the engine facade, options and text codecs.

Critical: engines are immutable; extending one never changes another.
"""

import enum
import json
import logging
from decimal import Decimal

import pytest

from graphnorm import (
    CircularReferenceError,
    DuplicateConverterError,
    Engine,
    MalformedItemError,
    Options,
    TextCodec,
    UnregisteredTypeError,
    all_props,
    default_engine,
    value_of,
)
from graphnorm.core import IMPORTABLE_FUNCTION_CONVERTER, JSON_CODEC, Converter, from_wire, to_wire
from graphnorm.tests.conftest import Point


def test_with_converters_returns_new_engine():
    base = Engine.empty()
    extended = base.with_converters(all_props(Point))

    assert extended is not base
    assert extended.clone(Point(1, 2)) == Point(1, 2)
    with pytest.raises(UnregisteredTypeError):
        base.clone(Point(1, 2))


def test_with_converters_merges_several_fragments():
    class Other:
        pass

    engine = Engine.empty().with_converters(all_props(Point), all_props(Other))

    assert set(engine.registry) == {"Point", "test_with_converters_merges_several_fragments.<locals>.Other"}


def test_with_converters_rejects_duplicate_type_ids():
    with pytest.raises(DuplicateConverterError):
        default_engine.with_converters(value_of(Decimal))


def test_with_options_returns_new_engine():
    strict = default_engine.with_options(no_refs=True)

    assert strict.options.no_refs is True
    assert default_engine.options.no_refs is False
    assert strict.registry is default_engine.registry


def test_with_options_accepts_mapping_and_ignores_unknown_keys(caplog):
    caplog.set_level(logging.DEBUG, logger="graphnorm.core.options")

    engine = default_engine.with_options({"no_refs": True, "stringifier": object()})

    assert engine.options.no_refs is True
    assert not hasattr(engine.options, "stringifier")
    assert "stringifier" in caplog.text


def test_options_keep_other_keys_when_patched():
    codec = TextCodec(encode=lambda item: "x", decode=lambda text: None)
    options = Options(text_codec=codec).patch(no_refs=True)

    assert options.text_codec is codec
    assert options.no_refs is True


def test_options_from_env():
    assert Options.from_env({"GRAPHNORM_NO_REFS": "true"}).no_refs is True
    assert Options.from_env({"GRAPHNORM_NO_REFS": "0"}).no_refs is False
    assert Options.from_env({}).no_refs is False


def test_engine_is_frozen():
    with pytest.raises(AttributeError):
        default_engine.options = Options(no_refs=True)  # type: ignore


def test_serialize_writes_wire_json():
    text = default_engine.serialize({"a": (1,)})

    assert json.loads(text) == {"obj": {"a": {"proto": "tuple", "state": [{"val": 1}]}}}


def test_deserialize_rejects_foreign_text():
    with pytest.raises(MalformedItemError):
        default_engine.deserialize('{"foo": 1}')

    with pytest.raises(MalformedItemError):
        default_engine.deserialize("not json")


def test_custom_text_codec():
    def encode(item):
        return json.dumps(to_wire(item), indent=2, sort_keys=True)

    def decode(text):
        return from_wire(json.loads(text))

    engine = default_engine.with_options(text_codec=TextCodec(encode, decode))
    shared = {"k": 1}

    text = engine.serialize([shared, shared])
    result = engine.deserialize(text)

    assert "\n" in text
    assert result[0] is result[1]
    assert default_engine.options.text_codec is JSON_CODEC


def test_custom_function_converter():
    engine = default_engine.with_options(function_converter=IMPORTABLE_FUNCTION_CONVERTER)

    assert engine.clone(json.dumps) is json.dumps
    assert engine.clone({"cls": Decimal})["cls"] is Decimal


def test_custom_symbol_converter():
    class Flag(enum.Enum):
        ON = 1

    names = Converter(lambda member: member.name, lambda name: Flag[name])
    engine = default_engine.with_options(symbol_converter=names)

    assert engine.normalize(Flag.ON).descriptor == "ON"
    assert engine.clone([Flag.ON]) == [Flag.ON]


def test_extension_leaves_prior_engines_working():
    strict = default_engine.with_options(no_refs=True)
    with_points = strict.with_converters(all_props(Point))
    shared = [1]

    cloned = default_engine.clone([shared, shared])
    assert cloned[0] is cloned[1]
    with pytest.raises(CircularReferenceError):
        with_points.clone([shared, shared])
    with pytest.raises(UnregisteredTypeError):
        strict.clone(Point(1, 1))


def test_with_converters_logs_registry_growth(caplog):
    caplog.set_level(logging.DEBUG, logger="graphnorm.core.engine")

    Engine.empty().with_converters(all_props(Point))

    assert "Extended registry from 0 to 1 converters" in caplog.text
