"""
Round-trip tests for clone, serialize and deserialize.

A clone must be structurally equal to its input, share no composite with it,
and keep every identity relationship that exists inside the input.
"""

import datetime as dt
import math
import uuid
from collections import deque
from decimal import Decimal

import pytest

from graphnorm import Engine, UnregisteredTypeError, all_props, default_engine
from graphnorm.tests.conftest import Color, Node, Point, Priority


def assert_clone_equal(value, engine=default_engine):
    clone = engine.clone(value)

    assert clone == value
    assert type(clone) is type(value)
    if not isinstance(value, (type(None), bool, int, float, str, bytes, tuple, frozenset)):
        assert clone is not value

    # the text round trip rebuilds the same thing
    assert engine.deserialize(engine.serialize(value)) == clone
    return clone


@pytest.mark.parametrize("value", [None, True, False, 0, 1, -1, 1.1, -1.3132352334243, 2.0 / 3.0, "", "abc"])
def test_primitives(value):
    assert_clone_equal(value)


def test_nan():
    assert math.isnan(default_engine.clone(float("nan")))
    assert math.isnan(default_engine.deserialize(default_engine.serialize(float("nan"))))


@pytest.mark.parametrize(
    "value",
    [
        dt.datetime(1996, 7, 4, 3, 2, 1, 6000),
        dt.datetime(1996, 7, 4, tzinfo=dt.timezone.utc),
        dt.date(1996, 7, 4),
        dt.time(12, 30, 15),
        dt.timedelta(days=-2, seconds=5, microseconds=7),
        Decimal("-1.10"),
        uuid.UUID("12345678-1234-5678-1234-567812345678"),
        complex(1.5, -2),
        b"\x00bytes\xff",
    ],
)
def test_boxed_scalars(value):
    assert_clone_equal(value)


def test_symbols():
    assert default_engine.clone(Color.RED) is Color.RED
    assert default_engine.clone(Priority.LOW) is Priority.LOW
    assert default_engine.deserialize(default_engine.serialize([Color.GREEN])) == [Color.GREEN]


@pytest.mark.parametrize(
    "value",
    [
        [],
        [None],
        [0],
        [False],
        [False, None, 0, ""],
        [1, "a", 3.14, True],
        [[]],
        [[], [], [[["a"]]]],
        [None, [None], [[None], []]],
    ],
)
def test_lists(value):
    assert_clone_equal(value)


@pytest.mark.parametrize(
    "value",
    [
        {},
        {"num": 1},
        {
            "num1": 0,
            "num2": 1,
            "str1": "",
            "str2": "str",
            "nl": None,
            "b1": True,
            "b2": False,
            "arr1": [],
            "arr2": [None, "arr", [], False],
        },
        {"a": {}, "b": {"value": 1}, "c": {"d": {"e": {"f": {"t": None, "g": {"h": False}}}}}},
    ],
)
def test_dicts(value):
    assert_clone_equal(value)


@pytest.mark.parametrize(
    "value",
    [
        set(),
        {None, False, "", 0.5},
        {1, "abc", 2.2},
        frozenset({1, 2}),
        (),
        (1, "a", (2, (3,))),
        deque([1, [2]]),
        {(1, 2), (3,)},
    ],
)
def test_builtin_containers(value):
    assert_clone_equal(value)


@pytest.mark.parametrize(
    "value",
    [
        {1: None, 2.5: 1.23, "": [], None: 0},
        {1: 1, "abc": "abc", 2.2: dt.datetime(2020, 1, 1)},
        {(1, 2): "tuple key"},
    ],
)
def test_dicts_with_non_str_keys(value):
    assert_clone_equal(value)


def test_shared_values_in_dicts():
    shared = {"nested": {"value": 1}}
    result = default_engine.clone({"a1": shared, "a2": shared})

    assert result["a1"] is result["a2"]
    assert result["a1"] is not shared


def test_shared_values_in_lists():
    """Shared value in a list and in a dict is one instance in the clone."""
    shared = {"x": 1}
    result = default_engine.clone([shared, {"inner": shared}])

    assert result[0] is result[1]["inner"]


def test_shared_value_inside_keyed_container():
    """The value stored under key 1 of the cloned dict is the second element."""
    shared = {"x": 1}
    result = default_engine.clone([{1: shared}, shared])

    assert result == [{1: {"x": 1}}, {"x": 1}]
    assert result[0][1] is result[1]


def test_shared_value_before_keyed_container():
    shared = {"value": 1}
    result = default_engine.clone([shared, {1: shared}])

    assert result[1][1] is result[0]


def test_shared_value_in_two_keyed_containers():
    pair_value = {"value": 1}
    result = default_engine.clone([{1: pair_value}, {1: pair_value}])

    assert result[0][1] is result[1][1]


def test_shared_container():
    inner = {1: 2}
    result = default_engine.clone([inner, inner])

    assert result == [{1: 2}, {1: 2}]
    assert result[0] is result[1]


def test_shared_value_inside_tuple():
    items = [1]
    result = default_engine.clone([items, [(items,)]])

    assert result[1][0][0] is result[0]


def test_cycles():
    obj = {}
    obj["self"] = obj
    result = default_engine.clone(obj)
    assert result["self"] is result
    assert result is not obj

    loop = []
    loop.append(loop)
    result = default_engine.clone(loop)
    assert result[0] is result


def test_cycle_through_tuple():
    value = ([],)
    value[0].append(value)

    result = default_engine.clone(value)

    assert type(result) is tuple
    assert result[0][0] is result


def test_cycle_survives_text_round_trip():
    obj = {"list": []}
    obj["list"].append(obj)

    result = default_engine.deserialize(default_engine.serialize(obj))

    assert result["list"][0] is result


def test_errors():
    error = default_engine.clone(ValueError())
    assert type(error) is ValueError
    assert error.args == ()

    error = default_engine.clone(KeyError("Test", 2))
    assert type(error) is KeyError
    assert error.args == ("Test", 2)


def test_functions_become_stand_ins():
    def helper():
        return 1

    assert default_engine.clone(len) == "[function len]"
    assert default_engine.clone({"f": helper}) == {"f": "[function test_functions_become_stand_ins.<locals>.helper]"}


def test_unregistered_class_then_recovery():
    class Sample:
        def __init__(self):
            self.value = [1, 2]

    value = Sample()

    with pytest.raises(UnregisteredTypeError):
        default_engine.clone(value)

    engine = default_engine.with_converters(all_props(Sample))
    result = engine.clone(value)

    assert type(result) is Sample
    assert result.value == [1, 2]
    assert result.value is not value.value


def test_registered_class_with_inheritance():
    class Parent:
        def __init__(self):
            self.value = 1
            self.decrease = lambda: None

        def increase(self):
            self.value += 1

    class Child(Parent):
        def __init__(self):
            super().__init__()
            self.state = {"values": [1, 2, 3]}

        def change_state(self):
            self.state = {"values": [5]}

    value = Child()
    value.increase()
    value.change_state()

    engine = default_engine.with_converters(all_props(Child))
    result = engine.clone(value)

    assert isinstance(result, Child)
    assert result.value == 2
    assert result.state == {"values": [5]}
    # behavior comes from the class, not from the state
    result.increase()
    assert result.value == 3


def test_registered_class_cycles(engine):
    root = Node("root")
    leaf = root.add(Node("a")).add(Node("b"))
    leaf.root = root

    result = engine.clone(root)

    assert type(result) is Node
    assert result.children[0].parent is result
    assert result.children[0].children[0].parent is result.children[0]
    assert result.children[0].children[0].root is result


def test_registered_class_self_reference(engine):
    point = Point(1, 2)
    point.me = point

    result = engine.clone(point)

    assert result.me is result


def test_shared_registered_instances(engine):
    point = Point(0, 0)
    value = {"a": point, "b": [point, {"c": point}]}

    result = engine.clone(value)

    assert result["a"] is result["b"][0] is result["b"][1]["c"]
    assert result["a"] == point


def test_clone_does_not_alias_input(engine):
    inner = [1]
    value = {"a": inner, "b": Point(inner, None)}

    result = engine.clone(value)

    assert result["a"] is not inner
    assert result["b"].x is result["a"]


def test_denormalize_of_normalize_is_structurally_equal(engine):
    value = {"points": [Point(1, 2), Point(3, 4)], "when": dt.date(2020, 2, 2), "tags": {"a", "b"}}

    assert engine.denormalize(engine.normalize(value)) == value


def test_deserialize_matches_clone(engine):
    node = Node("n")
    value = [node, {"again": node}, (1, 2), {3: Decimal("4")}]

    from_text = engine.deserialize(engine.serialize(value))
    cloned = engine.clone(value)

    assert from_text[1]["again"] is from_text[0]
    assert from_text[2:] == cloned[2:]
    assert vars(from_text[0]).keys() == vars(cloned[0]).keys()


def test_empty_engine_still_handles_plain_values():
    assert Engine.empty().clone({"a": [1, {"b": None}]}) == {"a": [1, {"b": None}]}


def test_deep_tuple_referencing_shallow_instance(engine):
    point = Point(1, 2)
    result = engine.clone([point, [[(point,)]], {"s": frozenset([3])}])

    assert result[1][0][0][0] is result[0]
    assert result[2]["s"] == frozenset([3])


def test_registered_instance_inside_tuple(engine):
    node = Node("n")
    result = engine.clone({"first": node, "group": {"members": (node,)}})

    assert result["group"]["members"][0] is result["first"]


@pytest.mark.parametrize(
    "wrap",
    [set, frozenset, tuple, deque, lambda kids: {i + 1: kid for i, kid in enumerate(kids)}],
    ids=["set", "frozenset", "tuple", "deque", "int-keyed-dict"],
)
def test_children_in_rebuilt_container_point_back_to_parent(engine, wrap):
    root = Node("root")
    kids = [Node("a"), Node("b")]
    for kid in kids:
        kid.parent = root
    root.children = wrap(kids)

    for result in (engine.clone(root), engine.deserialize(engine.serialize(root))):
        children = result.children
        members = list(children.values()) if isinstance(children, dict) else list(children)
        assert type(children) is type(root.children)
        assert sorted(member.name for member in members) == ["a", "b"]
        assert all(member.parent is result for member in members)


def test_second_reference_to_child_inside_set(engine):
    root = Node("root")
    kid = Node("kid")
    kid.parent = root
    root.children = {kid}
    root.favorite = kid

    result = engine.clone(root)

    assert result.children == {result.favorite}
    assert result.favorite.parent is result
