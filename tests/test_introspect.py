"""
Tests for shape introspection and canonical rendering.
"""

import datetime
from collections import OrderedDict, deque
from decimal import Decimal
from enum import IntEnum

import numpy as np

from valuediff import Introspectable, ShapeDescriptor, ShapeKind, diff, shape_of
from valuediff.core.introspect import canonical, display

from conftest import Maybe, Result, make_person


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Money:
    """Opaque type that opts in through registration."""

    __slots__ = ("_cents",)

    def __init__(self, cents):
        self._cents = cents

    def __str__(self):
        return f"${self._cents / 100:.2f}"


@shape_of.register(Money)
def _money_shape(value):
    return ShapeDescriptor.record([("cents", value._cents)])


class Slotted:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


class Blank:
    """Object with no visible attributes."""

    def __repr__(self):
        return "Blank"


class Counted(Introspectable):
    """Primitive that counts how often it is described."""

    calls = 0

    def diff_shape(self) -> ShapeDescriptor:
        Counted.calls += 1
        return ShapeDescriptor.primitive()

    def diff_repr(self) -> str:
        return "counted"


class TestShapeOf:
    """Tests for shape classification."""

    def test_primitives(self):
        """Test scalar built-ins are primitives."""
        for value in (1, 1.5, True, "text", b"raw", Decimal("1.0"), datetime.date(2024, 1, 1)):
            assert shape_of(value).kind == ShapeKind.PRIMITIVE

    def test_none_is_absent_optional(self):
        """Test None is an absent optional."""
        shape = shape_of(None)

        assert shape.kind == ShapeKind.OPTIONAL
        assert shape.present is False
        assert shape.children_count == 0

    def test_collections(self):
        """Test built-in containers."""
        assert shape_of([1, 2]).kind == ShapeKind.SEQUENCE
        assert shape_of((1, 2)).kind == ShapeKind.SEQUENCE
        assert shape_of(deque([1])).kind == ShapeKind.SEQUENCE
        assert shape_of({"a": 1}).kind == ShapeKind.MAP
        assert shape_of(OrderedDict(a=1)).kind == ShapeKind.MAP
        assert shape_of({1}).kind == ShapeKind.SET
        assert shape_of(frozenset({1})).kind == ShapeKind.SET

    def test_dataclass_fields_in_order(self):
        """Test dataclass fields keep declaration order."""
        shape = shape_of(make_person())

        assert shape.kind == ShapeKind.RECORD
        assert shape.field_names == ("name", "age", "address")

    def test_enums_are_tagged_unions(self):
        """Test enum members, including IntEnum, are payload-free unions."""
        shape = shape_of(Priority.HIGH)

        assert shape.kind == ShapeKind.TAGGED_UNION
        assert shape.case == "HIGH"
        assert shape.payload == ()

    def test_introspectable(self):
        """Test Introspectable subclasses describe themselves."""
        shape = shape_of(Result("success", 1, 2))

        assert shape.kind == ShapeKind.TAGGED_UNION
        assert shape.case == "success"
        assert shape.children_count == 2

        assert shape_of(Maybe(3)).wrapped == 3

    def test_registered_type(self):
        """Test types registered with shape_of.register use their describer."""
        shape = shape_of(Money(150))

        assert shape.kind == ShapeKind.RECORD
        assert shape.fields == (("cents", 150),)

    def test_slots_object(self):
        """Test __slots__ attributes become record fields."""
        shape = shape_of(Slotted(1, 2))

        assert shape.kind == ShapeKind.RECORD
        assert shape.fields == (("x", 1), ("y", 2))

    def test_unknown_builtins_are_primitive(self):
        """Test objects without attributes degrade to primitives."""
        assert shape_of(object()).kind == ShapeKind.PRIMITIVE
        assert shape_of(len).kind == ShapeKind.PRIMITIVE
        assert shape_of(int).kind == ShapeKind.PRIMITIVE

    def test_numpy(self):
        """Test arrays are sequences over the first axis and scalars are primitives."""
        matrix = np.array([[1, 2], [3, 4]])

        assert shape_of(matrix).kind == ShapeKind.SEQUENCE
        assert shape_of(matrix).children_count == 2
        assert shape_of(np.array(5)).kind == ShapeKind.PRIMITIVE
        assert shape_of(np.float64(1.5)).kind == ShapeKind.PRIMITIVE

    def test_attributeless_object_is_primitive(self):
        """Test objects with no visible state fall back to their repr."""
        assert shape_of(Blank()).kind == ShapeKind.PRIMITIVE
        assert canonical(Blank()) == "Blank"

    def test_exceptions_are_records(self):
        """Test exceptions expose their args and attributes as fields."""
        error = KeyError("missing")
        error.hint = "check the key"

        shape = shape_of(error)

        assert shape.kind == ShapeKind.RECORD
        assert shape.fields == (("args", ("missing",)), ("hint", "check the key"))


class TestCanonical:
    """Tests for canonical renderings."""

    def test_map_order_insensitive(self):
        """Test insertion order does not affect map renderings."""
        assert canonical({"a": 1, "b": 2}) == canonical({"b": 2, "a": 1})

    def test_set_order_insensitive(self):
        """Test set renderings are sorted."""
        assert canonical({"pear", "apple"}) == "{'apple', 'pear'}"
        assert canonical(set()) == "set()"

    def test_sequence_type_is_part_of_rendering(self):
        """Test lists and tuples with the same elements render differently."""
        assert canonical([1, 2]) != canonical((1, 2))

    def test_present_optional_is_transparent(self):
        """Test a present optional renders as its wrapped value."""
        assert canonical(Maybe(3)) == canonical(3)
        assert canonical(Maybe()) == "None"

    def test_tagged_union(self):
        """Test union renderings include the case and payload."""
        assert canonical(Result("success", 1)) == "Result.success(1)"
        assert canonical(Priority.LOW) == "Priority.LOW"

    def test_display_uses_diff_repr(self):
        """Test display prefers diff_repr for Introspectable values."""
        assert display(Maybe(3)) == "Maybe(3)"
        assert display(Money(150)) == "$1.50"

    def test_memo_renders_each_node_once(self):
        """Test a shared memo reuses renderings of already visited nodes."""
        leaf = Counted()
        nested = [[leaf]]
        memo = {}
        Counted.calls = 0

        text = canonical(nested, memo)

        assert canonical(nested[0], memo) == "list[counted]"
        assert canonical(leaf, memo) == "counted"
        assert text == "list[list[counted]]"
        assert Counted.calls == 1


class TestRegisteredTypes:
    """Tests for diffing registered and slotted types."""

    def test_registered_type_diff(self):
        """Test a registered record is diffed by its described fields."""
        assert diff(Money(150), Money(175)) == ["cents:\n|\tExpected: 150\n|\tReceived: 175\n"]

    def test_slotted_diff(self):
        """Test a slotted object is diffed by its slots."""
        assert diff(Slotted(1, 2), Slotted(1, 3)) == ["y:\n|\tExpected: 2\n|\tReceived: 3\n"]

    def test_int_enum_field(self):
        """Test IntEnum members compare as unions rather than integers."""
        assert diff([Priority.LOW], [Priority.HIGH]) == [
            "Collection[0]:\n|\tExpected: Priority.LOW\n|\tReceived: Priority.HIGH\n"
        ]
