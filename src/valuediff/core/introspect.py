"""
Introspection of Python values into shape descriptors.

shape_of() is a functools.singledispatch function: built-in types are
registered below and user types can opt in either by subclassing
Introspectable or by registering a describer:

    @shape_of.register(Money)
    def _(value):
        return ShapeDescriptor.record([("amount", value.amount), ("currency", value.currency)])
"""

import dataclasses
import datetime
import functools
import inspect
import logging
import pathlib
import uuid
from collections import deque
from collections.abc import Mapping, Set
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple

from .shape import Introspectable, ShapeDescriptor, ShapeKind

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    pathlib.PurePath,
)


@functools.singledispatch
def shape_of(value: Any) -> ShapeDescriptor:
    """
    Classify a value into a ShapeDescriptor.

    Args:
        value: Any Python value

    Returns:
        The value's ShapeDescriptor; unclassifiable values are primitives
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ShapeDescriptor.record(
            (f.name, getattr(value, f.name)) for f in dataclasses.fields(value)
        )

    if isinstance(value, Mapping):
        return ShapeDescriptor.map(value)

    if isinstance(value, Set):
        return ShapeDescriptor.set(value)

    attributes = _instance_attributes(value)
    if attributes is not None:
        return ShapeDescriptor.record(attributes)

    logger.debug(f"No shape known for {type(value).__qualname__}, treating as primitive")
    return ShapeDescriptor.primitive()


@shape_of.register(Introspectable)
def _introspectable_shape(value: Introspectable) -> ShapeDescriptor:
    return value.diff_shape()


@shape_of.register(type(None))
def _none_shape(value: None) -> ShapeDescriptor:
    return ShapeDescriptor.absent()


def _primitive_shape(value: Any) -> ShapeDescriptor:
    # IntEnum and StrEnum members reach here through int/str
    if isinstance(value, Enum):
        return _enum_shape(value)
    return ShapeDescriptor.primitive()


for _primitive_type in PRIMITIVE_TYPES:
    shape_of.register(_primitive_type, _primitive_shape)


@shape_of.register(Enum)
def _enum_shape(value: Enum) -> ShapeDescriptor:
    return ShapeDescriptor.tagged_union(value.name)


@shape_of.register(tuple)
def _tuple_shape(value: tuple) -> ShapeDescriptor:
    # namedtuple instances are records, plain tuples are sequences
    field_names = getattr(type(value), "_fields", None)
    if field_names is not None:
        return ShapeDescriptor.record(zip(field_names, value))
    return ShapeDescriptor.sequence(value)


@shape_of.register(list)
@shape_of.register(deque)
@shape_of.register(range)
def _sequence_shape(value: Any) -> ShapeDescriptor:
    return ShapeDescriptor.sequence(value)


@shape_of.register(dict)
def _dict_shape(value: dict) -> ShapeDescriptor:
    return ShapeDescriptor.map(value)


@shape_of.register(set)
@shape_of.register(frozenset)
def _set_shape(value: Any) -> ShapeDescriptor:
    return ShapeDescriptor.set(value)


@shape_of.register(BaseException)
def _exception_shape(value: BaseException) -> ShapeDescriptor:
    # Constructor arguments live in C-level storage, not in __dict__
    return ShapeDescriptor.record([("args", value.args)] + list(vars(value).items()))


def _instance_attributes(value: Any) -> Any:
    """
    Collect instance attributes of a plain object.

    Returns:
        List of (name, value) pairs, or None when the object is not a
        plain instance (classes, modules, functions, builtins) or has no
        attributes to compare
    """
    if isinstance(value, type) or inspect.ismodule(value) or inspect.isroutine(value):
        return None
    if type(value).__module__ == "builtins":
        return None

    attributes: List[Tuple[str, Any]] = []
    seen = set()

    for klass in type(value).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in seen:
                continue
            if hasattr(value, name):
                seen.add(name)
                attributes.append((name, getattr(value, name)))

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, attribute in instance_dict.items():
            if name not in seen:
                seen.add(name)
                attributes.append((name, attribute))

    # Without visible state the repr is the only faithful rendering
    if not attributes:
        return None
    return attributes


def canonical(value: Any, memo: Optional[Dict[int, Tuple[Any, str]]] = None) -> str:
    """
    Render a value canonically for equality checks.

    Maps and sets are rendered with their entries sorted, so two equal
    values always produce the same string regardless of iteration order.

    Args:
        value: Any Python value
        memo: Optional cache shared across calls, keyed by object id. Each
            entry keeps a reference to its value so that ids stay unique
            while the cache is alive.

    Returns:
        Canonical string rendering
    """
    if memo is not None:
        cached = memo.get(id(value))
        if cached is not None and cached[0] is value:
            return cached[1]

    text = _render_canonical(value, memo)

    if memo is not None:
        memo[id(value)] = (value, text)
    return text


def _render_canonical(value: Any, memo: Optional[Dict[int, Tuple[Any, str]]]) -> str:
    shape = shape_of(value)
    kind = shape.kind

    if kind == ShapeKind.PRIMITIVE:
        if isinstance(value, Introspectable):
            return value.diff_repr()
        return repr(value)

    if kind == ShapeKind.OPTIONAL:
        return canonical(shape.wrapped, memo) if shape.present else "None"

    if kind == ShapeKind.RECORD:
        fields = ", ".join(f"{name}={canonical(field, memo)}" for name, field in shape.fields)
        return f"{type(value).__qualname__}({fields})"

    if kind == ShapeKind.SEQUENCE:
        elements = ", ".join(canonical(element, memo) for element in shape.elements)
        return f"{type(value).__qualname__}[{elements}]"

    if kind == ShapeKind.MAP:
        entries = sorted(
            f"{canonical(key, memo)}: {canonical(item, memo)}"
            for key, item in shape.entries.items()
        )
        return "{" + ", ".join(entries) + "}"

    if kind == ShapeKind.SET:
        if not shape.elements:
            return "set()"
        return "{" + ", ".join(sorted(canonical(element, memo) for element in shape.elements)) + "}"

    # TAGGED_UNION
    label = f"{type(value).__qualname__}.{shape.case}"
    if shape.payload:
        label += "(" + ", ".join(canonical(item, memo) for item in shape.payload) + ")"
    return label


def display(value: Any) -> str:
    """Render a value for humans."""
    if isinstance(value, Introspectable):
        return value.diff_repr()
    return str(value)
