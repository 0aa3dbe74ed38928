"""
Shape descriptors for ValueDiff.

A ShapeDescriptor tells the diff engine which comparison strategy applies
to a value and exposes the value's introspectable children.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple


class ShapeKind(Enum):
    """Structural categories a value can be classified into."""
    PRIMITIVE = "primitive"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAP = "map"
    SET = "set"
    OPTIONAL = "optional"
    TAGGED_UNION = "tagged_union"

    @property
    def is_collection(self) -> bool:
        """Whether the kind is a container with a countable size."""
        return self in (ShapeKind.SEQUENCE, ShapeKind.MAP, ShapeKind.SET)


@dataclass(frozen=True)
class ShapeDescriptor:
    """
    Describes the shape of one value.

    Only the attributes relevant to ``kind`` are populated; use the
    class method constructors rather than building instances directly.
    """
    kind: ShapeKind

    # RECORD
    fields: Tuple[Tuple[str, Any], ...] = ()

    # SEQUENCE and SET
    elements: Tuple[Any, ...] = ()

    # MAP
    entries: Mapping[Any, Any] = field(default_factory=dict)

    # OPTIONAL
    wrapped: Any = None
    present: bool = False

    # TAGGED_UNION
    case: Optional[str] = None
    payload: Tuple[Any, ...] = ()

    @classmethod
    def primitive(cls) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.PRIMITIVE)

    @classmethod
    def record(cls, fields: Iterable[Tuple[str, Any]]) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.RECORD, fields=tuple((str(k), v) for k, v in fields))

    @classmethod
    def sequence(cls, elements: Iterable[Any]) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.SEQUENCE, elements=tuple(elements))

    @classmethod
    def map(cls, entries: Mapping[Any, Any]) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.MAP, entries=entries)

    @classmethod
    def set(cls, elements: Iterable[Any]) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.SET, elements=tuple(elements))

    @classmethod
    def optional(cls, value: Any) -> "ShapeDescriptor":
        """Describe a present optional wrapping ``value``."""
        return cls(kind=ShapeKind.OPTIONAL, wrapped=value, present=True)

    @classmethod
    def absent(cls) -> "ShapeDescriptor":
        """Describe an optional holding nothing."""
        return cls(kind=ShapeKind.OPTIONAL, present=False)

    @classmethod
    def tagged_union(cls, case: str, payload: Iterable[Any] = ()) -> "ShapeDescriptor":
        return cls(kind=ShapeKind.TAGGED_UNION, case=str(case), payload=tuple(payload))

    @property
    def children_count(self) -> int:
        """Number of introspectable children."""
        if self.kind == ShapeKind.RECORD:
            return len(self.fields)
        if self.kind in (ShapeKind.SEQUENCE, ShapeKind.SET):
            return len(self.elements)
        if self.kind == ShapeKind.MAP:
            return len(self.entries)
        if self.kind == ShapeKind.OPTIONAL:
            return 1 if self.present else 0
        if self.kind == ShapeKind.TAGGED_UNION:
            return len(self.payload)
        return 0

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)


class Introspectable(ABC):
    """
    Base class for user types that describe their own shape.

    Subclasses must implement diff_shape(). diff_repr() may be overridden
    when ``str()`` is not a suitable human rendering.

    Example:
        class Result(Introspectable):
            def diff_shape(self):
                if self.error:
                    return ShapeDescriptor.tagged_union("failure", (self.error,))
                return ShapeDescriptor.tagged_union("success", (self.value,))
    """

    @abstractmethod
    def diff_shape(self) -> ShapeDescriptor:
        """
        Describe this value's shape.

        Returns:
            The ShapeDescriptor for this value
        """
        pass

    def diff_repr(self) -> str:
        """Human rendering used in diff messages."""
        return str(self)
