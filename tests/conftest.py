"""
Shared fixtures and sample types for ValueDiff tests.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from valuediff import Introspectable, ShapeDescriptor, reset_default_options


@dataclass
class ComplexCounter:
    counter: int


@dataclass
class Address:
    street: str
    post_code: str
    counter: ComplexCounter


@dataclass
class Person:
    name: str
    age: int
    address: Address


@dataclass
class Profile:
    handle: str
    nickname: Optional[str] = None


class Maybe(Introspectable):
    """Explicit optional wrapper used to exercise optional transparency."""

    def __init__(self, value=None):
        self.value = value

    def diff_shape(self) -> ShapeDescriptor:
        if self.value is None:
            return ShapeDescriptor.absent()
        return ShapeDescriptor.optional(self.value)

    def diff_repr(self) -> str:
        return "Maybe.none" if self.value is None else f"Maybe({self.value})"


class Result(Introspectable):
    """Tagged union with an ordered payload."""

    def __init__(self, case: str, *payload):
        self.case = case
        self.payload = payload

    def diff_shape(self) -> ShapeDescriptor:
        return ShapeDescriptor.tagged_union(self.case, self.payload)

    def __str__(self) -> str:
        if not self.payload:
            return self.case
        return f"{self.case}({', '.join(str(item) for item in self.payload)})"


def make_person(
    name: str = "Krzysztof",
    age: int = 29,
    street: str = "Times Square",
    counter: int = 2,
) -> Person:
    return Person(
        name=name,
        age=age,
        address=Address(street=street, post_code="00-1000", counter=ComplexCounter(counter)),
    )


@pytest.fixture(autouse=True)
def default_options():
    """Restore the global default options around every test."""
    reset_default_options()
    yield
    reset_default_options()


@pytest.fixture
def truth() -> Person:
    return make_person()
