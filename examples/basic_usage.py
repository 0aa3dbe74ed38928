"""
Basic usage example for ValueDiff.

This example demonstrates:
- Diffing nested records, collections and maps
- Switching label presets and indentation
- Registering a shape for an opaque type
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from valuediff import (
    DiffLabels,
    DiffOptions,
    IndentationStyle,
    ShapeDescriptor,
    assert_equal,
    dump_diff,
    shape_of,
)


@dataclass
class Address:
    street: str
    post_code: str


@dataclass
class Person:
    name: str
    age: int
    address: Address
    nickname: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)


class Money:
    def __init__(self, cents: int, currency: str):
        self._cents = cents
        self._currency = currency

    def __str__(self):
        return f"{self._cents / 100:.2f} {self._currency}"


@shape_of.register(Money)
def _money_shape(value: Money) -> ShapeDescriptor:
    return ShapeDescriptor.record([("cents", value._cents), ("currency", value._currency)])


def main():
    expected = Person(
        name="Krzysztof",
        age=29,
        address=Address("Times Square", "00-1000"),
        tags=["admin", "ops"],
        scores={"math": 5, "art": 3},
    )
    received = Person(
        name="Krzysztof",
        age=30,
        address=Address("Broadway", "00-1000"),
        nickname="Chris",
        tags=["admin"],
        scores={"math": 4, "music": 3},
    )

    # 1. Print the differences with the default options
    print("=== Default ===")
    dump_diff(expected, received)

    # 2. Compare two states of the same object with tab indentation
    print("=== Comparing ===")
    options = DiffOptions(
        indentation_style=IndentationStyle.TAB,
        labels=DiffLabels.comparing(),
        skip_value_on_count_mismatch=True,
    )
    dump_diff(expected, received, options)

    # 3. Registered types are diffed by their described fields
    print("=== Registered type ===")
    dump_diff(Money(1050, "EUR"), Money(1050, "USD"))

    # 4. assert_equal raises with the same description
    try:
        assert_equal(expected.address, received.address)
    except AssertionError as e:
        print("=== assert_equal ===")
        print(e)


if __name__ == "__main__":
    main()
