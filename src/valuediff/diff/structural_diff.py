"""
Structural diff engine for comparing arbitrary Python values.

Walks two values in lock-step, classifies each node by shape and produces a
tree of Line nodes describing where the values diverge.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..core.introspect import canonical, display, shape_of
from ..core.options import DiffOptions, resolve_options
from ..core.shape import ShapeDescriptor, ShapeKind
from ..exceptions import ShapeMismatchError
from .line import Line

logger = logging.getLogger(__name__)

# Kinds whose size mismatch is reported as one "Different count" block
COUNTED_KINDS = (
    ShapeKind.SEQUENCE,
    ShapeKind.MAP,
    ShapeKind.SET,
    ShapeKind.TAGGED_UNION,
)


class StructuralDiffer:
    """
    Engine for computing structural diffs between two values.

    The differ is stateless apart from its options and may be shared
    between threads.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        """
        Initialize the differ.

        Args:
            options: Diff options; the configured defaults are used when omitted
        """
        self.options = resolve_options(options)
        self.labels = self.options.labels

    def compare(self, expected: Any, received: Any, level: int = 0) -> List[Line]:
        """
        Compare two values.

        Args:
            expected: Expected (baseline) value
            received: Received (actual) value
            level: Indentation level assigned to the top-level lines

        Returns:
            Top-level diff lines; empty when no difference was found

        Raises:
            ShapeMismatchError: If strict_shapes is enabled and the shapes are incompatible
        """
        # Canonical renderings are cached per call so each node is rendered once
        memo: Dict[int, Tuple[Any, str]] = {}
        return self._compare(expected, received, level, "", memo)

    def _compare(
        self,
        expected: Any,
        received: Any,
        level: int,
        path: str,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        expected_shape = shape_of(expected)
        received_shape = shape_of(received)

        expected_absent = _is_absent(expected_shape)
        received_absent = _is_absent(received_shape)
        if expected_absent and received_absent:
            return []
        if expected_absent or received_absent:
            return self._leaf_lines(expected, expected_shape, received, received_shape, level, memo)

        # Present optionals are transparent: compare the wrapped values at the same level
        if expected_shape.kind == ShapeKind.OPTIONAL:
            return self._compare(expected_shape.wrapped, received, level, path, memo)
        if received_shape.kind == ShapeKind.OPTIONAL:
            return self._compare(expected, received_shape.wrapped, level, path, memo)

        self._check_shapes(expected_shape, received_shape, path)

        if expected_shape.children_count == 0 or received_shape.children_count == 0:
            return self._compare_childless(
                expected, expected_shape, received, received_shape, level, memo
            )

        if expected_shape.kind != received_shape.kind:
            logger.debug(
                f"Comparing {expected_shape.kind.value} with {received_shape.kind.value}"
                f" at {path or '<root>'} as strings"
            )
            return self._leaf_lines(expected, expected_shape, received, received_shape, level, memo)

        kind = expected_shape.kind

        if kind in COUNTED_KINDS and expected_shape.children_count != received_shape.children_count:
            return [
                self._different_count_block(
                    expected, expected_shape, received, received_shape, level
                )
            ]

        if kind == ShapeKind.MAP:
            return self._compare_maps(expected_shape, received_shape, level, path, memo)

        if kind == ShapeKind.SET:
            return self._compare_sets(expected_shape, received_shape, level, memo)

        if kind == ShapeKind.TAGGED_UNION and expected_shape.case != received_shape.case:
            return self._expected_received_lines(
                expected_shape.case, received_shape.case, level
            )

        if kind == ShapeKind.RECORD and (
            set(expected_shape.field_names) != set(received_shape.field_names)
        ):
            logger.debug(f"Records with different fields at {path or '<root>'}, comparing as strings")
            return self._leaf_lines(expected, expected_shape, received, received_shape, level, memo)

        return self._compare_children(expected_shape, received_shape, level, path, memo)

    def _check_shapes(
        self,
        expected_shape: ShapeDescriptor,
        received_shape: ShapeDescriptor,
        path: str,
    ) -> None:
        """Raise ShapeMismatchError for incompatible shapes in strict mode."""
        if not self.options.strict_shapes:
            return

        if expected_shape.kind != received_shape.kind:
            raise ShapeMismatchError(
                expected_shape.kind.value, received_shape.kind.value, path
            )

        if expected_shape.kind == ShapeKind.RECORD and (
            set(expected_shape.field_names) != set(received_shape.field_names)
        ):
            raise ShapeMismatchError(
                f"record({', '.join(expected_shape.field_names)})",
                f"record({', '.join(received_shape.field_names)})",
                path,
            )

    def _compare_childless(
        self,
        expected: Any,
        expected_shape: ShapeDescriptor,
        received: Any,
        received_shape: ShapeDescriptor,
        level: int,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        """
        Compare values where at least one side has no children.

        Args:
            expected: Expected value
            expected_shape: Shape of the expected value
            received: Received value
            received_shape: Shape of the received value
            level: Indentation level
            memo: Canonical rendering cache for the current comparison

        Returns:
            Diff lines (empty when the canonical renderings match)
        """
        if canonical(expected, memo) == canonical(received, memo):
            return []

        # Empty collections have no children but are not leaves
        if expected_shape.kind == received_shape.kind and expected_shape.kind.is_collection:
            return [
                self._different_count_block(
                    expected, expected_shape, received, received_shape, level
                )
            ]

        return self._leaf_lines(expected, expected_shape, received, received_shape, level, memo)

    def _compare_maps(
        self,
        expected_shape: ShapeDescriptor,
        received_shape: ShapeDescriptor,
        level: int,
        path: str,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        """Diff two same-size maps by common, missing and extra keys."""
        expected_entries = expected_shape.entries
        received_entries = received_shape.entries

        common_keys = [key for key in expected_entries if key in received_entries]
        missing_keys = [key for key in expected_entries if key not in received_entries]
        extra_keys = [key for key in received_entries if key not in expected_entries]

        result: List[Line] = []

        for key in common_keys:
            children = self._compare(
                expected_entries[key],
                received_entries[key],
                level + 1,
                f"{path}[{key!r}]",
                memo,
            )
            if children:
                result.append(Line(f"Key {display(key)}:", level, tuple(children)))

        if missing_keys:
            result.append(
                self._key_pairs_block(self.labels.missing, missing_keys, expected_entries, level)
            )

        if extra_keys:
            result.append(
                self._key_pairs_block(self.labels.extra, extra_keys, received_entries, level)
            )

        return result

    def _key_pairs_block(self, label: str, keys: List[Any], entries: Any, level: int) -> Line:
        pairs = tuple(
            Line(f"{display(key)}: {display(entries[key])}", level + 1)
            for key in keys
        )
        return Line(f"{label} key pairs:", level, pairs, can_be_ordered=False)

    def _compare_sets(
        self,
        expected_shape: ShapeDescriptor,
        received_shape: ShapeDescriptor,
        level: int,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        """
        Report elements present on only one side of two same-size sets.

        Elements are matched by canonical rendering, the same identity used
        for leaves and sequences, so {1} and {1.0} differ even though 1 == 1.0.
        """
        expected_elements = {canonical(element, memo): element for element in expected_shape.elements}
        received_elements = {canonical(element, memo): element for element in received_shape.elements}

        missing = [
            Line(f"{self.labels.missing}: {display(element)}", level)
            for key, element in expected_elements.items()
            if key not in received_elements
        ]
        extra = [
            Line(f"{self.labels.extra}: {display(element)}", level)
            for key, element in received_elements.items()
            if key not in expected_elements
        ]
        return missing + extra

    def _compare_children(
        self,
        expected_shape: ShapeDescriptor,
        received_shape: ShapeDescriptor,
        level: int,
        path: str,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        """
        Compare records, sequences and same-case unions child by child.

        Args:
            expected_shape: Shape of the expected value
            received_shape: Shape of the received value
            level: Indentation level of the wrapper lines
            path: Path of the parent node, used in strict mode errors
            memo: Canonical rendering cache for the current comparison

        Returns:
            One wrapper line per differing child
        """
        result: List[Line] = []

        for label, child_path, expected_child, received_child in self._child_pairs(
            expected_shape, received_shape, path
        ):
            if canonical(expected_child, memo) == canonical(received_child, memo):
                continue

            children = self._compare(expected_child, received_child, level + 1, child_path, memo)
            if children:
                result.append(Line(label, level, tuple(children)))

        return result

    def _child_pairs(
        self,
        expected_shape: ShapeDescriptor,
        received_shape: ShapeDescriptor,
        path: str,
    ) -> List[Tuple[str, str, Any, Any]]:
        """Pair up children as (label, path, expected child, received child)."""
        kind = expected_shape.kind

        if kind == ShapeKind.RECORD:
            received_fields = dict(received_shape.fields)
            return [
                (f"{name}:", f"{path}.{name}", value, received_fields[name])
                for name, value in expected_shape.fields
            ]

        if kind == ShapeKind.SEQUENCE:
            return [
                (f"Collection[{index}]:", f"{path}[{index}]", lhs, rhs)
                for index, (lhs, rhs) in enumerate(
                    zip(expected_shape.elements, received_shape.elements)
                )
            ]

        # TAGGED_UNION with matching case
        return [
            (f".{index}:", f"{path}.{expected_shape.case}.{index}", lhs, rhs)
            for index, (lhs, rhs) in enumerate(
                zip(expected_shape.payload, received_shape.payload)
            )
        ]

    def _different_count_block(
        self,
        expected: Any,
        expected_shape: ShapeDescriptor,
        received: Any,
        received_shape: ShapeDescriptor,
        level: int,
    ) -> Line:
        """Build the "Different count" block for two containers of different size."""
        expected_text = f"({expected_shape.children_count})"
        received_text = f"({received_shape.children_count})"

        if not self.options.skip_value_on_count_mismatch:
            expected_text += f" {display(expected)}"
            received_text += f" {display(received)}"

        children = (
            Line(f"{self.labels.received}: {received_text}", level + 1, can_be_ordered=False),
            Line(f"{self.labels.expected}: {expected_text}", level + 1, can_be_ordered=False),
        )
        return Line("Different count:", level, children, can_be_ordered=False)

    def _leaf_lines(
        self,
        expected: Any,
        expected_shape: ShapeDescriptor,
        received: Any,
        received_shape: ShapeDescriptor,
        level: int,
        memo: Dict[int, Tuple[Any, str]],
    ) -> List[Line]:
        expected_text = self._printable(expected, expected_shape)
        received_text = self._printable(received, received_shape)

        # e.g. 1 and "1" print the same; show their canonical forms instead
        if expected_text == received_text:
            expected_text = canonical(expected, memo)
            received_text = canonical(received, memo)

        return self._expected_received_lines(expected_text, received_text, level)

    def _printable(self, value: Any, shape: ShapeDescriptor) -> str:
        if shape.kind == ShapeKind.TAGGED_UNION:
            # str() of IntEnum and StrEnum members is their value, not their case
            if isinstance(value, Enum):
                return f"{type(value).__qualname__}.{shape.case}"
            # Unions carrying a payload are shown by case label only
            if shape.payload:
                return shape.case
        return display(value)

    def _expected_received_lines(self, expected: str, received: str, level: int) -> List[Line]:
        return [
            Line(f"{self.labels.expected}: {expected}", level, can_be_ordered=False),
            Line(f"{self.labels.received}: {received}", level, can_be_ordered=False),
        ]


def _is_absent(shape: ShapeDescriptor) -> bool:
    return shape.kind == ShapeKind.OPTIONAL and not shape.present
