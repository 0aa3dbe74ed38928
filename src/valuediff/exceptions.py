"""
Exceptions raised by ValueDiff.

The diff engine itself degrades instead of failing; these are only raised
for invalid configuration or when strict shape checking is requested.
"""

from typing import Optional


class ValueDiffError(Exception):
    """Base class for ValueDiff errors."""


class ConfigurationError(ValueDiffError, ValueError):
    """Raised when an option value cannot be understood."""


class ShapeMismatchError(ValueDiffError):
    """
    Raised in strict mode when the two operands have incompatible shapes.

    Attributes:
        expected_kind: Shape kind name of the expected value
        received_kind: Shape kind name of the received value
        path: Dotted path to the offending node ("" for the root)
    """

    def __init__(self, expected_kind: str, received_kind: str, path: Optional[str] = None):
        self.expected_kind = expected_kind
        self.received_kind = received_kind
        self.path = path or ""
        location = f" at {self.path}" if self.path else ""
        super().__init__(
            f"Cannot compare {expected_kind} with {received_kind}{location}"
        )
