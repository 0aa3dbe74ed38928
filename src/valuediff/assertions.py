"""
Assertion helpers built on the diff engine.
"""

import sys
from typing import Any, Optional, TextIO

from .core.introspect import canonical
from .core.options import DiffOptions
from .diff.api import diff


def assert_equal(expected: Any, received: Any, options: Optional[DiffOptions] = None) -> None:
    """
    Assert two values are equal and describe the difference if they aren't.

    Args:
        expected: Expected value
        received: Received value
        options: Diff options; the configured defaults are used when omitted

    Raises:
        AssertionError: If the values are not equal
    """
    if _values_equal(expected, received):
        return

    messages = diff(expected, received, options)
    if not messages:
        # Unequal values with identical structure, e.g. float("nan")
        raise AssertionError(f"Found difference for {expected!r} != {received!r}")
    raise AssertionError("Found difference for " + ", ".join(messages))


def dump_diff(
    expected: Any,
    received: Any,
    options: Optional[DiffOptions] = None,
    file: Optional[TextIO] = None,
) -> None:
    """
    Print the differences between two values.

    Equal values print nothing.

    Args:
        expected: Expected value
        received: Received value
        options: Diff options; the configured defaults are used when omitted
        file: Stream to write to (defaults to stdout)
    """
    if _values_equal(expected, received):
        return

    out = file if file is not None else sys.stdout
    for message in diff(expected, received, options):
        print(message, file=out)


def _values_equal(expected: Any, received: Any) -> bool:
    try:
        return bool(expected == received)
    except (TypeError, ValueError):
        # Element-wise comparisons such as numpy arrays have no single truth value
        return canonical(expected) == canonical(received)
