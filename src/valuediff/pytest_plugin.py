"""
pytest integration.

With ``--valuediff`` enabled, a failing ``assert expected == received``
between structured values (records, collections, unions) gets the
structural diff appended to pytest's explanation. The left operand is
reported as the expected value.
"""

from typing import Any, List, Optional

from .core.introspect import shape_of
from .core.shape import ShapeKind
from .diff.api import diff


def pytest_addoption(parser):
    group = parser.getgroup("valuediff")
    group.addoption(
        "--valuediff",
        action="store_true",
        default=False,
        help="Explain failing == assertions between structured values with a structural diff.",
    )


def pytest_assertrepr_compare(config, op: str, left: Any, right: Any) -> Optional[List[str]]:
    if op != "==" or not config.getoption("valuediff"):
        return None

    # pytest already explains primitives well
    if _is_primitive(left) and _is_primitive(right):
        return None

    messages = diff(left, right)
    if not messages:
        return None

    explanation = [f"{type(left).__qualname__} == {type(right).__qualname__}", "Found difference for"]
    for message in messages:
        explanation.extend(message.rstrip("\n").splitlines())
    return explanation


def _is_primitive(value: Any) -> bool:
    return shape_of(value).kind in (ShapeKind.PRIMITIVE, ShapeKind.OPTIONAL)
