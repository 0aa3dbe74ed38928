"""
Core components for ValueDiff: shapes, introspection and options.
"""

from .shape import Introspectable, ShapeDescriptor, ShapeKind
from .introspect import canonical, display, shape_of
from .options import (
    DiffLabels,
    DiffOptions,
    IndentationStyle,
    configure,
    get_default_options,
    reset_default_options,
)
from . import numeric  # noqa: F401  registers numpy shapes

__all__ = [
    "Introspectable",
    "ShapeDescriptor",
    "ShapeKind",
    "canonical",
    "display",
    "shape_of",
    "DiffLabels",
    "DiffOptions",
    "IndentationStyle",
    "configure",
    "get_default_options",
    "reset_default_options",
]
