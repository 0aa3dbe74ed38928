"""
ValueDiff - Structural Diffs for Test Assertions

Explains where two values of the same shape diverge instead of merely
reporting that they are unequal.
"""

__version__ = "0.1.0"

from .core.shape import Introspectable, ShapeDescriptor, ShapeKind
from .core.introspect import shape_of
from .core.options import (
    DiffLabels,
    DiffOptions,
    IndentationStyle,
    configure,
    get_default_options,
    reset_default_options,
)
from .diff import Line, diff, diff_tree
from .assertions import assert_equal, dump_diff
from .exceptions import ConfigurationError, ShapeMismatchError, ValueDiffError

__all__ = [
    # Version
    "__version__",
    # Diffing
    "diff",
    "diff_tree",
    "Line",
    "assert_equal",
    "dump_diff",
    # Configuration
    "DiffOptions",
    "DiffLabels",
    "IndentationStyle",
    "configure",
    "get_default_options",
    "reset_default_options",
    # Introspection
    "Introspectable",
    "ShapeDescriptor",
    "ShapeKind",
    "shape_of",
    # Errors
    "ValueDiffError",
    "ConfigurationError",
    "ShapeMismatchError",
]
