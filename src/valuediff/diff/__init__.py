"""
Diff engine for comparing structured values.
"""

from .line import Line
from .structural_diff import StructuralDiffer
from .renderer import DiffRenderer
from .api import diff, diff_tree

__all__ = [
    "Line",
    "StructuralDiffer",
    "DiffRenderer",
    "diff",
    "diff_tree",
]
