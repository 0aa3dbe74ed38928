"""
Diff tree nodes.

A comparison produces a forest of Line nodes; the renderer turns them
into indented text.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Line:
    """
    One node of the diff tree.

    Lines marked can_be_ordered may be sorted by contents among their
    siblings. A non-orderable line pins the emission order of its whole
    sibling group.
    """
    contents: str
    indentation_level: int = 0
    children: Tuple["Line", ...] = ()
    can_be_ordered: bool = True

    def __post_init__(self):
        if self.indentation_level < 0:
            raise ValueError("indentation_level must be >= 0")
        # Accept any iterable of children but store an immutable tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "contents": self.contents,
            "indentation_level": self.indentation_level,
            "can_be_ordered": self.can_be_ordered,
            "children": [child.to_dict() for child in self.children],
        }
