"""
Diff renderer for turning diff trees into text.

Orderable siblings are sorted before serialization so that maps and sets,
whose iteration order is not meaningful, always render identically.
"""

from io import StringIO
from typing import List, Optional, Sequence

from ..core.options import DiffOptions, resolve_options
from .line import Line


class DiffRenderer:
    """
    Renders diff trees as indented text blocks.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        """
        Initialize the renderer.

        Args:
            options: Diff options; only the indentation style is used here
        """
        self.options = resolve_options(options)
        self.indentation = self.options.indentation_style.value

    def render(self, lines: Sequence[Line]) -> List[str]:
        """
        Render top-level lines into diff messages.

        Args:
            lines: Top-level lines produced by the differ

        Returns:
            One string per top-level line, or a single joined string when
            no top-level line has children
        """
        if not lines:
            return []

        contents = [self.render_line(line) for line in self.order(lines)]

        # A flat list of leaf differences (e.g. diff(2, 3)) reads best as one message
        if not any(line.has_children for line in lines):
            return ["".join(contents)]
        return contents

    def render_line(self, line: Line) -> str:
        """Render a line and its subtree."""
        output = StringIO()
        self._write(output, line)
        return output.getvalue()

    def _write(self, output: StringIO, line: Line) -> None:
        output.write(self.indentation * line.indentation_level)
        output.write(line.contents)
        output.write("\n")
        for child in self.order(line.children):
            self._write(output, child)

    @staticmethod
    def order(siblings: Sequence[Line]) -> List[Line]:
        """
        Order one sibling group.

        The group is sorted by contents only when every sibling is orderable;
        a single non-orderable sibling keeps the whole group in emission order.
        """
        if all(line.can_be_ordered for line in siblings):
            return sorted(siblings, key=lambda line: line.contents)
        return list(siblings)
