"""
Top-level diff functions.
"""

import logging
from typing import Any, List, Optional

from ..core.options import DiffOptions, resolve_options
from .line import Line
from .renderer import DiffRenderer
from .structural_diff import StructuralDiffer

logger = logging.getLogger(__name__)


def diff_tree(expected: Any, received: Any, options: Optional[DiffOptions] = None) -> List[Line]:
    """
    Compute the unrendered diff tree between two values.

    Args:
        expected: Expected value
        received: Received value
        options: Diff options; the configured defaults are used when omitted

    Returns:
        Top-level diff lines; empty when no difference was found
    """
    lines = StructuralDiffer(options).compare(expected, received)
    logger.debug(f"Found {len(lines)} top-level difference(s)")
    return lines


def diff(expected: Any, received: Any, options: Optional[DiffOptions] = None) -> List[str]:
    """
    Build the list of differences between two values.

    Args:
        expected: Expected value
        received: Received value
        options: Diff options; the configured defaults are used when omitted

    Returns:
        Diff messages, one per top-level divergence; empty when the values match

    Example:
        >>> diff(2, 3)
        ['Expected: 2\\nReceived: 3\\n']
    """
    options = resolve_options(options)
    return DiffRenderer(options).render(diff_tree(expected, received, options))
