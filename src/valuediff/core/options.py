"""
Configuration for ValueDiff.

DiffOptions is pure per-call configuration. A process-wide default can be
installed with configure() so that diff() and the assertion helpers pick it
up without passing options explicitly.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..exceptions import ConfigurationError


class IndentationStyle(Enum):
    """Indentation unit repeated once per nesting level."""
    PIPE = "|\t"
    TAB = "\t"

    @classmethod
    def parse(cls, name: str) -> "IndentationStyle":
        """
        Look up a style by its name ("pipe" or "tab").

        Raises:
            ConfigurationError: If the name is unknown
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(style.name.lower() for style in cls)
            raise ConfigurationError(
                f"Unknown indentation style {name!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class DiffLabels:
    """Display strings used for the two sides and for one-sided entries."""
    expected: str = "Expected"
    received: str = "Received"
    missing: str = "Missing"
    extra: str = "Extra"

    @classmethod
    def expectation(cls) -> "DiffLabels":
        """Labels for test assertions."""
        return cls()

    @classmethod
    def comparing(cls) -> "DiffLabels":
        """Labels for comparing two states of the same thing."""
        return cls(expected="Previous", received="Current", missing="Removed", extra="Added")

    @classmethod
    def preset(cls, name: str) -> "DiffLabels":
        """
        Look up a label preset by name.

        Args:
            name: "expectation" or "comparing"

        Raises:
            ConfigurationError: If the name is unknown
        """
        presets = {
            "expectation": cls.expectation,
            "comparing": cls.comparing,
        }
        factory = presets.get(name.strip().lower())
        if factory is None:
            raise ConfigurationError(
                f"Unknown label preset {name!r} (expected one of: {', '.join(presets)})"
            )
        return factory()


@dataclass(frozen=True)
class DiffOptions:
    """Options controlling how differences are computed and rendered."""
    indentation_style: IndentationStyle = IndentationStyle.PIPE

    # When set, "Different count" blocks show only the counts
    skip_value_on_count_mismatch: bool = False

    labels: DiffLabels = field(default_factory=DiffLabels)

    # Raise ShapeMismatchError instead of degrading to a string comparison
    strict_shapes: bool = False

    def replace(self, **changes: Any) -> "DiffOptions":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "indentation_style": self.indentation_style.name.lower(),
            "skip_value_on_count_mismatch": self.skip_value_on_count_mismatch,
            "labels": dataclasses.asdict(self.labels),
            "strict_shapes": self.strict_shapes,
        }


# Process-wide defaults used when a call passes no options
_default_options: DiffOptions = DiffOptions()


def configure(**kwargs: Any) -> DiffOptions:
    """
    Replace the default options.

    Args:
        **kwargs: DiffOptions fields; unspecified fields keep their built-in defaults

    Returns:
        The new default DiffOptions
    """
    global _default_options
    _default_options = DiffOptions(**kwargs)
    return _default_options


def get_default_options() -> DiffOptions:
    """Get the default options."""
    return _default_options


def reset_default_options() -> DiffOptions:
    """Restore the built-in default options."""
    global _default_options
    _default_options = DiffOptions()
    return _default_options


def resolve_options(options: Optional[DiffOptions]) -> DiffOptions:
    """Return ``options`` or the configured defaults when it is None."""
    return options if options is not None else _default_options
