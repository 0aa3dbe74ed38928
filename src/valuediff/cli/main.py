"""
ValueDiff CLI - Command line interface for comparing two JSON documents.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import click

from .. import __version__
from ..core.options import DiffLabels, DiffOptions, IndentationStyle
from ..diff.line import Line
from ..diff.renderer import DiffRenderer
from ..diff.structural_diff import StructuralDiffer
from ..exceptions import ShapeMismatchError

# Exit statuses
EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def load_document(path: str) -> Any:
    """Load a JSON document, exiting with an error message on failure."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        click.echo(f"Error: Cannot read {path}: {e.strerror or e}", err=True)
        sys.exit(EXIT_ERROR)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON in {path}: {e}", err=True)
        sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(version=__version__, prog_name="valuediff")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """
    ValueDiff - Structural diffs for test assertions

    Show where two values of the same shape diverge.
    """
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("expected_file", type=click.Path(dir_okay=False))
@click.argument("received_file", type=click.Path(dir_okay=False))
@click.option(
    "--indent",
    type=click.Choice(["pipe", "tab"]),
    default="pipe",
    envvar="VALUEDIFF_INDENT",
    show_default=True,
    help="Indentation style for nested differences",
)
@click.option(
    "--labels",
    type=click.Choice(["expectation", "comparing"]),
    default="expectation",
    envvar="VALUEDIFF_LABELS",
    show_default=True,
    help="Expected/Received/Missing/Extra or Previous/Current/Removed/Added",
)
@click.option("--skip-count-values", is_flag=True, help="Show only counts in 'Different count' blocks")
@click.option("--strict-shapes", is_flag=True, help="Fail when the two documents have incompatible shapes")
@click.option("--format", "-f", type=click.Choice(["text", "json"]), default="text")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
def compare(expected_file, received_file, indent, labels, skip_count_values, strict_shapes, format, output):
    """
    Compare two JSON documents and show differences.

    EXPECTED_FILE is the baseline document.
    RECEIVED_FILE is the document being checked.

    Exits with status 0 when identical, 1 when differences were found.
    """
    options = DiffOptions(
        indentation_style=IndentationStyle.parse(indent),
        skip_value_on_count_mismatch=skip_count_values,
        labels=DiffLabels.preset(labels),
        strict_shapes=strict_shapes,
    )

    expected = load_document(expected_file)
    received = load_document(received_file)

    try:
        lines = StructuralDiffer(options).compare(expected, received)
    except ShapeMismatchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    messages = DiffRenderer(options).render(lines)

    if format == "json":
        result = json.dumps(_to_report(lines, messages, options), indent=2)
    elif messages:
        result = "\n".join(message.rstrip("\n") for message in messages)
    else:
        result = "No differences found."

    if output:
        Path(output).write_text(result + "\n", encoding="utf-8")
        click.echo(f"Output written to: {output}")
    else:
        click.echo(result)

    sys.exit(EXIT_DIFFERENT if lines else EXIT_IDENTICAL)


def _to_report(lines: List[Line], messages: List[str], options: DiffOptions) -> Dict[str, Any]:
    return {
        "identical": not lines,
        "options": options.to_dict(),
        "messages": messages,
        "lines": [line.to_dict() for line in lines],
    }


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
