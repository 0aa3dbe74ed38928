"""
Command line interface for ValueDiff.
"""

from .main import cli, main

__all__ = ["cli", "main"]
