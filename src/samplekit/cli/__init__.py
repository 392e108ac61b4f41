"""Command-line interface."""

from samplekit.cli.main import main

__all__ = ["main"]
