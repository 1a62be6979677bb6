"""Command-line interface."""

from cssguide.cli.main import cli

__all__ = ["cli"]
