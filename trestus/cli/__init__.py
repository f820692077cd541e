"""Command-line interface."""

from trestus.cli.main import cli


__all__ = ["cli"]
