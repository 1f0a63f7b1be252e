"""Command-line interface for trgrpc."""

from trgrpc.cli.main import main, run

__all__ = ["main", "run"]
