"""CLI package for sunshine.

This package contains the Typer application and all subcommands.
"""

from sunshine.cli.main import app

__all__ = ["app"]
