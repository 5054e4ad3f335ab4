"""CLI commands for sunshine.

This package contains all subcommand implementations.
"""

from sunshine.cli.commands import config, rules, scan

__all__ = ["config", "rules", "scan"]
