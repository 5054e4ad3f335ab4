"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich, and the
logging setup shared by all commands.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from sunshine.audit.models import PolicyWarning, ScanError
from sunshine.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route sunshine log records to stderr through Rich.

    Args:
        verbose: Log DEBUG records (per-entry ``scanning:`` lines).
        quiet: Only log errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root_logger = logging.getLogger("sunshine")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def create_findings_table(title: str = "Permission Findings") -> Table:
    """Create a pre-configured table for displaying findings.

    Args:
        title: Table title.

    Returns:
        Rich Table with Level, Path, Rule, Expected and Observed columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=7, justify="center")
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Rule", style="muted")
    table.add_column("Expected", style="expected", justify="right")
    table.add_column("Observed", style="observed", justify="right")
    return table


def format_warning_row(warning: PolicyWarning) -> tuple[str, str, str, str, str]:
    """Format a policy warning as a table row."""
    return (
        "[warning]WARN[/]",
        escape(warning.path),
        warning.rule_id,
        warning.expected,
        f"{warning.observed:04o}",
    )


def format_error_row(error: ScanError) -> tuple[str, str, str, str, str]:
    """Format a scan error as a table row."""
    return (
        "[error]ERROR[/]",
        escape(error.path),
        error.fault.value,
        "-",
        "-",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
