"""Rules command implementation.

Lists the fixed permission policy applied by every scan.
"""

import typer
from rich.table import Table

from sunshine.audit import HomeDirectoryUnavailableError, build_catalog, resolve_home
from sunshine.utils.formatting import console, print_error


def list_rules() -> None:
    """List the permission rules applied to every entry."""
    try:
        home = resolve_home()
    except HomeDirectoryUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(
        title="Permission Policy",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Rule", no_wrap=True)
    table.add_column("Target")
    table.add_column("Kind", style="muted")
    table.add_column("Mode", style="expected", justify="right")

    for rule in build_catalog(home):
        kind = rule.expected_kind or rule.applies_to
        table.add_row(
            rule.rule_id,
            rule.description,
            kind.value if kind else "-",
            str(rule.expected_mode),
        )

    console.print(table)
