"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from sunshine import __version__
from sunshine.cli.commands import config, rules, scan

# Create main Typer app
app = typer.Typer(
    name="sunshine",
    help="Audit file permissions of SSH keys and related trust material.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sunshine version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every scanned path.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """sunshine - audit permissions of SSH trust material.

    Walks the given roots and reports home directories, .ssh
    directories, keys, authorized_keys and known_hosts files whose
    permissions are looser or stricter than expected.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan_roots)
app.command(name="rules")(rules.list_rules)
app.command(name="config")(config.show_config)


if __name__ == "__main__":
    app()
