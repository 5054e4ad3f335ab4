"""Config command implementation.

Shows the effective audit configuration.
"""

from pathlib import Path
from typing import Annotated

import typer

from sunshine.core.config import ConfigError, load_config
from sunshine.core.paths import get_config_path
from sunshine.utils.formatting import console, print_error, print_info


def show_config(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file.",
        ),
    ] = None,
) -> None:
    """Show the effective configuration."""
    try:
        path = config_path or get_config_path()
    except RuntimeError as e:
        print_error(f"Cannot locate config directory: {e}")
        raise typer.Exit(code=1) from e

    try:
        config = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    print_info(f"Config: {source}")
    console.print_json(config.model_dump_json())
