"""Scan command implementation.

Audits one or more roots for permission discrepancies on SSH trust
material and exits non-zero if anything was found.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from sunshine.audit import (
    Finding,
    HomeDirectoryUnavailableError,
    PolicyWarning,
    ScanResult,
    scan,
    start_session,
)
from sunshine.core.config import AuditConfig, ConfigError, load_config
from sunshine.utils.formatting import (
    configure_logging,
    console,
    create_findings_table,
    format_error_row,
    format_warning_row,
    print_error,
    print_info,
    print_success,
)


class OutputFormat(str, Enum):
    """Output format options."""

    PLAIN = "plain"
    TABLE = "table"
    JSON = "json"


def scan_roots(
    ctx: typer.Context,
    roots: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Roots to scan. Defaults to configured roots or the current directory.",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format. 'plain' streams findings as they are found.",
            case_sensitive=False,
        ),
    ] = OutputFormat.PLAIN,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file.",
        ),
    ] = None,
) -> None:
    """Audit SSH-related file permissions under the given roots."""
    options: dict[str, bool] = ctx.obj or {}
    quiet = options.get("quiet", False)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    configure_logging(verbose=options.get("verbose", False) or config.verbose, quiet=quiet)
    targets = _resolve_roots(roots, config)

    try:
        if output_format == OutputFormat.PLAIN:
            result = _stream_findings(targets, config.max_workers)
        else:
            result = scan(targets, max_workers=config.max_workers)
    except HomeDirectoryUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except Exception as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
    elif output_format == OutputFormat.TABLE:
        _print_table(result)

    if export_path is not None:
        _export_results(result, export_path)

    if output_format != OutputFormat.JSON and not quiet:
        _print_summary(result, len(targets))

    if not result.is_clean:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _resolve_roots(roots: list[Path] | None, config: AuditConfig) -> list[str]:
    """Pick the roots to scan: CLI arguments, then config, then cwd."""
    if roots:
        return [str(root) for root in roots]
    if config.default_roots:
        return [str(root) for root in config.default_roots]
    return [str(Path.cwd())]


def _stream_findings(targets: list[str], max_workers: int | None) -> ScanResult:
    """Print findings as they arrive and return the collected result."""
    session = start_session(targets, max_workers=max_workers)

    findings: list[Finding] = []
    for finding in session.findings():
        findings.append(finding)
        if isinstance(finding, PolicyWarning):
            typer.echo(f"warning: {finding.message}")
        else:
            typer.echo(finding.message)

    return ScanResult.from_findings(findings)


def _print_table(result: ScanResult) -> None:
    """Display findings as a Rich table."""
    if result.is_clean:
        return

    table = create_findings_table()
    for warning in result.warnings:
        table.add_row(*format_warning_row(warning))
    for error in result.errors:
        table.add_row(*format_error_row(error))
    console.print(table)


def _print_summary(result: ScanResult, root_count: int) -> None:
    """Print a one-line summary of the scan."""
    if result.is_clean:
        print_success(f"No permission issues found in {root_count} root(s).")
        return
    console.print(
        f"\n[dim]Found {len(result.warnings)} warning(s) and "
        f"{len(result.errors)} error(s) in {root_count} root(s)[/dim]"
    )


def _export_results(result: ScanResult, export_path: Path) -> None:
    """Export scan results to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(result.to_dict(), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
