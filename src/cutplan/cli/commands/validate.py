"""The ``validate`` command: load a plan configuration and report problems."""

from pathlib import Path
from typing import Annotated, Any

import typer

from cutplan.application.config import (
    ConfigError,
    CuttingPlanConfiguration,
    ValidationResult,
    estimate_minimum_bars,
    load_config,
    validate_config,
)


def _echo_problem(path: str, message: str, value: Any = None, err: bool = True) -> None:
    typer.echo(f"  {path}: {message}", err=err)
    if value is not None:
        typer.echo(f"    Value: {value!r}", err=err)


def display_load_error(error: ConfigError) -> None:
    """Print a ConfigError raised while loading a configuration file.

    Shared by ``validate`` and ``compute --config``.
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
        return

    if error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}",
                err=True,
            )
        return

    if error.error_type == "validation" and error.details:
        for detail in error.details:
            _echo_problem(
                detail.get("path", "unknown"),
                detail.get("message", "Unknown error"),
                detail.get("value"),
            )
        return

    typer.echo(f"  {error.message}", err=True)


def _describe(config: CuttingPlanConfiguration) -> str:
    pieces = sum(item.quantity for item in config.items)
    return (
        f"Bar {config.plan.bar_length:g}mm, kerf {config.plan.cutting_thickness:g}mm: "
        f"{pieces} piece(s) in {len(config.items)} item(s), "
        f"at least {estimate_minimum_bars(config)} bar(s)"
    )


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            _echo_problem(error.path, error.message, error.value)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            _echo_problem(warning.path, warning.message, err=False)
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    counts = f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    if not result.is_valid:
        typer.echo(f"Validation failed: {counts}", err=True)
    elif result.has_warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Cutting plan configuration (JSON) to check"),
    ],
) -> None:
    """Check a cutting plan configuration without computing a plan.

    Exit codes:
        0 - valid
        1 - errors (the file cannot be used)
        2 - valid, with warnings such as a missing linear weight

    Example:
        cutplan validate order-42.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    typer.echo(_describe(config))
    typer.echo()
    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
