"""Typer CLI for cutting plan computation."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cutplan.application import ComputeCuttingPlanCommand
from cutplan.application.config import (
    ConfigError,
    config_to_metadata,
    config_to_plan_config,
    config_to_requests,
    load_config,
)
from cutplan.cli.commands import (
    display_load_error,
    plans_app,
    store_factory,
    validate_command,
)
from cutplan.domain import (
    CutItemRequest,
    CuttingPlan,
    CuttingPlanConfig,
    CuttingPlanError,
    PlanMetadata,
)
from cutplan.domain.value_objects import (
    DEFAULT_BAR_LENGTH,
    DEFAULT_CUTTING_THICKNESS,
    DEFAULT_MAX_BARS,
)
from cutplan.infrastructure.exporters import ExporterRegistry

app = typer.Typer(
    name="cutplan",
    help="Plan one-dimensional bar cutting with kerf and traceability codes.",
)

app.command(name="validate")(validate_command)
app.add_typer(plans_app, name="plans")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Plan one-dimensional bar cutting with kerf and traceability codes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_item_option(value: str, position: int) -> CutItemRequest:
    """Parse ``CODE:ITEM:LENGTH:QTY`` into a request.

    Raises:
        typer.BadParameter: If the value is malformed.
    """
    parts = value.split(":")
    if len(parts) != 4:
        raise typer.BadParameter(
            f"Expected CODE:ITEM:LENGTH:QTY, got {value!r}", param_hint="--item"
        )
    drawing_code, item_number, length, quantity = (p.strip() for p in parts)
    try:
        return CutItemRequest(
            drawing_code=drawing_code,
            item_number=item_number,
            length=float(length),
            quantity=int(quantity),
            request_id=str(position),
        )
    except ValueError:
        raise typer.BadParameter(
            f"Invalid length or quantity in {value!r}", param_hint="--item"
        ) from None


def _render(plan: CuttingPlan, output_format: str) -> str:
    exporter = ExporterRegistry.get(output_format)()
    return exporter.render(plan)


@app.command()
def compute(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    bar_length: Annotated[
        float | None,
        typer.Option("--bar-length", "-l", help="Stock bar length in mm"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Saw blade thickness in mm"),
    ] = None,
    max_bars: Annotated[
        int | None,
        typer.Option("--max-bars", help="Maximum number of bars"),
    ] = None,
    weight_per_meter: Annotated[
        float | None,
        typer.Option("--weight-per-meter", help="Linear weight (kg/m)"),
    ] = None,
    items: Annotated[
        list[str] | None,
        typer.Option(
            "--item",
            "-i",
            help="Cut item as CODE:ITEM:LENGTH:QTY (repeatable, replaces config items)",
        ),
    ] = None,
    sequence: Annotated[
        int | None,
        typer.Option("--sequence", help="Traceability sequence number (default: 1)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, csv, svg"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to a file"),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Persist the plan; the store assigns the sequence"),
    ] = False,
    store: Annotated[
        Path | None,
        typer.Option("--store", help="Plan store JSON file (used with --save)"),
    ] = None,
) -> None:
    """Compute a cutting plan from a config file and/or command-line items.

    Command-line options override values from the configuration file.

    Example:
        cutplan compute --bar-length 6000 --kerf 3 -i A:1:2000:2 -i B:2:1500:3
    """
    if not ExporterRegistry.is_registered(output_format):
        available = ", ".join(ExporterRegistry.available_formats())
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {available}", err=True)
        raise typer.Exit(code=1)

    if save and sequence is not None:
        typer.echo("Error: --sequence cannot be combined with --save", err=True)
        raise typer.Exit(code=1)

    requests: list[CutItemRequest] = []
    metadata = PlanMetadata()
    settings = {
        "bar_length": DEFAULT_BAR_LENGTH,
        "cutting_thickness": DEFAULT_CUTTING_THICKNESS,
        "max_bars": DEFAULT_MAX_BARS,
        "weight_per_meter": 0.0,
    }

    if config_file is not None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            display_load_error(e)
            raise typer.Exit(code=1)
        plan_config = config_to_plan_config(config)
        settings.update(
            bar_length=plan_config.bar_length,
            cutting_thickness=plan_config.cutting_thickness,
            max_bars=plan_config.max_bars,
            weight_per_meter=plan_config.weight_per_meter,
        )
        requests = config_to_requests(config)
        metadata = config_to_metadata(config)
        if sequence is None:
            sequence = config.sequence

    overrides = {
        "bar_length": bar_length,
        "cutting_thickness": kerf,
        "max_bars": max_bars,
        "weight_per_meter": weight_per_meter,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})

    if items:
        requests = [
            parse_item_option(value, position)
            for position, value in enumerate(items, start=1)
        ]
    if not requests:
        typer.echo("Error: no cut items given. Use --config or --item.", err=True)
        raise typer.Exit(code=1)

    try:
        plan_config = CuttingPlanConfig(**settings)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        if save:
            service = store_factory(store).create_plan_service()
            for duplicate in service.duplicates_for(metadata):
                typer.echo(
                    f"Warning: {duplicate.traceability_code} already covers this "
                    f"order and material",
                    err=True,
                )
            plan = service.create_plan(requests, plan_config, metadata)
        else:
            plan = ComputeCuttingPlanCommand().execute(
                requests, plan_config, sequence=sequence or 1, metadata=metadata
            )
    except CuttingPlanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    document = _render(plan, output_format)
    if output_file is not None:
        try:
            output_file.write_text(document, encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: cannot write {output_file}: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Wrote {plan.traceability_code} ({output_format}) to {output_file}")
    else:
        typer.echo(document)

    if save:
        typer.echo(f"Saved {plan.traceability_code} ({plan.plan_id})", err=True)


if __name__ == "__main__":
    app()
