"""Plans commands for browsing and managing stored cutting plans.

This module provides the `plans` command group. Plans live in a JSON store
chosen with ``--store`` or the ``CUTPLAN_STORE_PATH`` environment variable.
"""

from pathlib import Path
from typing import Annotated

import typer

from cutplan.application import ServiceFactory
from cutplan.application.factory import STORE_PATH_ENV, store_path_from_env
from cutplan.contracts import PlanRepositoryProtocol
from cutplan.domain import CuttingPlan, PlanNotFoundError
from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry

plans_app = typer.Typer(
    name="plans",
    help="Browse, export and delete stored cutting plans.",
)

StoreOption = Annotated[
    Path | None,
    typer.Option(
        "--store",
        help=f"Plan store JSON file (default: ${STORE_PATH_ENV})",
    ),
]


def store_factory(store: Path | None) -> ServiceFactory:
    """Build a service factory backed by the given or configured store.

    Raises:
        typer.Exit: If no store is configured.
    """
    path = store or store_path_from_env()
    if path is None:
        typer.echo(
            f"Error: no plan store configured. Use --store or set {STORE_PATH_ENV}.",
            err=True,
        )
        raise typer.Exit(code=1)
    try:
        factory = ServiceFactory(store_path=path)
        factory.get_repository()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    return factory


def find_plan(repository: PlanRepositoryProtocol, reference: str) -> CuttingPlan:
    """Resolve a plan by id or traceability code, exiting if unknown."""
    try:
        return repository.get(reference)
    except PlanNotFoundError:
        pass
    try:
        return repository.get_by_code(reference)
    except PlanNotFoundError:
        typer.echo(f"Error: cutting plan not found: {reference}", err=True)
        raise typer.Exit(code=1)


def _summary_line(plan: CuttingPlan) -> str:
    material = plan.metadata.material_name or "-"
    return (
        f"{plan.traceability_code:<8} {plan.plan_id}  "
        f"{plan.created_at:%Y-%m-%d %H:%M}  {material:<16} "
        f"{plan.total_bars:>3} bars  {plan.overall_efficiency:6.2f}%"
    )


@plans_app.command(name="list")
def list_plans(
    search: Annotated[
        str | None,
        typer.Option("--search", "-s", help="Filter by code or material"),
    ] = None,
    store: StoreOption = None,
) -> None:
    """List active plans, newest first.

    Example:
        cutplan plans list --search PC-00
    """
    repository = store_factory(store).get_repository()
    plans = repository.search(search) if search else repository.list_active()

    if not plans:
        typer.echo("No cutting plans found.")
        return
    for plan in plans:
        typer.echo(_summary_line(plan))


@plans_app.command(name="show")
def show_plan(
    plan_ref: Annotated[str, typer.Argument(help="Plan id or traceability code")],
    store: StoreOption = None,
) -> None:
    """Show the summary and bar diagrams of a stored plan."""
    repository = store_factory(store).get_repository()
    plan = find_plan(repository, plan_ref)

    renderer = CutDiagramRenderer()
    if repository.is_deleted(plan.plan_id):
        typer.echo("(deleted)")
    typer.echo(renderer.render_waste_summary(plan))
    typer.echo()
    typer.echo(renderer.render_all_ascii(plan))


@plans_app.command(name="delete")
def delete_plan(
    plan_ref: Annotated[str, typer.Argument(help="Plan id or traceability code")],
    store: StoreOption = None,
) -> None:
    """Soft-delete a stored plan. Its code stays reserved."""
    repository = store_factory(store).get_repository()
    plan = find_plan(repository, plan_ref)
    repository.mark_deleted(plan.plan_id)
    typer.echo(f"Deleted {plan.traceability_code} ({plan.plan_id})")


@plans_app.command(name="delete-all")
def delete_all_plans(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
    store: StoreOption = None,
) -> None:
    """Soft-delete every active plan."""
    repository = store_factory(store).get_repository()
    if not yes:
        typer.confirm("Delete all active cutting plans?", abort=True)
    count = repository.mark_all_deleted()
    typer.echo(f"Deleted {count} plan{'s' if count != 1 else ''}")


@plans_app.command(name="export")
def export_plan(
    plan_ref: Annotated[str, typer.Argument(help="Plan id or traceability code")],
    formats: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Comma-separated export formats: csv,json,svg,text (or 'all')",
        ),
    ] = "all",
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = Path("."),
    store: StoreOption = None,
) -> None:
    """Export a stored plan to one or more file formats.

    Files are named ``<code>_<format>.<ext>``.

    Example:
        cutplan plans export PC-007 --format csv,svg --output-dir out/
    """
    available = ExporterRegistry.available_formats()
    if formats.lower() == "all":
        selected = available
    else:
        selected = [f.strip().lower() for f in formats.split(",") if f.strip()]

    invalid = [f for f in selected if f not in available]
    if invalid or not selected:
        typer.echo(f"Unknown formats: {', '.join(invalid) or formats}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    repository = store_factory(store).get_repository()
    plan = find_plan(repository, plan_ref)

    try:
        results = ExportManager(output_dir).export_all(selected, plan)
    except OSError as e:
        typer.echo(f"Error: export failed: {e}", err=True)
        raise typer.Exit(code=1)

    for format_name, path in results.items():
        typer.echo(f"  {format_name}: {path}")
