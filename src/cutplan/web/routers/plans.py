"""Cutting plan endpoints."""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from cutplan.domain import CutItemRequest, CuttingPlan, CuttingPlanConfig, PlanMetadata
from cutplan.infrastructure.exporters import ExporterRegistry
from cutplan.infrastructure.serialization import plan_to_dict
from cutplan.web.dependencies import (
    ComputeCommandDep,
    PlanRepositoryDep,
    PlanServiceDep,
)
from cutplan.web.exceptions import UnsupportedFormatError
from cutplan.web.schemas.requests import ComputePlanRequest, CreatePlanRequest
from cutplan.web.schemas.responses import (
    CuttingPlanSchema,
    DeleteResultSchema,
    PlanSummarySchema,
)

router = APIRouter(prefix="/plans", tags=["plans"])

MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
    "svg": "image/svg+xml",
    "text": "text/plain",
}


def _to_domain(
    request: CreatePlanRequest,
) -> tuple[list[CutItemRequest], CuttingPlanConfig, PlanMetadata]:
    requests = [
        CutItemRequest(
            drawing_code=item.drawing_code,
            item_number=item.item_number,
            length=item.length,
            quantity=item.quantity,
            request_id=item.request_id,
        )
        for item in request.items
    ]
    config = CuttingPlanConfig(**request.settings.model_dump())
    metadata = PlanMetadata(**request.metadata.model_dump())
    return requests, config, metadata


def _to_schema(plan: CuttingPlan, deleted: bool = False) -> CuttingPlanSchema:
    return CuttingPlanSchema.model_validate({**plan_to_dict(plan), "deleted": deleted})


def _to_summary(plan: CuttingPlan) -> PlanSummarySchema:
    return PlanSummarySchema(
        plan_id=plan.plan_id,
        traceability_code=plan.traceability_code,
        created_at=plan.created_at,
        material_name=plan.metadata.material_name,
        order_number=plan.metadata.order_number,
        total_bars=plan.total_bars,
        overall_efficiency=plan.overall_efficiency,
    )


@router.post("/compute", response_model=CuttingPlanSchema)
async def compute_plan(
    request: ComputePlanRequest,
    command: ComputeCommandDep,
) -> CuttingPlanSchema:
    """Compute a cutting plan without storing it.

    Args:
        request: Settings, items, metadata and the sequence to stamp.
        command: Injected ComputeCuttingPlanCommand.

    Returns:
        The computed plan.
    """
    requests, config, metadata = _to_domain(request)
    plan = command.execute(requests, config, sequence=request.sequence, metadata=metadata)
    return _to_schema(plan)


@router.post("", response_model=CuttingPlanSchema, status_code=201)
def create_plan(request: CreatePlanRequest, service: PlanServiceDep) -> CuttingPlanSchema:
    """Compute a plan and store it with the next traceability code."""
    requests, config, metadata = _to_domain(request)
    plan = service.create_plan(requests, config, metadata)
    return _to_schema(plan)


@router.get("", response_model=list[PlanSummarySchema])
def list_plans(
    repository: PlanRepositoryDep,
    search: str | None = Query(default=None, description="Code or material filter"),
) -> list[PlanSummarySchema]:
    """List active plans, newest first."""
    plans = repository.search(search) if search else repository.list_active()
    return [_to_summary(plan) for plan in plans]


@router.get("/{plan_id}", response_model=CuttingPlanSchema)
def get_plan(plan_id: str, repository: PlanRepositoryDep) -> CuttingPlanSchema:
    """Fetch a stored plan. Soft-deleted plans are returned with ``deleted`` set."""
    plan = repository.get(plan_id)
    return _to_schema(plan, deleted=repository.is_deleted(plan_id))


@router.delete("/{plan_id}", response_model=DeleteResultSchema)
def delete_plan(plan_id: str, repository: PlanRepositoryDep) -> DeleteResultSchema:
    """Soft-delete a plan. Its traceability code stays reserved."""
    repository.mark_deleted(plan_id)
    return DeleteResultSchema(deleted=1)


@router.delete("", response_model=DeleteResultSchema)
def delete_all_plans(repository: PlanRepositoryDep) -> DeleteResultSchema:
    """Soft-delete every active plan."""
    return DeleteResultSchema(deleted=repository.mark_all_deleted())


@router.get("/{plan_id}/export/{format_name}")
def export_plan(
    plan_id: str, format_name: str, repository: PlanRepositoryDep
) -> Response:
    """Download a stored plan in one of the registered export formats."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    plan = repository.get(plan_id)
    exporter = ExporterRegistry.get(format_name)()
    filename = f"{plan.traceability_code}_{format_name}.{exporter.file_extension}"
    return Response(
        content=exporter.render(plan),
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
