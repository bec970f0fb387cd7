"""Pydantic schemas for the REST API."""

from cutplan.web.schemas.requests import (
    ComputePlanRequest,
    CreatePlanRequest,
    CutItemSchema,
    PlanMetadataSchema,
    PlanSettingsSchema,
)
from cutplan.web.schemas.responses import (
    BarSchema,
    CuttingPlanSchema,
    DeleteResultSchema,
    ErrorResponseSchema,
    PlacementSchema,
    PlanSummarySchema,
)

__all__ = [
    "BarSchema",
    "ComputePlanRequest",
    "CreatePlanRequest",
    "CutItemSchema",
    "CuttingPlanSchema",
    "DeleteResultSchema",
    "ErrorResponseSchema",
    "PlacementSchema",
    "PlanMetadataSchema",
    "PlanSettingsSchema",
    "PlanSummarySchema",
]
