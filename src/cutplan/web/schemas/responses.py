"""Pydantic response schemas for the REST API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A piece placed on a bar."""

    unit_id: str
    source_request_id: str
    drawing_code: str
    item_number: str
    length: float = Field(..., description="Piece length in mm")
    start_position: float = Field(..., description="Offset from bar start in mm")
    end_position: float = Field(..., description="start_position + length")


class BarSchema(BaseModel):
    """One stock bar with its placements."""

    id: int
    length: float
    placements: list[PlacementSchema]
    remaining_length: float
    used_length: float
    efficiency: float = Field(..., description="Used length as a percentage")


class PlanMetadataResponseSchema(BaseModel):
    order_id: str | None = None
    order_number: str | None = None
    material_name: str | None = None
    material_description: str | None = None


class PlanConfigSchema(BaseModel):
    bar_length: float
    cutting_thickness: float
    max_bars: int
    weight_per_meter: float


class CuttingPlanSchema(BaseModel):
    """Response for a computed or stored plan."""

    plan_id: str
    traceability_code: str
    created_at: datetime
    metadata: PlanMetadataResponseSchema
    config: PlanConfigSchema
    bars: list[BarSchema]
    total_bars: int
    total_pieces: int
    total_used_length: float
    total_available_length: float
    total_waste: float
    overall_efficiency: float
    total_weight: float
    total_scrap_weight: float
    deleted: bool = Field(default=False, description="Soft-deleted in the plan store")


class PlanSummarySchema(BaseModel):
    """Plan listing entry."""

    plan_id: str
    traceability_code: str
    created_at: datetime
    material_name: str | None = None
    order_number: str | None = None
    total_bars: int
    overall_efficiency: float


class DeleteResultSchema(BaseModel):
    """Response for delete operations."""

    deleted: int = Field(..., description="Number of plans marked deleted")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")
