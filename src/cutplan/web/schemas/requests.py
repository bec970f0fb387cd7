"""Pydantic request schemas for the REST API."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cutplan.domain.value_objects import (
    DEFAULT_BAR_LENGTH,
    DEFAULT_CUTTING_THICKNESS,
    DEFAULT_MAX_BARS,
)


class PlanSettingsSchema(BaseModel):
    """Bar stock and saw settings."""

    model_config = ConfigDict(extra="forbid")

    bar_length: float = Field(
        default=DEFAULT_BAR_LENGTH, gt=0, allow_inf_nan=False, description="Bar length in mm"
    )
    cutting_thickness: float = Field(
        default=DEFAULT_CUTTING_THICKNESS,
        ge=0,
        allow_inf_nan=False,
        description="Saw kerf per cut in mm",
    )
    max_bars: int = Field(default=DEFAULT_MAX_BARS, ge=1, description="Bar limit")
    weight_per_meter: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Linear weight (kg/m)"
    )

    @model_validator(mode="after")
    def kerf_smaller_than_bar(self) -> "PlanSettingsSchema":
        if self.cutting_thickness >= self.bar_length:
            raise ValueError("cutting_thickness must be smaller than bar_length")
        return self


class CutItemSchema(BaseModel):
    """One grouped cut request.

    Length and quantity are checked by the planner so every offending item
    is reported at once.
    """

    model_config = ConfigDict(extra="forbid")

    drawing_code: str = Field(default="", description="Drawing the piece belongs to")
    item_number: str = Field(default="", description="Item number on the drawing")
    length: float = Field(..., description="Piece length in mm")
    quantity: int = Field(default=1, description="Number of identical pieces")
    request_id: str | None = Field(default=None, description="Caller identifier")


class PlanMetadataSchema(BaseModel):
    """Order and material description attached to a plan."""

    model_config = ConfigDict(extra="forbid")

    order_id: str | None = None
    order_number: str | None = None
    material_name: str | None = None
    material_description: str | None = None


class CreatePlanRequest(BaseModel):
    """Request for computing and storing a plan."""

    model_config = ConfigDict(extra="forbid")

    settings: PlanSettingsSchema = Field(default_factory=PlanSettingsSchema)
    items: list[CutItemSchema] = Field(..., description="Cut items")
    metadata: PlanMetadataSchema = Field(default_factory=PlanMetadataSchema)


class ComputePlanRequest(CreatePlanRequest):
    """Request for computing a plan without storing it."""

    sequence: int = Field(default=1, ge=1, description="Traceability sequence number")
