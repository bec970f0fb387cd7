"""Pydantic schema for cutting plan configuration files.

A configuration file describes one cutting plan run: the stock bar
settings, the material and order it belongs to, and the items to cut.

Example:
    {
        "schema_version": "1.0",
        "plan": {"bar_length": 6000, "cutting_thickness": 3, "max_bars": 100},
        "material": {"name": "Tube 40x40x2", "weight_per_meter": 2.31},
        "items": [
            {"drawing_code": "DWG-100", "item_number": "1", "length": 2000, "quantity": 2}
        ]
    }
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cutplan.domain.value_objects import (
    DEFAULT_BAR_LENGTH,
    DEFAULT_CUTTING_THICKNESS,
    DEFAULT_MAX_BARS,
)

# Supported schema versions for configuration files
# Version 1.0: Initial schema with plan settings, material, order and items
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PlanSettingsConfig(BaseModel):
    """Stock bar settings for a run.

    Attributes:
        bar_length: Stock bar length in millimeters.
        cutting_thickness: Saw kerf per cut in millimeters.
        max_bars: Maximum number of bars the plan may use.
    """

    model_config = ConfigDict(extra="forbid")

    bar_length: float = Field(
        default=DEFAULT_BAR_LENGTH,
        gt=0,
        allow_inf_nan=False,
        description="Stock bar length in mm",
    )
    cutting_thickness: float = Field(
        default=DEFAULT_CUTTING_THICKNESS,
        ge=0,
        allow_inf_nan=False,
        description="Saw kerf in mm",
    )
    max_bars: int = Field(
        default=DEFAULT_MAX_BARS, ge=1, description="Maximum bars per plan"
    )

    @model_validator(mode="after")
    def validate_kerf_below_bar_length(self) -> "PlanSettingsConfig":
        """Ensure the kerf leaves room for a piece."""
        if self.cutting_thickness >= self.bar_length:
            raise ValueError("cutting_thickness must be smaller than bar_length")
        return self


class MaterialConfig(BaseModel):
    """Material being cut.

    Attributes:
        name: Short material name (e.g. profile designation).
        description: Longer free-text description.
        weight_per_meter: Linear weight used for weight totals.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    weight_per_meter: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class OrderConfig(BaseModel):
    """Order reference for the plan."""

    model_config = ConfigDict(extra="forbid")

    order_id: str | None = None
    order_number: str | None = None


class CutItemConfig(BaseModel):
    """A grouped cut request.

    Attributes:
        drawing_code: Drawing the piece belongs to.
        item_number: Item number on the drawing.
        length: Piece length in millimeters.
        quantity: Number of identical pieces.
        request_id: Optional caller identifier for traceability.
    """

    model_config = ConfigDict(extra="forbid")

    drawing_code: str = Field(default="", max_length=100)
    item_number: str = Field(default="", max_length=100)
    length: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Piece length in mm"
    )
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    request_id: str | None = Field(default=None, max_length=100)

    @field_validator("drawing_code", "item_number", mode="before")
    @classmethod
    def coerce_identifier(cls, v: object) -> object:
        """Accept numeric identifiers from spreadsheet exports."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class CuttingPlanConfiguration(BaseModel):
    """Root configuration model for a cutting plan run.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        plan: Stock bar settings
        material: Material description and linear weight
        order: Optional order reference
        items: Grouped cut requests (at least one)
        sequence: Optional traceability sequence to stamp on the plan
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0")
    plan: PlanSettingsConfig = Field(default_factory=PlanSettingsConfig)
    material: MaterialConfig = Field(default_factory=MaterialConfig)
    order: OrderConfig = Field(default_factory=OrderConfig)
    items: list[CutItemConfig] = Field(..., min_length=1)
    sequence: int | None = Field(default=None, ge=1)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        """Validate that the schema version is supported."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported versions: {supported}"
            )
        return v
