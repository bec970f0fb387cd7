"""Value objects for one-dimensional cutting plans.

All lengths are in millimeters. All dataclasses are frozen (immutable) so
plans can be shared between exporters and repositories without copying.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_BAR_LENGTH = 6000.0
DEFAULT_CUTTING_THICKNESS = 3.0
DEFAULT_MAX_BARS = 100


@dataclass(frozen=True)
class CutItemRequest:
    """A grouped request for ``quantity`` pieces of the same length.

    Validation is deferred to CutRequestExpander so an entire batch can be
    checked and rejected at once.

    Attributes:
        drawing_code: Drawing the piece belongs to.
        item_number: Item number on the drawing.
        length: Piece length in millimeters.
        quantity: Number of identical pieces required.
        request_id: Optional caller identifier. Defaults to the request's
            1-based position in the batch when expanded.
    """

    drawing_code: str
    item_number: str
    length: float
    quantity: int
    request_id: str | None = None


@dataclass(frozen=True)
class CutUnit:
    """One physical piece to be cut.

    Attributes:
        source_request_id: Identifier of the request this unit came from.
        drawing_code: Drawing code carried over from the request.
        item_number: Item number carried over from the request.
        length: Piece length in millimeters.
        index: Zero-based position of this unit within its request.
    """

    source_request_id: str
    drawing_code: str
    item_number: str
    length: float
    index: int = 0

    def __post_init__(self) -> None:
        if not self.length > 0:
            raise ValueError("Cut unit length must be positive")

    @property
    def unit_id(self) -> str:
        """Unique id of the unit within a run."""
        return f"{self.source_request_id}-{self.index}"


@dataclass(frozen=True)
class Placement:
    """A unit placed on a bar.

    Attributes:
        unit: The placed unit.
        start_position: Offset from the bar start in millimeters.
    """

    unit: CutUnit
    start_position: float

    def __post_init__(self) -> None:
        if self.start_position < 0:
            raise ValueError("Start position must be non-negative")

    @property
    def end_position(self) -> float:
        return self.start_position + self.unit.length

    @property
    def length(self) -> float:
        return self.unit.length

    @property
    def drawing_code(self) -> str:
        return self.unit.drawing_code

    @property
    def item_number(self) -> str:
        return self.unit.item_number


@dataclass(frozen=True)
class CuttingPlanConfig:
    """Configuration for a single cutting plan run.

    Attributes:
        bar_length: Length of each stock bar in millimeters.
        cutting_thickness: Saw kerf consumed per cut in millimeters.
        max_bars: Maximum number of bars a plan may open.
        weight_per_meter: Linear weight of the material. The plan's weight
            totals are ``length_mm * weight_per_meter / 1000``.
    """

    bar_length: float = DEFAULT_BAR_LENGTH
    cutting_thickness: float = DEFAULT_CUTTING_THICKNESS
    max_bars: int = DEFAULT_MAX_BARS
    weight_per_meter: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.bar_length) or self.bar_length <= 0:
            raise ValueError("Bar length must be positive")
        if not math.isfinite(self.cutting_thickness) or self.cutting_thickness < 0:
            raise ValueError("Cutting thickness must be non-negative")
        if self.cutting_thickness >= self.bar_length:
            raise ValueError("Cutting thickness must be smaller than bar length")
        if isinstance(self.max_bars, bool) or not isinstance(self.max_bars, int):
            raise ValueError("Max bars must be an integer")
        if self.max_bars < 1:
            raise ValueError("Max bars must be at least 1")
        if not math.isfinite(self.weight_per_meter) or self.weight_per_meter < 0:
            raise ValueError("Weight per meter must be non-negative")


@dataclass(frozen=True)
class PlanMetadata:
    """Descriptive data attached to a plan for reports and lookups."""

    order_id: str | None = None
    order_number: str | None = None
    material_name: str | None = None
    material_description: str | None = None
