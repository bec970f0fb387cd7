"""Exception hierarchy for cutting plan computation.

Every fatal condition raised by the core derives from CuttingPlanError so
callers can catch the whole family at a boundary (CLI, REST handlers) while
still distinguishing validation, feasibility, and capacity failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cutplan.domain.value_objects import CutUnit


class CuttingPlanError(Exception):
    """Base class for all cutting plan errors."""

    error_type: str = "cutting_plan"


class InvalidRequestError(CuttingPlanError, ValueError):
    """Raised when a batch of cut item requests fails validation.

    The whole batch is rejected; no units are produced.

    Attributes:
        problems: One dict per offending request with ``index``,
            ``drawing_code``, ``item_number`` and ``reason`` keys.
    """

    error_type = "invalid_request"

    def __init__(self, message: str, problems: list[dict[str, Any]] | None = None) -> None:
        self.problems = problems or []
        super().__init__(message)


class ItemExceedsBarLengthError(CuttingPlanError):
    """Raised when a unit cannot fit even an empty bar.

    Attributes:
        unit: First offending unit in expansion order.
        offenders: All offending units.
        bar_length: Configured bar length in millimeters.
        cutting_thickness: Configured kerf in millimeters.
    """

    error_type = "item_exceeds_bar_length"

    def __init__(
        self,
        unit: CutUnit,
        offenders: list[CutUnit],
        bar_length: float,
        cutting_thickness: float,
    ) -> None:
        self.unit = unit
        self.offenders = offenders
        self.bar_length = bar_length
        self.cutting_thickness = cutting_thickness
        super().__init__(
            f"Item '{unit.drawing_code}' #{unit.item_number} "
            f"({unit.length:g}mm + {cutting_thickness:g}mm kerf) "
            f"exceeds bar length {bar_length:g}mm"
        )


class BarLimitExceededError(CuttingPlanError):
    """Raised when packing needs more bars than ``max_bars`` allows.

    Attributes:
        max_bars: Configured bar limit.
        unplaced_count: Units still waiting for a bar when the limit was hit.
    """

    error_type = "bar_limit_exceeded"

    def __init__(self, max_bars: int, unplaced_count: int) -> None:
        self.max_bars = max_bars
        self.unplaced_count = unplaced_count
        super().__init__(
            f"Maximum of {max_bars} bars reached with "
            f"{unplaced_count} item(s) still unplaced"
        )


class SequenceConflictError(CuttingPlanError):
    """Raised by a plan repository when a traceability code is already taken.

    Never raised by the packing core.

    Attributes:
        traceability_code: The colliding code.
    """

    error_type = "sequence_conflict"

    def __init__(self, traceability_code: str) -> None:
        self.traceability_code = traceability_code
        super().__init__(f"Traceability code already in use: {traceability_code}")


class PlanNotFoundError(CuttingPlanError, KeyError):
    """Raised by a plan repository for an unknown plan id."""

    error_type = "not_found"

    def __init__(self, plan_id: str) -> None:
        self.plan_id = plan_id
        super().__init__(plan_id)

    def __str__(self) -> str:
        return f"Cutting plan not found: {self.plan_id}"
