"""Domain layer - core cutting plan logic."""

from .entities import Bar, CuttingPlan
from .exceptions import (
    BarLimitExceededError,
    CuttingPlanError,
    InvalidRequestError,
    ItemExceedsBarLengthError,
    PlanNotFoundError,
    SequenceConflictError,
)
from .services import (
    CutRequestExpander,
    FFDPacker,
    PlanAggregator,
    PlanTotals,
    TraceabilityAssigner,
    format_traceability_code,
    next_sequence_from_codes,
    parse_traceability_code,
)
from .value_objects import (
    CutItemRequest,
    CutUnit,
    CuttingPlanConfig,
    PlanMetadata,
    Placement,
)

__all__ = [
    "Bar",
    "BarLimitExceededError",
    "CutItemRequest",
    "CutRequestExpander",
    "CutUnit",
    "CuttingPlan",
    "CuttingPlanConfig",
    "CuttingPlanError",
    "FFDPacker",
    "InvalidRequestError",
    "ItemExceedsBarLengthError",
    "PlanAggregator",
    "PlanMetadata",
    "PlanNotFoundError",
    "PlanTotals",
    "Placement",
    "SequenceConflictError",
    "TraceabilityAssigner",
    "format_traceability_code",
    "next_sequence_from_codes",
    "parse_traceability_code",
]
