"""Domain services for cutting plan computation."""

from .aggregator import PlanAggregator, PlanTotals, length_to_weight
from .expander import CutRequestExpander
from .packer import FFDPacker, check_bar_capacity
from .traceability import (
    TraceabilityAssigner,
    format_traceability_code,
    next_sequence_from_codes,
    parse_traceability_code,
)

__all__ = [
    "CutRequestExpander",
    "FFDPacker",
    "PlanAggregator",
    "PlanTotals",
    "TraceabilityAssigner",
    "check_bar_capacity",
    "format_traceability_code",
    "length_to_weight",
    "next_sequence_from_codes",
    "parse_traceability_code",
]
