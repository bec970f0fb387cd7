"""Plan-level metrics derived from packed bars."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from cutplan.domain.entities import Bar
from cutplan.domain.value_objects import CuttingPlanConfig


@dataclass(frozen=True)
class PlanTotals:
    """Aggregate metrics for a set of bars.

    Attributes:
        total_bars: Number of bars used.
        total_used_length: Sum of used length (pieces plus kerf).
        total_available_length: Bars times bar length.
        total_waste: Available length not used.
        overall_efficiency: Used length as a percentage of available length.
        total_weight: ``total_used_length * weight_per_meter / 1000``.
        total_scrap_weight: ``total_waste * weight_per_meter / 1000``.
    """

    total_bars: int
    total_used_length: float
    total_available_length: float
    total_waste: float
    overall_efficiency: float
    total_weight: float
    total_scrap_weight: float


def length_to_weight(length_mm: float, weight_per_meter: float) -> float:
    """Convert a length in millimeters to weight.

    With ``weight_per_meter`` in kg/m the result is in kilograms.
    """
    return length_mm * weight_per_meter / 1000


class PlanAggregator:
    """Derives whole-plan metrics from already-validated bars."""

    def aggregate(self, bars: Sequence[Bar], config: CuttingPlanConfig) -> PlanTotals:
        total_used = sum(bar.used_length for bar in bars)
        total_available = len(bars) * config.bar_length
        total_waste = total_available - total_used
        efficiency = (total_used / total_available * 100) if total_available else 0.0

        return PlanTotals(
            total_bars=len(bars),
            total_used_length=total_used,
            total_available_length=total_available,
            total_waste=total_waste,
            overall_efficiency=efficiency,
            total_weight=length_to_weight(total_used, config.weight_per_meter),
            total_scrap_weight=length_to_weight(total_waste, config.weight_per_meter),
        )
