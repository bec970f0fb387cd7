"""Bars and cutting plans produced by a packing run."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cutplan.domain.value_objects import CuttingPlanConfig, PlanMetadata, Placement


@dataclass(frozen=True)
class Bar:
    """One stock bar with its placements.

    Placements are kept in assignment order, not position order.

    Attributes:
        id: Sequential bar number starting at 1.
        length: Bar length in millimeters.
        placements: Placed units in the order they were assigned.
        used_length: Length consumed by pieces and their kerf.
        remaining_length: Length still available.
    """

    id: int
    length: float
    placements: tuple[Placement, ...]
    used_length: float
    remaining_length: float

    def __post_init__(self) -> None:
        if self.id < 1:
            raise ValueError("Bar id must be at least 1")
        if self.remaining_length < 0:
            raise ValueError("Bar remaining length must be non-negative")

    @property
    def efficiency(self) -> float:
        """Used length as a percentage of bar length."""
        return self.used_length / self.length * 100

    @property
    def waste(self) -> float:
        return self.remaining_length

    @property
    def piece_count(self) -> int:
        return len(self.placements)


def _new_plan_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CuttingPlan:
    """Complete result of one cutting plan run.

    A plan is never mutated after creation; re-stamping a traceability code
    produces a new value via ``dataclasses.replace``.

    Attributes:
        bars: Bars in creation order.
        total_used_length: Sum of used length over all bars.
        total_waste: Available length minus used length.
        overall_efficiency: Used length as a percentage of available length.
        total_weight: Weight of the used length.
        total_scrap_weight: Weight of the wasted length.
        traceability_code: Human-readable plan code (``PC-NNN``).
        config: Configuration the plan was computed with.
        metadata: Order and material description.
        plan_id: Unique identifier for storage.
        created_at: UTC creation timestamp.
    """

    bars: tuple[Bar, ...]
    total_used_length: float
    total_waste: float
    overall_efficiency: float
    total_weight: float
    total_scrap_weight: float
    traceability_code: str
    config: CuttingPlanConfig
    metadata: PlanMetadata = field(default_factory=PlanMetadata)
    plan_id: str = field(default_factory=_new_plan_id)
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not 0 <= self.overall_efficiency <= 100:
            raise ValueError("Overall efficiency must be between 0 and 100")

    @property
    def total_bars(self) -> int:
        return len(self.bars)

    @property
    def total_available_length(self) -> float:
        return len(self.bars) * self.config.bar_length

    @property
    def total_pieces(self) -> int:
        return sum(bar.piece_count for bar in self.bars)
