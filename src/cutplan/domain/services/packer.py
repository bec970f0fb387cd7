"""First-Fit-Decreasing packing of cut units onto stock bars.

This module provides the core one-dimensional bin packing engine. Units
are sorted longest first and each is placed on the first bar, in creation
order, with enough remaining length for the piece plus one kerf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from cutplan.domain.entities import Bar
from cutplan.domain.exceptions import BarLimitExceededError, ItemExceedsBarLengthError
from cutplan.domain.value_objects import (
    CutItemRequest,
    CutUnit,
    CuttingPlanConfig,
    Placement,
)

logger = logging.getLogger(__name__)


@dataclass
class _BarState:
    """Internal mutable state for a bar during packing.

    Attributes:
        id: Sequential bar number (1-based).
        length: Bar length.
        remaining_length: Length still available for pieces and kerf.
        used_length: Length consumed so far.
        placements: Placements in assignment order.
    """

    id: int
    length: float
    remaining_length: float
    used_length: float = 0.0
    placements: list[Placement] = field(default_factory=list)

    def place(self, unit: CutUnit, required: float) -> None:
        start = self.length - self.remaining_length
        self.placements.append(Placement(unit=unit, start_position=start))
        self.used_length += required
        self.remaining_length -= required

    def freeze(self) -> Bar:
        return Bar(
            id=self.id,
            length=self.length,
            placements=tuple(self.placements),
            used_length=self.used_length,
            remaining_length=self.remaining_length,
        )


class FFDPacker:
    """First-Fit-Decreasing bin packer with kerf allowance.

    Every cut consumes its piece length plus one cutting thickness,
    including the last cut on a bar. Bars are scanned in the order they
    were opened (first fit, not best fit).

    The packer is a pure function of its inputs: identical units and
    configuration always yield identical bars.
    """

    def pack(self, units: Sequence[CutUnit], config: CuttingPlanConfig) -> list[Bar]:
        """Pack units onto bars.

        Args:
            units: Expanded cut units.
            config: Bar length, kerf and bar limit for the run.

        Returns:
            Bars in creation order, covering every unit exactly once.

        Raises:
            ItemExceedsBarLengthError: If any unit plus kerf is longer than a
                bar. Checked before any packing starts.
            BarLimitExceededError: If more than ``config.max_bars`` bars
                would be needed.
        """
        if not units:
            return []

        self._check_feasible(units, config)

        kerf = config.cutting_thickness
        # sorted() is stable, so equal lengths keep expansion order
        ordered = sorted(units, key=lambda u: u.length, reverse=True)

        logger.debug(
            "Packing %d units onto %gmm bars (kerf %gmm)",
            len(ordered),
            config.bar_length,
            kerf,
        )

        bars: list[_BarState] = []
        for position, unit in enumerate(ordered):
            required = unit.length + kerf
            target = self._first_fit(bars, required)

            if target is None:
                if len(bars) >= config.max_bars:
                    raise BarLimitExceededError(
                        max_bars=config.max_bars,
                        unplaced_count=len(ordered) - position,
                    )
                target = _BarState(
                    id=len(bars) + 1,
                    length=config.bar_length,
                    remaining_length=config.bar_length,
                )
                bars.append(target)
                logger.debug("Opened bar %d for %gmm piece", target.id, unit.length)

            target.place(unit, required)

        logger.debug("Packed %d units onto %d bars", len(ordered), len(bars))
        return [bar.freeze() for bar in bars]

    @staticmethod
    def _first_fit(bars: list[_BarState], required: float) -> _BarState | None:
        for bar in bars:
            if bar.remaining_length >= required:
                return bar
        return None

    @staticmethod
    def _check_feasible(units: Sequence[CutUnit], config: CuttingPlanConfig) -> None:
        kerf = config.cutting_thickness
        offenders = [u for u in units if u.length + kerf > config.bar_length]
        if offenders:
            raise ItemExceedsBarLengthError(
                unit=offenders[0],
                offenders=offenders,
                bar_length=config.bar_length,
                cutting_thickness=kerf,
            )


def check_bar_capacity(
    requests: Sequence[CutItemRequest], config: CuttingPlanConfig
) -> None:
    """Reject a batch whose pieces cannot fit in ``max_bars`` bars at all.

    Works on grouped requests so an impossible batch is refused before it is
    expanded into units. Requests must already be validated. Requests too
    long for any bar are left to the packer, which reports them as
    ItemExceedsBarLengthError.

    Raises:
        BarLimitExceededError: If the pieces plus kerf need more length than
            ``max_bars`` bars provide. ``unplaced_count`` is then a lower
            bound: the units left over even when the shortest pieces are
            placed first with no offcut.
    """
    kerf = config.cutting_thickness
    if any(r.length + kerf > config.bar_length for r in requests):
        return

    capacity = config.max_bars * config.bar_length
    if sum((r.length + kerf) * r.quantity for r in requests) <= capacity:
        return

    total = sum(r.quantity for r in requests)
    placeable = 0
    remaining = capacity
    for request in sorted(requests, key=lambda r: r.length):
        required = request.length + kerf
        fits = min(request.quantity, int(remaining // required))
        placeable += fits
        remaining -= fits * required
        if fits < request.quantity:
            break

    logger.debug(
        "Rejected %d units: %gmm of stock across %d bars is not enough",
        total,
        capacity,
        config.max_bars,
    )
    raise BarLimitExceededError(
        max_bars=config.max_bars, unplaced_count=total - placeable
    )
