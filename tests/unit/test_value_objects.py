"""Unit tests for domain value objects and entities."""

from __future__ import annotations

import math

import pytest

from cutplan.domain import (
    Bar,
    CutUnit,
    CuttingPlan,
    CuttingPlanConfig,
    PlanMetadata,
    Placement,
)


def _unit(length: float = 1000.0, index: int = 0) -> CutUnit:
    return CutUnit(
        source_request_id="1",
        drawing_code="A",
        item_number="1",
        length=length,
        index=index,
    )


class TestCuttingPlanConfig:
    """Tests for CuttingPlanConfig validation."""

    def test_defaults(self) -> None:
        config = CuttingPlanConfig()
        assert config.bar_length == 6000
        assert config.cutting_thickness == 3
        assert config.max_bars == 100
        assert config.weight_per_meter == 0.0

    @pytest.mark.parametrize("bar_length", [0, -1, math.inf, math.nan])
    def test_rejects_invalid_bar_length(self, bar_length: float) -> None:
        with pytest.raises(ValueError, match="Bar length"):
            CuttingPlanConfig(bar_length=bar_length)

    def test_rejects_negative_kerf(self) -> None:
        with pytest.raises(ValueError, match="Cutting thickness"):
            CuttingPlanConfig(cutting_thickness=-0.5)

    def test_rejects_kerf_not_smaller_than_bar(self) -> None:
        with pytest.raises(ValueError, match="smaller than bar length"):
            CuttingPlanConfig(bar_length=100, cutting_thickness=100)

    def test_zero_kerf_is_allowed(self) -> None:
        assert CuttingPlanConfig(cutting_thickness=0).cutting_thickness == 0

    @pytest.mark.parametrize("max_bars", [0, -3, 2.5, True])
    def test_rejects_invalid_max_bars(self, max_bars: object) -> None:
        with pytest.raises(ValueError, match="Max bars"):
            CuttingPlanConfig(max_bars=max_bars)  # type: ignore[arg-type]

    def test_rejects_negative_weight(self) -> None:
        with pytest.raises(ValueError, match="Weight per meter"):
            CuttingPlanConfig(weight_per_meter=-1)


class TestCutUnitAndPlacement:
    """Tests for CutUnit and Placement."""

    def test_unit_id_combines_source_and_index(self) -> None:
        assert _unit(index=2).unit_id == "1-2"

    @pytest.mark.parametrize("length", [0, -10])
    def test_unit_rejects_non_positive_length(self, length: float) -> None:
        with pytest.raises(ValueError):
            _unit(length=length)

    def test_placement_end_position(self) -> None:
        placement = Placement(unit=_unit(1500), start_position=2003)
        assert placement.end_position == 3503
        assert placement.length == 1500
        assert placement.drawing_code == "A"
        assert placement.item_number == "1"

    def test_placement_rejects_negative_start(self) -> None:
        with pytest.raises(ValueError):
            Placement(unit=_unit(), start_position=-1)


class TestBar:
    """Tests for the Bar entity."""

    def test_efficiency_and_waste(self) -> None:
        bar = Bar(
            id=1,
            length=6000,
            placements=(Placement(unit=_unit(2997), start_position=0),),
            used_length=3000,
            remaining_length=3000,
        )
        assert bar.efficiency == pytest.approx(50.0)
        assert bar.waste == 3000
        assert bar.piece_count == 1

    def test_rejects_id_below_one(self) -> None:
        with pytest.raises(ValueError):
            Bar(id=0, length=6000, placements=(), used_length=0, remaining_length=6000)

    def test_rejects_negative_remaining(self) -> None:
        with pytest.raises(ValueError):
            Bar(id=1, length=6000, placements=(), used_length=6001, remaining_length=-1)


class TestCuttingPlan:
    """Tests for the CuttingPlan entity."""

    def _plan(self, **overrides) -> CuttingPlan:
        values = dict(
            bars=(),
            total_used_length=0.0,
            total_waste=0.0,
            overall_efficiency=0.0,
            total_weight=0.0,
            total_scrap_weight=0.0,
            traceability_code="PC-001",
            config=CuttingPlanConfig(),
        )
        values.update(overrides)
        return CuttingPlan(**values)

    def test_generates_unique_ids_and_utc_timestamp(self) -> None:
        first, second = self._plan(), self._plan()
        assert first.plan_id != second.plan_id
        assert first.created_at.tzinfo is not None

    def test_defaults_to_empty_metadata(self) -> None:
        assert self._plan().metadata == PlanMetadata()

    @pytest.mark.parametrize("efficiency", [-0.1, 100.1])
    def test_rejects_efficiency_out_of_range(self, efficiency: float) -> None:
        with pytest.raises(ValueError):
            self._plan(overall_efficiency=efficiency)

    def test_is_immutable(self) -> None:
        plan = self._plan()
        with pytest.raises(AttributeError):
            plan.traceability_code = "PC-002"  # type: ignore[misc]
