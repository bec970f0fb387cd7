"""Unit tests for CutDiagramRenderer."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from cutplan.application import ComputeCuttingPlanCommand
from cutplan.domain import (
    CutItemRequest,
    CuttingPlan,
    CuttingPlanConfig,
    PlanMetadata,
)
from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer


@pytest.fixture
def renderer() -> CutDiagramRenderer:
    return CutDiagramRenderer()


@pytest.fixture
def plan(
    scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
) -> CuttingPlan:
    return ComputeCuttingPlanCommand().execute(
        scenario_requests,
        scenario_config,
        sequence=1,
        metadata=PlanMetadata(
            order_number="SO-1",
            material_name="RHS 40x40x2",
            material_description="S235",
        ),
    )


class TestRenderSvg:
    """Tests for SVG rendering."""

    def test_single_bar_is_valid_svg(
        self, renderer: CutDiagramRenderer, plan: CuttingPlan
    ) -> None:
        root = ET.fromstring(renderer.render_svg(plan.bars[0], plan.total_bars))

        assert root.get("width") == str(6000 * 0.2)
        assert "Bar 1 of 3" in renderer.render_svg(plan.bars[0], plan.total_bars)

    def test_draws_piece_and_kerf(self, plan: CuttingPlan) -> None:
        renderer = CutDiagramRenderer(scale=0.5)
        svg = renderer.render_svg(plan.bars[0])

        assert 'x="0.0" y="30" width="1500.0"' in svg
        assert 'x="1500.0" y="30" width="1.5"' in svg
        assert f'fill="{renderer.kerf_fill}"' in svg
        assert "C #3" in svg
        assert "3000mm" in svg

    def test_hides_labels_and_dimensions(self, plan: CuttingPlan) -> None:
        renderer = CutDiagramRenderer(show_labels=False, show_dimensions=False)
        svg = renderer.render_svg(plan.bars[0])

        assert "C #3" not in svg
        assert "3000mm</text>" not in svg

    def test_combined_svg_contains_every_bar(
        self, renderer: CutDiagramRenderer, plan: CuttingPlan
    ) -> None:
        svg = renderer.render_combined_svg(plan)

        ET.fromstring(svg)
        assert svg.count('transform="translate(0,') == 3
        assert "PC-001 - 3 bars" in svg

    def test_combined_svg_without_bars(
        self, renderer: CutDiagramRenderer, scenario_config: CuttingPlanConfig
    ) -> None:
        empty = CuttingPlan(
            bars=(),
            total_used_length=0,
            total_waste=0,
            overall_efficiency=0,
            total_weight=0,
            total_scrap_weight=0,
            traceability_code="PC-001",
            config=scenario_config,
        )
        assert "No bars to display" in renderer.render_combined_svg(empty)

    def test_rejects_non_positive_scale(self) -> None:
        with pytest.raises(ValueError):
            CutDiagramRenderer(scale=0)


class TestRenderAscii:
    """Tests for ASCII rendering."""

    def test_strip_width(self, renderer: CutDiagramRenderer, plan: CuttingPlan) -> None:
        lines = renderer.render_ascii(plan.bars[0], width=62).splitlines()

        assert lines[0].startswith("Bar 1 of 1 - 6000mm - 83.4% used")
        assert lines[1] == "+" + "-" * 60 + "+"
        assert len(lines[2]) == 62

    def test_strip_segments(self, renderer: CutDiagramRenderer, plan: CuttingPlan) -> None:
        strip = renderer.render_ascii(plan.bars[0], width=62).splitlines()[2]

        # 10 characters per 1000mm: C covers 0-29, A covers 30-49, offcut after
        assert strip[1:4] == "[1="
        assert strip[30] == "]"
        assert strip[31:33] == "[2"
        assert strip[-2] == "."

    def test_cut_list(self, renderer: CutDiagramRenderer, plan: CuttingPlan) -> None:
        text = renderer.render_ascii(plan.bars[0])

        assert "   1. C #3 3000mm @ 0-3000" in text
        assert "   2. A #1 2000mm @ 3003-5003" in text

    def test_all_ascii(self, renderer: CutDiagramRenderer, plan: CuttingPlan) -> None:
        text = renderer.render_all_ascii(plan)

        assert text.count("Bar ") >= 3
        assert "SUMMARY: 3 bars, 64.0% efficiency, 6482mm waste" in text


class TestRenderWasteSummary:
    def test_summary(self, renderer: CutDiagramRenderer, plan: CuttingPlan) -> None:
        text = renderer.render_waste_summary(plan)

        assert text.splitlines()[0] == "CUTTING PLAN PC-001"
        assert "Material: RHS 40x40x2 (S235)" in text
        assert "Total Bars: 3" in text
        assert "Efficiency: 63.99%" in text
        assert "Bar 3: 1 piece," in text
        assert "4497mm offcut" in text
        assert "Total Weight" not in text

    def test_weights_shown_when_known(
        self, renderer: CutDiagramRenderer, scenario_requests: list[CutItemRequest]
    ) -> None:
        plan = ComputeCuttingPlanCommand().execute(
            scenario_requests,
            CuttingPlanConfig(weight_per_meter=2.0),
            sequence=1,
        )
        text = renderer.render_waste_summary(plan)

        assert "Total Weight: 23.036" in text
        assert "Scrap Weight: 12.964" in text
