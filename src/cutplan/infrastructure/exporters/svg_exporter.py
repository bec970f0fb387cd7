"""SVG exporter for bar cut diagrams.

Wraps CutDiagramRenderer to write all bars of a plan into one SVG file.
"""

from __future__ import annotations

from typing import ClassVar

from cutplan.domain.entities import CuttingPlan
from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register("svg")
class SvgExporter(BaseExporter):
    """SVG exporter for bar cut diagrams.

    Attributes:
        format_name: "svg"
        file_extension: "svg"
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.2,
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        """Initialize the SVG exporter.

        Args:
            scale: Pixels per millimeter (default 0.2).
            show_dimensions: Whether to show piece lengths (default True).
            show_labels: Whether to show drawing code and item (default True).
        """
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
        )

    def render(self, plan: CuttingPlan) -> str:
        return self.renderer.render_combined_svg(plan)
