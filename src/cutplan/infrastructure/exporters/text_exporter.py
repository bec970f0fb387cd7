"""Plain-text report exporter: summary followed by ASCII bar diagrams."""

from __future__ import annotations

from typing import ClassVar

from cutplan.domain.entities import CuttingPlan
from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import BaseExporter, ExporterRegistry


@ExporterRegistry.register("text")
class TextExporter(BaseExporter):
    """Exports a printable text report.

    Attributes:
        format_name: "text"
        file_extension: "txt"
    """

    format_name: ClassVar[str] = "text"
    file_extension: ClassVar[str] = "txt"

    def __init__(self, width: int = 80) -> None:
        self.width = width
        self.renderer = CutDiagramRenderer()

    def render(self, plan: CuttingPlan) -> str:
        return "\n\n".join(
            [
                self.renderer.render_waste_summary(plan),
                self.renderer.render_all_ascii(plan, self.width),
            ]
        ) + "\n"
