"""CSV cut list exporter.

One row per placed piece, in bar order and then cutting position order,
so the sheet can be handed to the saw operator as is.
"""

from __future__ import annotations

import csv
import io
from typing import ClassVar

from cutplan.domain.entities import CuttingPlan
from cutplan.infrastructure.exporters.base import BaseExporter, ExporterRegistry

CSV_HEADER = [
    "Traceability Code",
    "Bar",
    "Position",
    "Drawing Code",
    "Item Number",
    "Length (mm)",
    "Start (mm)",
    "End (mm)",
    "Bar Offcut (mm)",
]


@ExporterRegistry.register("csv")
class CsvExporter(BaseExporter):
    """Exports the cut list as CSV.

    Attributes:
        format_name: "csv"
        file_extension: "csv"
    """

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def render(self, plan: CuttingPlan) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        for bar in plan.bars:
            ordered = sorted(bar.placements, key=lambda p: p.start_position)
            for position, placement in enumerate(ordered, start=1):
                writer.writerow(
                    [
                        plan.traceability_code,
                        bar.id,
                        position,
                        placement.drawing_code,
                        placement.item_number,
                        f"{placement.length:g}",
                        f"{placement.start_position:g}",
                        f"{placement.end_position:g}",
                        f"{bar.remaining_length:g}",
                    ]
                )

        return output.getvalue()
