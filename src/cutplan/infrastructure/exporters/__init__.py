"""Exporter framework for cutting plans.

Registered exporters:
- csv: Cut list, one row per placed piece
- json: Complete plan in the exchange format
- svg: Bar cut diagrams
- text: Printable summary with ASCII bar diagrams

Usage:
    from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    document = ExporterRegistry.get("csv")().render(plan)
    paths = ExportManager(Path("out")).export_all(["csv", "svg"], plan)
"""

from cutplan.infrastructure.exporters.base import (
    BaseExporter,
    ExportManager,
    Exporter,
    ExporterRegistry,
)
from cutplan.infrastructure.exporters.csv_exporter import CsvExporter
from cutplan.infrastructure.exporters.json_exporter import JsonExporter
from cutplan.infrastructure.exporters.svg_exporter import SvgExporter
from cutplan.infrastructure.exporters.text_exporter import TextExporter

__all__ = [
    "BaseExporter",
    "CsvExporter",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonExporter",
    "SvgExporter",
    "TextExporter",
]
