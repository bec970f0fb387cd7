"""Infrastructure layer: storage, serialization, rendering and export."""

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry
from cutplan.infrastructure.repository import (
    InMemoryPlanRepository,
    JsonFilePlanRepository,
)
from cutplan.infrastructure.serialization import plan_from_dict, plan_to_dict

__all__ = [
    "CutDiagramRenderer",
    "ExportManager",
    "ExporterRegistry",
    "InMemoryPlanRepository",
    "JsonFilePlanRepository",
    "plan_from_dict",
    "plan_to_dict",
]
