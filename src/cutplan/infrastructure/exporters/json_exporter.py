"""JSON exporter for cutting plans.

The document is the plan exchange format produced by
:func:`cutplan.infrastructure.serialization.plan_to_dict`, tagged with a
schema version.
"""

from __future__ import annotations

import json
from typing import ClassVar

from cutplan.domain.entities import CuttingPlan
from cutplan.infrastructure.exporters.base import BaseExporter, ExporterRegistry
from cutplan.infrastructure.serialization import plan_to_dict

SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("json")
class JsonExporter(BaseExporter):
    """Exports the complete plan, bars and placements as JSON.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, plan: CuttingPlan) -> str:
        data = {"schema_version": SCHEMA_VERSION, **plan_to_dict(plan)}
        return json.dumps(data, indent=self.indent, default=str)
