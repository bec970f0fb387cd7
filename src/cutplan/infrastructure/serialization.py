"""Conversion between CuttingPlan values and JSON-compatible dicts.

The dict layout is the exchange format shared by the JSON exporter, the
JSON file repository and the REST API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from cutplan.domain.entities import Bar, CuttingPlan
from cutplan.domain.value_objects import (
    CutUnit,
    CuttingPlanConfig,
    PlanMetadata,
    Placement,
)


def placement_to_dict(placement: Placement) -> dict[str, Any]:
    unit = placement.unit
    return {
        "unit_id": unit.unit_id,
        "source_request_id": unit.source_request_id,
        "drawing_code": unit.drawing_code,
        "item_number": unit.item_number,
        "length": unit.length,
        "start_position": placement.start_position,
        "end_position": placement.end_position,
    }


def bar_to_dict(bar: Bar) -> dict[str, Any]:
    return {
        "id": bar.id,
        "length": bar.length,
        "placements": [placement_to_dict(p) for p in bar.placements],
        "remaining_length": bar.remaining_length,
        "used_length": bar.used_length,
        "efficiency": bar.efficiency,
    }


def plan_to_dict(plan: CuttingPlan) -> dict[str, Any]:
    """Serialize a plan to a JSON-compatible dictionary."""
    return {
        "plan_id": plan.plan_id,
        "traceability_code": plan.traceability_code,
        "created_at": plan.created_at.isoformat(),
        "metadata": {
            "order_id": plan.metadata.order_id,
            "order_number": plan.metadata.order_number,
            "material_name": plan.metadata.material_name,
            "material_description": plan.metadata.material_description,
        },
        "config": {
            "bar_length": plan.config.bar_length,
            "cutting_thickness": plan.config.cutting_thickness,
            "max_bars": plan.config.max_bars,
            "weight_per_meter": plan.config.weight_per_meter,
        },
        "bars": [bar_to_dict(bar) for bar in plan.bars],
        "total_bars": plan.total_bars,
        "total_pieces": plan.total_pieces,
        "total_used_length": plan.total_used_length,
        "total_available_length": plan.total_available_length,
        "total_waste": plan.total_waste,
        "overall_efficiency": plan.overall_efficiency,
        "total_weight": plan.total_weight,
        "total_scrap_weight": plan.total_scrap_weight,
    }


def _unit_from_dict(data: dict[str, Any]) -> CutUnit:
    source_id = str(data.get("source_request_id", ""))
    unit_id = str(data.get("unit_id", ""))
    index = 0
    prefix = f"{source_id}-"
    if unit_id.startswith(prefix) and unit_id[len(prefix):].isdigit():
        index = int(unit_id[len(prefix):])
    return CutUnit(
        source_request_id=source_id,
        drawing_code=data.get("drawing_code", ""),
        item_number=data.get("item_number", ""),
        length=float(data["length"]),
        index=index,
    )


def plan_from_dict(data: dict[str, Any]) -> CuttingPlan:
    """Rebuild a plan from :func:`plan_to_dict` output.

    Bar efficiency and end positions are recomputed from stored lengths.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a stored value violates a domain invariant.
    """
    config = CuttingPlanConfig(**data["config"])
    bars = tuple(
        Bar(
            id=int(bar["id"]),
            length=float(bar["length"]),
            placements=tuple(
                Placement(
                    unit=_unit_from_dict(p),
                    start_position=float(p["start_position"]),
                )
                for p in bar["placements"]
            ),
            used_length=float(bar["used_length"]),
            remaining_length=float(bar["remaining_length"]),
        )
        for bar in data["bars"]
    )
    return CuttingPlan(
        bars=bars,
        total_used_length=float(data["total_used_length"]),
        total_waste=float(data["total_waste"]),
        overall_efficiency=float(data["overall_efficiency"]),
        total_weight=float(data["total_weight"]),
        total_scrap_weight=float(data.get("total_scrap_weight", 0.0)),
        traceability_code=data["traceability_code"],
        config=config,
        metadata=PlanMetadata(**data.get("metadata", {})),
        plan_id=data["plan_id"],
        created_at=datetime.fromisoformat(data["created_at"]),
    )
