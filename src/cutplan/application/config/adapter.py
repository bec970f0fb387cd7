"""Adapters from the configuration schema to domain objects.

The pydantic schema validates data at the file/API boundary; these
functions hand the core its own frozen dataclasses so the domain layer
never depends on pydantic.
"""

from cutplan.application.config.schema import CutItemConfig, CuttingPlanConfiguration
from cutplan.domain.value_objects import CutItemRequest, CuttingPlanConfig, PlanMetadata


def config_to_plan_config(config: CuttingPlanConfiguration) -> CuttingPlanConfig:
    """Build the immutable run configuration."""
    return CuttingPlanConfig(
        bar_length=config.plan.bar_length,
        cutting_thickness=config.plan.cutting_thickness,
        max_bars=config.plan.max_bars,
        weight_per_meter=config.material.weight_per_meter,
    )


def item_config_to_request(item: CutItemConfig) -> CutItemRequest:
    return CutItemRequest(
        drawing_code=item.drawing_code,
        item_number=item.item_number,
        length=item.length,
        quantity=item.quantity,
        request_id=item.request_id,
    )


def config_to_requests(config: CuttingPlanConfiguration) -> list[CutItemRequest]:
    """Convert configured items to grouped cut requests, preserving order."""
    return [item_config_to_request(item) for item in config.items]


def config_to_metadata(config: CuttingPlanConfiguration) -> PlanMetadata:
    """Collect order and material descriptions for the plan."""
    return PlanMetadata(
        order_id=config.order.order_id,
        order_number=config.order.order_number,
        material_name=config.material.name,
        material_description=config.material.description,
    )
