"""Application layer - use cases and orchestration."""

from .commands import ComputeCuttingPlanCommand, PlanService
from .factory import ServiceFactory, get_factory, reset_factory, set_factory

__all__ = [
    "ComputeCuttingPlanCommand",
    "PlanService",
    "ServiceFactory",
    "get_factory",
    "reset_factory",
    "set_factory",
]
