"""FastAPI dependency injection for cutting plan services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cutplan.application.commands import ComputeCuttingPlanCommand, PlanService
from cutplan.application.factory import ServiceFactory, get_factory
from cutplan.contracts import PlanRepositoryProtocol


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_compute_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> ComputeCuttingPlanCommand:
    return factory.create_compute_command()


def get_plan_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PlanService:
    return factory.create_plan_service()


def get_plan_repository(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> PlanRepositoryProtocol:
    return factory.get_repository()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
ComputeCommandDep = Annotated[ComputeCuttingPlanCommand, Depends(get_compute_command)]
PlanServiceDep = Annotated[PlanService, Depends(get_plan_service)]
PlanRepositoryDep = Annotated[PlanRepositoryProtocol, Depends(get_plan_repository)]
