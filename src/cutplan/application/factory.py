"""Service factory for dependency injection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from cutplan.application.commands import ComputeCuttingPlanCommand, PlanService
    from cutplan.contracts.protocols import (
        CutRequestExpanderProtocol,
        PackerProtocol,
        PlanAggregatorProtocol,
        PlanRepositoryProtocol,
    )

STORE_PATH_ENV = "CUTPLAN_STORE_PATH"


def store_path_from_env() -> Path | None:
    """Plan store location from the environment, if configured."""
    value = os.getenv(STORE_PATH_ENV)
    return Path(value) if value else None


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes service instantiation so the CLI, the REST API and tests
    share one wiring of expander, packer, aggregator and repository.

    Attributes:
        store_path: JSON file backing the plan repository. When None, plans
            are kept in memory for the lifetime of the factory.
    """

    store_path: Path | None = None

    _expander: "CutRequestExpanderProtocol | None" = field(
        default=None, init=False, repr=False
    )
    _packer: "PackerProtocol | None" = field(default=None, init=False, repr=False)
    _aggregator: "PlanAggregatorProtocol | None" = field(
        default=None, init=False, repr=False
    )
    _repository: "PlanRepositoryProtocol | None" = field(
        default=None, init=False, repr=False
    )

    def get_expander(self) -> "CutRequestExpanderProtocol":
        if self._expander is None:
            from cutplan.domain.services import CutRequestExpander

            self._expander = cast("CutRequestExpanderProtocol", CutRequestExpander())
        return self._expander

    def get_packer(self) -> "PackerProtocol":
        if self._packer is None:
            from cutplan.domain.services import FFDPacker

            self._packer = cast("PackerProtocol", FFDPacker())
        return self._packer

    def get_aggregator(self) -> "PlanAggregatorProtocol":
        if self._aggregator is None:
            from cutplan.domain.services import PlanAggregator

            self._aggregator = cast("PlanAggregatorProtocol", PlanAggregator())
        return self._aggregator

    def get_repository(self) -> "PlanRepositoryProtocol":
        """Get or create the plan repository."""
        if self._repository is None:
            from cutplan.infrastructure.repository import (
                InMemoryPlanRepository,
                JsonFilePlanRepository,
            )

            if self.store_path is not None:
                self._repository = JsonFilePlanRepository(self.store_path)
            else:
                self._repository = InMemoryPlanRepository()
        return self._repository

    def create_compute_command(self) -> "ComputeCuttingPlanCommand":
        from cutplan.application.commands import ComputeCuttingPlanCommand

        return ComputeCuttingPlanCommand(
            expander=self.get_expander(),
            packer=self.get_packer(),
            aggregator=self.get_aggregator(),
        )

    def create_plan_service(self) -> "PlanService":
        from cutplan.application.commands import PlanService

        return PlanService(
            repository=self.get_repository(),
            command=self.create_compute_command(),
        )


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory, configured from the environment."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory(store_path=store_path_from_env())
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
