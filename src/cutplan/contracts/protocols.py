"""Service protocols for dependency injection.

This module defines protocol classes that establish contracts between the
pure cutting plan core and its external collaborators. The core never calls
a repository or exporter itself; the application layer wires them together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from cutplan.domain.entities import Bar, CuttingPlan
    from cutplan.domain.services.aggregator import PlanTotals
    from cutplan.domain.value_objects import CutItemRequest, CutUnit, CuttingPlanConfig


class CutRequestExpanderProtocol(Protocol):
    """Protocol for turning grouped requests into unit requests."""

    def expand(self, requests: Sequence[CutItemRequest]) -> list[CutUnit]:
        """Expand requests, rejecting the whole batch on any invalid request."""
        ...

    def validate(self, requests: Sequence[CutItemRequest]) -> None:
        """Check a batch without expanding it."""
        ...


class PackerProtocol(Protocol):
    """Protocol for one-dimensional packing engines."""

    def pack(self, units: Sequence[CutUnit], config: CuttingPlanConfig) -> list[Bar]:
        """Assign every unit to exactly one bar."""
        ...


class PlanAggregatorProtocol(Protocol):
    """Protocol for plan metric derivation."""

    def aggregate(self, bars: Sequence[Bar], config: CuttingPlanConfig) -> PlanTotals:
        """Compute plan totals from packed bars."""
        ...


@runtime_checkable
class PlanRepositoryProtocol(Protocol):
    """Protocol for durable plan storage.

    Implementations own sequence allocation. ``next_sequence`` must be safe
    under concurrent callers, or ``save`` must detect code collisions and
    raise SequenceConflictError so the caller can re-stamp and retry.

    Example:
        ```python
        sequence = repository.next_sequence()
        plan = command.execute(requests, config, sequence=sequence)
        repository.save(plan)
        ```
    """

    def next_sequence(self) -> int:
        """Return the next unused traceability sequence number."""
        ...

    def save(self, plan: CuttingPlan) -> None:
        """Persist a plan.

        Raises:
            SequenceConflictError: If the plan's traceability code is taken.
        """
        ...

    def get(self, plan_id: str) -> CuttingPlan:
        """Return a stored plan, deleted or not.

        Raises:
            PlanNotFoundError: If no plan has this id.
        """
        ...

    def get_by_code(self, traceability_code: str) -> CuttingPlan:
        """Return the stored plan with this traceability code.

        Raises:
            PlanNotFoundError: If no plan has this code.
        """
        ...

    def is_deleted(self, plan_id: str) -> bool:
        """Return whether a stored plan has been soft-deleted."""
        ...

    def list_active(self) -> list[CuttingPlan]:
        """Return all plans not marked deleted, newest first."""
        ...

    def search(self, term: str) -> list[CuttingPlan]:
        """Return active plans whose code, material name or description match."""
        ...

    def find_active(
        self, order_id: str | None, material_name: str | None
    ) -> list[CuttingPlan]:
        """Return active plans for the same order and material."""
        ...

    def mark_deleted(self, plan_id: str) -> None:
        """Soft-delete a plan.

        Raises:
            PlanNotFoundError: If no plan has this id.
        """
        ...

    def mark_all_deleted(self) -> int:
        """Soft-delete every active plan and return how many were affected."""
        ...


@runtime_checkable
class ReportExporterProtocol(Protocol):
    """Protocol for rendering a plan into a printable or exchange document."""

    def render(self, plan: CuttingPlan) -> str:
        """Render the plan as a string document."""
        ...
