"""Unit tests for ComputeCuttingPlanCommand and PlanService."""

from __future__ import annotations

import pytest

from cutplan.application import ComputeCuttingPlanCommand, PlanService
from cutplan.domain import (
    BarLimitExceededError,
    CutItemRequest,
    CutRequestExpander,
    CuttingPlan,
    CuttingPlanConfig,
    InvalidRequestError,
    PlanMetadata,
    SequenceConflictError,
)
from cutplan.infrastructure import InMemoryPlanRepository


class TestComputeCuttingPlanCommand:
    """Tests for the compute command."""

    def test_scenario_plan(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        plan = ComputeCuttingPlanCommand().execute(
            scenario_requests, scenario_config, sequence=7
        )

        assert plan.traceability_code == "PC-007"
        assert plan.total_bars == 3
        assert plan.total_pieces == 6
        assert plan.total_used_length == 11518
        assert plan.total_waste == 6482
        assert plan.overall_efficiency == pytest.approx(63.99, abs=0.01)
        assert plan.config == scenario_config
        assert plan.metadata == PlanMetadata()

    def test_carries_metadata(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        metadata = PlanMetadata(order_id="o-1", material_name="RHS 40x40")
        plan = ComputeCuttingPlanCommand().execute(
            scenario_requests, scenario_config, sequence=1, metadata=metadata
        )
        assert plan.metadata is metadata

    def test_invalid_sequence_fails_before_packing(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        with pytest.raises(ValueError, match="Sequence"):
            ComputeCuttingPlanCommand().execute(scenario_requests, scenario_config, sequence=0)

    def test_propagates_domain_errors(self, scenario_config: CuttingPlanConfig) -> None:
        command = ComputeCuttingPlanCommand()
        with pytest.raises(InvalidRequestError):
            command.execute([], scenario_config, sequence=1)
        with pytest.raises(BarLimitExceededError):
            command.execute(
                [CutItemRequest("P", "1", 4000, 3)],
                CuttingPlanConfig(max_bars=2),
                sequence=1,
            )

    def test_impossible_batch_rejected_before_expansion(self) -> None:
        class RecordingExpander(CutRequestExpander):
            expanded = False

            def expand(self, requests):
                RecordingExpander.expanded = True
                return super().expand(requests)

        command = ComputeCuttingPlanCommand(expander=RecordingExpander())
        with pytest.raises(BarLimitExceededError) as exc_info:
            command.execute(
                [CutItemRequest("P", "1", 1000, 2_000_000)],
                CuttingPlanConfig(max_bars=1),
                sequence=1,
            )

        assert exc_info.value.unplaced_count == 2_000_000 - 5
        assert RecordingExpander.expanded is False


class ConflictingRepository(InMemoryPlanRepository):
    """Repository that rejects the first ``conflicts`` saves."""

    def __init__(self, conflicts: int) -> None:
        super().__init__()
        self.conflicts = conflicts
        self.attempted_codes: list[str] = []

    def save(self, plan: CuttingPlan) -> None:
        self.attempted_codes.append(plan.traceability_code)
        if self.conflicts > 0:
            self.conflicts -= 1
            raise SequenceConflictError(plan.traceability_code)
        super().save(plan)


class TestPlanService:
    """Tests for persisting plans through a repository."""

    def test_assigns_sequential_codes(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        repository = InMemoryPlanRepository()
        service = PlanService(repository)

        first = service.create_plan(scenario_requests, scenario_config)
        second = service.create_plan(scenario_requests, scenario_config)

        assert (first.traceability_code, second.traceability_code) == ("PC-001", "PC-002")
        assert repository.get(first.plan_id) == first

    def test_retries_on_conflict(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        repository = ConflictingRepository(conflicts=2)
        plan = PlanService(repository).create_plan(scenario_requests, scenario_config)

        assert repository.attempted_codes == ["PC-001", "PC-002", "PC-003"]
        assert plan.traceability_code == "PC-003"
        assert repository.list_active() == [plan]

    def test_gives_up_after_max_attempts(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        repository = ConflictingRepository(conflicts=5)
        service = PlanService(repository, max_attempts=2)

        with pytest.raises(SequenceConflictError):
            service.create_plan(scenario_requests, scenario_config)
        assert len(repository.attempted_codes) == 2
        assert repository.list_active() == []

    def test_rejects_invalid_max_attempts(self) -> None:
        with pytest.raises(ValueError):
            PlanService(InMemoryPlanRepository(), max_attempts=0)

    def test_duplicates_for_matches_order_and_material(
        self, scenario_requests: list[CutItemRequest], scenario_config: CuttingPlanConfig
    ) -> None:
        service = PlanService(InMemoryPlanRepository())
        metadata = PlanMetadata(order_id="o-1", material_name="RHS")
        existing = service.create_plan(scenario_requests, scenario_config, metadata)
        service.create_plan(
            scenario_requests, scenario_config, PlanMetadata(order_id="o-2", material_name="RHS")
        )

        assert service.duplicates_for(metadata) == [existing]
        assert service.duplicates_for(PlanMetadata()) == []
