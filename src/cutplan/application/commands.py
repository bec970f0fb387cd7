"""Application commands (use cases) for cutting plan computation."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Sequence

from cutplan.domain import (
    CutItemRequest,
    CutRequestExpander,
    CuttingPlan,
    CuttingPlanConfig,
    FFDPacker,
    PlanAggregator,
    PlanMetadata,
    SequenceConflictError,
    TraceabilityAssigner,
)
from cutplan.domain.services import check_bar_capacity

if TYPE_CHECKING:
    from cutplan.contracts.protocols import (
        CutRequestExpanderProtocol,
        PackerProtocol,
        PlanAggregatorProtocol,
        PlanRepositoryProtocol,
    )

logger = logging.getLogger(__name__)


class ComputeCuttingPlanCommand:
    """Command to compute a complete cutting plan.

    Runs the expander, packer and aggregator in one synchronous pass and
    stamps the plan with a traceability code built from the supplied
    sequence number. The command keeps no state between runs.
    """

    def __init__(
        self,
        expander: CutRequestExpanderProtocol | None = None,
        packer: PackerProtocol | None = None,
        aggregator: PlanAggregatorProtocol | None = None,
        assigner: TraceabilityAssigner | None = None,
    ) -> None:
        self.expander = expander or CutRequestExpander()
        self.packer = packer or FFDPacker()
        self.aggregator = aggregator or PlanAggregator()
        self.assigner = assigner or TraceabilityAssigner()

    def execute(
        self,
        requests: Sequence[CutItemRequest],
        config: CuttingPlanConfig,
        sequence: int,
        metadata: PlanMetadata | None = None,
    ) -> CuttingPlan:
        """Compute a cutting plan.

        Args:
            requests: Grouped cut requests.
            config: Bar length, kerf, bar limit and linear weight.
            sequence: Next unused sequence number, used verbatim.
            metadata: Optional order and material description.

        Returns:
            A fully computed, immutable CuttingPlan.

        Raises:
            InvalidRequestError: If any request is invalid.
            ItemExceedsBarLengthError: If a piece can never fit a bar.
            BarLimitExceededError: If more than ``config.max_bars`` are needed.
            ValueError: If ``sequence`` is not a positive integer.
        """
        code = self.assigner.assign(sequence)
        self.expander.validate(requests)
        check_bar_capacity(requests, config)
        units = self.expander.expand(requests)
        bars = self.packer.pack(units, config)
        totals = self.aggregator.aggregate(bars, config)

        plan = CuttingPlan(
            bars=tuple(bars),
            total_used_length=totals.total_used_length,
            total_waste=totals.total_waste,
            overall_efficiency=totals.overall_efficiency,
            total_weight=totals.total_weight,
            total_scrap_weight=totals.total_scrap_weight,
            traceability_code=code,
            config=config,
            metadata=metadata or PlanMetadata(),
        )
        logger.info(
            "Computed plan %s: %d units on %d bars, %.2f%% efficiency",
            code,
            len(units),
            plan.total_bars,
            plan.overall_efficiency,
        )
        return plan


class PlanService:
    """Computes plans and persists them through a repository.

    The repository supplies sequence numbers. When a save collides with an
    existing traceability code, the plan is re-stamped with a fresh
    sequence and saved again, up to ``max_attempts`` times.
    """

    def __init__(
        self,
        repository: PlanRepositoryProtocol,
        command: ComputeCuttingPlanCommand | None = None,
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.repository = repository
        self.command = command or ComputeCuttingPlanCommand()
        self.max_attempts = max_attempts

    def create_plan(
        self,
        requests: Sequence[CutItemRequest],
        config: CuttingPlanConfig,
        metadata: PlanMetadata | None = None,
    ) -> CuttingPlan:
        """Compute a plan, stamp it with the next sequence and save it.

        Raises:
            SequenceConflictError: If every attempt collided.
            CuttingPlanError: Any error raised while computing the plan.
        """
        plan = self.command.execute(
            requests, config, sequence=self.repository.next_sequence(), metadata=metadata
        )

        attempt = 1
        while True:
            try:
                self.repository.save(plan)
                return plan
            except SequenceConflictError as e:
                if attempt >= self.max_attempts:
                    raise
                attempt += 1
                code = self.command.assigner.assign(self.repository.next_sequence())
                logger.warning(
                    "Traceability code %s already used, retrying as %s",
                    e.traceability_code,
                    code,
                )
                plan = replace(plan, traceability_code=code)

    def duplicates_for(self, metadata: PlanMetadata) -> list[CuttingPlan]:
        """Active plans already stored for the same order and material."""
        if metadata.order_id is None and metadata.material_name is None:
            return []
        return self.repository.find_active(metadata.order_id, metadata.material_name)
