"""Expansion of grouped cut requests into individual units."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Sequence

from cutplan.domain.exceptions import InvalidRequestError
from cutplan.domain.value_objects import CutItemRequest, CutUnit

logger = logging.getLogger(__name__)


class CutRequestExpander:
    """Normalizes grouped requests into individually addressable units.

    Each request with quantity N becomes N CutUnit values carrying the
    request's drawing code and item number, so traceability survives
    packing. Units are produced in request order, then quantity order.
    """

    def expand(self, requests: Sequence[CutItemRequest]) -> list[CutUnit]:
        """Expand requests into units.

        Args:
            requests: Grouped cut requests.

        Returns:
            One CutUnit per requested piece.

        Raises:
            InvalidRequestError: If the batch is empty or any request has a
                non-positive length or quantity. No units are produced.
        """
        self.validate(requests)

        units: list[CutUnit] = []
        for position, request in enumerate(requests, start=1):
            source_id = self._source_id(request, position)
            for i in range(request.quantity):
                units.append(
                    CutUnit(
                        source_request_id=source_id,
                        drawing_code=request.drawing_code,
                        item_number=request.item_number,
                        length=float(request.length),
                        index=i,
                    )
                )

        logger.debug("Expanded %d requests into %d units", len(requests), len(units))
        return units

    def validate(self, requests: Sequence[CutItemRequest]) -> None:
        """Check a whole batch before expansion.

        Raises:
            InvalidRequestError: Listing every offending request.
        """
        if not requests:
            raise InvalidRequestError("At least one cut item is required")

        problems: list[dict[str, Any]] = []
        seen: set[str] = set()
        for index, request in enumerate(requests):
            reason = self._problem(request)
            source_id = self._source_id(request, index + 1)
            if reason is None and source_id in seen:
                reason = f"request id {source_id!r} is already used"
            seen.add(source_id)
            if reason is not None:
                problems.append(
                    {
                        "index": index,
                        "drawing_code": request.drawing_code,
                        "item_number": request.item_number,
                        "reason": reason,
                    }
                )

        if problems:
            summary = "; ".join(
                f"item {p['index'] + 1} ({p['drawing_code']} #{p['item_number']}): {p['reason']}"
                for p in problems
            )
            raise InvalidRequestError(f"Invalid cut items: {summary}", problems)

    @staticmethod
    def _source_id(request: CutItemRequest, position: int) -> str:
        return request.request_id or str(position)

    @staticmethod
    def _problem(request: CutItemRequest) -> str | None:
        length = request.length
        quantity = request.quantity
        if isinstance(length, bool) or not isinstance(length, Real):
            return "length must be a number"
        if not math.isfinite(length) or length <= 0:
            return "length must be positive"
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return "quantity must be an integer"
        if quantity <= 0:
            return "quantity must be positive"
        return None
