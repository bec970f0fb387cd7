"""Custom exceptions and error handlers for the REST API."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutplan.domain.exceptions import (
    BarLimitExceededError,
    InvalidRequestError,
    ItemExceedsBarLengthError,
    PlanNotFoundError,
    SequenceConflictError,
)


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


def _error(status_code: int, error: str, error_type: str, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "error_type": error_type, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(
        request: Request, exc: InvalidRequestError
    ) -> JSONResponse:
        return _error(422, str(exc), exc.error_type, exc.problems)

    @app.exception_handler(ItemExceedsBarLengthError)
    async def item_exceeds_handler(
        request: Request, exc: ItemExceedsBarLengthError
    ) -> JSONResponse:
        return _error(
            422,
            str(exc),
            exc.error_type,
            {
                "bar_length": exc.bar_length,
                "cutting_thickness": exc.cutting_thickness,
                "offenders": [
                    {
                        "unit_id": unit.unit_id,
                        "drawing_code": unit.drawing_code,
                        "item_number": unit.item_number,
                        "length": unit.length,
                    }
                    for unit in exc.offenders
                ],
            },
        )

    @app.exception_handler(BarLimitExceededError)
    async def bar_limit_handler(
        request: Request, exc: BarLimitExceededError
    ) -> JSONResponse:
        return _error(
            422,
            str(exc),
            exc.error_type,
            {"max_bars": exc.max_bars, "unplaced_count": exc.unplaced_count},
        )

    @app.exception_handler(SequenceConflictError)
    async def sequence_conflict_handler(
        request: Request, exc: SequenceConflictError
    ) -> JSONResponse:
        return _error(
            409, str(exc), exc.error_type, {"traceability_code": exc.traceability_code}
        )

    @app.exception_handler(PlanNotFoundError)
    async def plan_not_found_handler(
        request: Request, exc: PlanNotFoundError
    ) -> JSONResponse:
        return _error(404, str(exc), exc.error_type, {"plan_id": exc.plan_id})

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return _error(
            400,
            str(exc),
            "unsupported_format",
            {"format": exc.format_name, "available": exc.available},
        )
