"""Contracts between the cutting plan core and its collaborators."""

from .protocols import (
    CutRequestExpanderProtocol,
    PackerProtocol,
    PlanAggregatorProtocol,
    PlanRepositoryProtocol,
    ReportExporterProtocol,
)

__all__ = [
    "CutRequestExpanderProtocol",
    "PackerProtocol",
    "PlanAggregatorProtocol",
    "PlanRepositoryProtocol",
    "ReportExporterProtocol",
]
