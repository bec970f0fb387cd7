"""API routers for the REST API."""

from cutplan.web.routers.plans import router as plans_router

__all__ = ["plans_router"]
