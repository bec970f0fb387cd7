"""FastAPI REST API for cutting plans.

This module provides a REST API for computing, storing, listing and
exporting cutting plans.

Usage:
    CUTPLAN_STORE_PATH=plans.json uvicorn cutplan.web:app --reload
"""

from cutplan.web.app import app, create_app

__all__ = ["app", "create_app"]
