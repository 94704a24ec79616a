# trubalance/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from trubalance.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from trubalance.api.v1.routes.gst import router as gst_router
from trubalance.api.v1.routes.invoices import router as invoices_router
from trubalance.api.v1.routes.budget import router as budget_router
from trubalance.api.v1.routes.insights import router as insights_router
from trubalance.api.v1.routes.ai import router as ai_router

v1_router = APIRouter(prefix="/api/v1")

# Calculators
v1_router.include_router(gst_router)
v1_router.include_router(invoices_router)
v1_router.include_router(budget_router)

# Reports / categorization
v1_router.include_router(insights_router)
v1_router.include_router(ai_router)

__all__ = ["v1_router"]
