# invoicer/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from invoicer.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from invoicer.api.v1.routes.auth import router as auth_router
from invoicer.api.v1.routes.business import router as business_router
from invoicer.api.v1.routes.customers import router as customers_router
from invoicer.api.v1.routes.dashboard import router as dashboard_router
from invoicer.api.v1.routes.frequently_used_items import router as frequently_used_items_router
from invoicer.api.v1.routes.hsn_sac import router as hsn_sac_router
from invoicer.api.v1.routes.invoices import router as invoices_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(auth_router)
v1_router.include_router(business_router)
v1_router.include_router(customers_router)
v1_router.include_router(invoices_router)
v1_router.include_router(hsn_sac_router)
v1_router.include_router(frequently_used_items_router)
v1_router.include_router(dashboard_router)

__all__ = ["v1_router"]
