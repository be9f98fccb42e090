# itr_engine/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from itr_engine.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from itr_engine.api.v1.routes.itr import router as itr_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(itr_router)

__all__ = ["v1_router"]
