"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint routers under a unified prefix.
When new endpoints are added, update this file to include them.
"""

from fastapi import APIRouter

from .endpoints import health, travels

router = APIRouter()

router.include_router(travels.router, prefix="/travels", tags=["travels"])
router.include_router(health.router, prefix="/health", tags=["health"])
