"""
Top‑level API router.

Aggregates the domain routers under a single router that ``main``
mounts at ``/api``.
"""

from fastapi import APIRouter

from .endpoints import health, ideas

router = APIRouter()

router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(ideas.router, prefix="/ideas", tags=["ideas"])
