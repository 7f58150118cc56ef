"""
Top‑level API router.

Aggregates the admin and posts routers.  ``create_app`` includes this
router twice, once at the root and once under ``settings.api_prefix``,
so both ``/posts`` and ``/api/posts`` reach the same handlers.
"""

from fastapi import APIRouter

from .endpoints import admin, posts


router = APIRouter()

router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
