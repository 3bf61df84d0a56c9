"""
API Version 1 Router.

Aggregates all v1 endpoint routers. Mounted under application.api_prefix.
"""

from fastapi import APIRouter

from cloudnotes.backend.api.v1.endpoints import admin, auth, notes

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
