"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from voicenotes.backend.api.v1.endpoints import auth, folders, notes

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(folders.router, prefix="/folders", tags=["folders"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
