"""FastAPI API endpoints under /api.

Endpoint groups: health + settings, scenes (read-only content), sessions
(CRUD, choose, dispatch, analysis). Each session's actions are nested
under /api/sessions/{slug}/.

The session view is the presentation boundary: presentation reads state,
current scene, available choices and derived signals from it, and only
changes state through /choose or /dispatch.
"""

from fastapi import APIRouter

from .scenes import router as scenes_router
from .sessions import router as sessions_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(scenes_router)
router.include_router(sessions_router)
