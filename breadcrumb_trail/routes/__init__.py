"""FastAPI API endpoints under /api.

Endpoint groups: health + run-config, content (export/import/reset/audit and
per-collection CRUD for factions, locations, npcs, items, breadcrumbs,
connections), location tree, journey generation and saved runs.
"""

from fastapi import APIRouter

from .content import router as content_router
from .journey import router as journey_router
from .locations import router as locations_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(content_router)
router.include_router(locations_router)
router.include_router(journey_router)
