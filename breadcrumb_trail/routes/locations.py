"""Location tree and derived-placement endpoints."""

from fastapi import APIRouter, HTTPException

from breadcrumb_trail import storage
from breadcrumb_trail.indexes import build_indexes
from breadcrumb_trail.locations import breadcrumb_location_ids, effective_biomes

from .models import ReparentBody

router = APIRouter()


@router.post("/locations/{location_id}/parent")
async def reparent_location(location_id: str, body: ReparentBody):
    """Move a location under another (parentId null = root). Refuses cycles."""
    try:
        location = storage.reparent_location(location_id, body.parent_id)
    except ValueError as e:
        raise HTTPException(400, str(e))
    if location is None:
        raise HTTPException(404, "Location not found")
    return location


@router.get("/locations/{location_id}/biomes")
async def location_biomes(location_id: str):
    """Own or inherited biome ids for a location."""
    ix = build_indexes(storage.get_content())
    if location_id not in ix.locations_by_id:
        raise HTTPException(404, "Location not found")
    return effective_biomes(location_id, ix)


@router.get("/breadcrumbs/{breadcrumb_id}/locations")
async def breadcrumb_locations(breadcrumb_id: str):
    """Locations derived from a breadcrumb's provider pool."""
    ix = build_indexes(storage.get_content())
    option = ix.breadcrumbs_by_id.get(breadcrumb_id)
    if option is None:
        raise HTTPException(404, "Breadcrumb not found")
    return [
        ix.locations_by_id[loc_id].model_dump(by_alias=True) if loc_id in ix.locations_by_id
        else {"id": loc_id}
        for loc_id in breadcrumb_location_ids(option, ix)
    ]
