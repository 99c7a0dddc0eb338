"""Content document endpoints: export/import/reset/audit plus per-collection CRUD."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from breadcrumb_trail import storage
from breadcrumb_trail.validation import audit_content, stage_tag_catalog

router = APIRouter()


@router.get("/content")
async def export_content():
    """Export the whole content store."""
    return storage.export_content()


@router.put("/content")
async def import_content(body: dict):
    """Replace the content store with an uploaded document (migrated to latest)."""
    try:
        store = storage.import_content(body)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return store.model_dump(by_alias=True)


@router.post("/content/reset")
async def reset_content():
    """Replace the content store with the demo world."""
    return storage.reset_content().model_dump(by_alias=True)


@router.get("/content/audit")
async def audit():
    """List dangling references and unreachable stage tags."""
    return {"errors": audit_content(storage.get_content())}


@router.get("/stage-tags")
async def stage_tags():
    """All stage tags labelled or pointed at by breadcrumbs."""
    return stage_tag_catalog(storage.get_content())


@router.get("/content/{collection}")
async def list_entities(collection: storage.Collection):
    """List a content collection."""
    return storage.list_entities(collection)


@router.get("/content/{collection}/{entity_id}")
async def get_entity(collection: storage.Collection, entity_id: str):
    """Get one entity by id."""
    entity = storage.get_entity(collection, entity_id)
    if entity is None:
        raise HTTPException(404, "Not found")
    return entity


@router.put("/content/{collection}/{entity_id}")
async def upsert_entity(collection: storage.Collection, entity_id: str, body: dict):
    """Create or replace an entity."""
    try:
        return storage.upsert_entity(collection, entity_id, body)
    except ValidationError as e:
        raise HTTPException(400, str(e))


@router.delete("/content/{collection}/{entity_id}")
async def delete_entity(collection: storage.Collection, entity_id: str):
    """Delete an entity."""
    if not storage.delete_entity(collection, entity_id):
        raise HTTPException(404, "Not found")
    return {"ok": True}
