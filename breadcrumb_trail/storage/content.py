"""Content store file (content.json) and per-collection CRUD."""

import json
import logging
from typing import Any, Literal

from pydantic import ValidationError

from breadcrumb_trail.defaults import default_content
from breadcrumb_trail.indexes import build_indexes
from breadcrumb_trail.locations import can_reparent
from breadcrumb_trail.models import (
    NPC,
    BreadcrumbOption,
    Connection,
    ContentStore,
    Faction,
    ItemProvider,
    Location,
    Model,
)

from .core import content_path
from .migrate import migrate_to_latest

logger = logging.getLogger(__name__)

Collection = Literal["factions", "locations", "npcs", "items", "breadcrumbs", "connections"]

COLLECTION_MODELS: dict[str, type[Model]] = {
    "factions": Faction,
    "locations": Location,
    "npcs": NPC,
    "items": ItemProvider,
    "breadcrumbs": BreadcrumbOption,
    "connections": Connection,
}


def get_content() -> ContentStore:
    """Load, migrate and validate content.json. Returns default content if missing.

    A document that fails to parse or migrate is logged and replaced by
    default content in memory (the file is left untouched for inspection).
    """
    path = content_path()
    if not path.is_file():
        return default_content()
    try:
        raw = json.loads(path.read_text())
        return ContentStore.model_validate(migrate_to_latest(raw))
    except (ValueError, ValidationError) as e:
        logger.warning("Unreadable content at %s, serving defaults: %s", path, e)
        return default_content()


def save_content(store: ContentStore) -> ContentStore:
    content_path().write_text(store.model_dump_json(indent=2, by_alias=True))
    return store


def reset_content() -> ContentStore:
    """Overwrite content.json with the demo world."""
    return save_content(default_content())


def import_content(raw: Any) -> ContentStore:
    """Migrate, validate and persist an uploaded document.

    Raises ValueError (bad version) or pydantic ValidationError.
    """
    store = ContentStore.model_validate(migrate_to_latest(raw))
    return save_content(store)


def export_content() -> dict[str, Any]:
    return get_content().model_dump(by_alias=True)


# ── Collections ──────────────────────────────────────────


def list_entities(collection: Collection) -> list[dict[str, Any]]:
    store = get_content()
    return [e.model_dump(by_alias=True) for e in getattr(store, collection)]


def get_entity(collection: Collection, entity_id: str) -> dict[str, Any] | None:
    for entity in getattr(get_content(), collection):
        if entity.id == entity_id:
            return entity.model_dump(by_alias=True)
    return None


def upsert_entity(collection: Collection, entity_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """Create or replace an entity; the path id wins over any id in ``fields``.

    Replacing keeps the entity's position in the collection, creating appends.
    Raises pydantic ValidationError on bad fields.
    """
    model = COLLECTION_MODELS[collection]
    entity = model.model_validate({**fields, "id": entity_id})
    store = get_content()
    entities = getattr(store, collection)
    for i, existing in enumerate(entities):
        if existing.id == entity_id:
            entities[i] = entity
            break
    else:
        entities.append(entity)
    save_content(store)
    return entity.model_dump(by_alias=True)


def delete_entity(collection: Collection, entity_id: str) -> bool:
    """Remove an entity. Deleting a location detaches its children."""
    store = get_content()
    entities = getattr(store, collection)
    remaining = [e for e in entities if e.id != entity_id]
    if len(remaining) == len(entities):
        return False
    setattr(store, collection, remaining)
    if collection == "locations":
        for loc in store.locations:
            if loc.parent_id == entity_id:
                loc.parent_id = None
    save_content(store)
    return True


def reparent_location(location_id: str, parent_id: str | None) -> dict[str, Any] | None:
    """Move a location under a new parent (or to the root with None).

    Returns None if either location is missing; raises ValueError on a cycle.
    """
    store = get_content()
    ix = build_indexes(store)
    location = ix.locations_by_id.get(location_id)
    if location is None or (parent_id is not None and parent_id not in ix.locations_by_id):
        return None
    if not can_reparent(location_id, parent_id, ix):
        raise ValueError(f"Cannot move {location_id} under its own descendant {parent_id}")
    location.parent_id = parent_id
    save_content(store)
    return location.model_dump(by_alias=True)
