"""Schema migration for content documents.

v1 → v2: breadcrumbs listed provider *specs* (NPC role/tier filters, chest,
note, tavernkeeper); v2 stores concrete ``providerRefs`` and adds ``items``.
  - NPC specs pick up to 3 NPCs matching ``rolesAny`` and ``minTier``
  - chest/note specs become placeholder items with no location
  - tavernkeeper specs are dropped (the fallback is global now)
v2 → v3: adds ``connections``, provider ``brotherBeats`` and the
``isMainJourney`` flag.

Every version is then normalized: missing arrays become [], missing booleans
and weights get their defaults. The result validates as a ContentStore.
"""

import copy
import logging
from typing import Any

from breadcrumb_trail.models import CONTENT_VERSION

logger = logging.getLogger(__name__)

_NPC_SPEC_MATCH_LIMIT = 3


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


_RECORD_COLLECTIONS = ("factions", "locations", "npcs", "items", "breadcrumbs", "connections")


def _check_records(raw: dict[str, Any]) -> None:
    for key in _RECORD_COLLECTIONS:
        if not all(isinstance(entry, dict) for entry in _list(raw.get(key))):
            raise ValueError(f"Invalid store: {key} must hold objects")


def _migrate_v1_to_v2(raw: dict[str, Any]) -> dict[str, Any]:
    npcs = _list(raw.get("npcs"))
    items: list[dict[str, Any]] = []
    breadcrumbs = []

    for b in _list(raw.get("breadcrumbs")):
        provider_refs: list[dict[str, str]] = []
        for n, spec in enumerate(_list(b.get("providers"))):
            spec_type = spec.get("type") if isinstance(spec, dict) else None
            if spec_type == "npc":
                roles_any = _list(spec.get("rolesAny"))
                min_tier = spec.get("minTier", 0)
                if not isinstance(min_tier, int):
                    min_tier = 0
                matches = []
                for npc in npcs:
                    tier = npc.get("tier")
                    if isinstance(tier, int) and tier < min_tier:
                        continue
                    roles = _list(npc.get("roles"))
                    if roles_any and not any(r in roles for r in roles_any):
                        continue
                    matches.append(npc)
                for npc in matches[:_NPC_SPEC_MATCH_LIMIT]:
                    provider_refs.append({"type": "npc", "id": npc["id"]})
            elif spec_type in ("chest", "note"):
                item_id = f"item_migrated_{b.get('id', 'breadcrumb')}_{n}"
                items.append({
                    "id": item_id,
                    "name": "Chest (migrated)" if spec_type == "chest" else "Note (migrated)",
                    "kind": spec_type,
                    "locationId": None,
                    "notes": "",
                    "tags": ["migrated"],
                })
                provider_refs.append({"type": "item", "id": item_id})

        breadcrumbs.append({
            "id": b.get("id"),
            "title": b.get("title", "Breadcrumb"),
            "stageTag": b.get("stageTag", "Any"),
            "text": b.get("text", ""),
            "providerRefs": provider_refs,
            "requirements": _list(b.get("requirements")),
            "nextStageTags": _list(b.get("nextStageTags")),
            "weight": b.get("weight", 1) if isinstance(b.get("weight"), (int, float)) else 1,
        })

    return {
        "version": 2,
        "factions": _list(raw.get("factions")),
        "locations": _list(raw.get("locations")),
        "npcs": npcs,
        "items": items,
        "breadcrumbs": breadcrumbs,
    }


def _migrate_v2_to_v3(raw: dict[str, Any]) -> dict[str, Any]:
    raw["connections"] = _list(raw.get("connections"))
    for provider in _list(raw.get("npcs")) + _list(raw.get("items")):
        provider.setdefault("brotherBeats", [])
    for b in _list(raw.get("breadcrumbs")):
        b.setdefault("isMainJourney", True)
    raw["version"] = 3
    return raw


def _normalize(raw: dict[str, Any]) -> dict[str, Any]:
    for key in _RECORD_COLLECTIONS:
        raw[key] = _list(raw.get(key))
    for loc in raw["locations"]:
        loc["biomeIds"] = _list(loc.get("biomeIds"))
        loc["tags"] = _list(loc.get("tags"))
    for npc in raw["npcs"]:
        npc["roles"] = _list(npc.get("roles"))
        npc["brotherBeats"] = _list(npc.get("brotherBeats"))
    for item in raw["items"]:
        item["tags"] = _list(item.get("tags"))
        item["brotherBeats"] = _list(item.get("brotherBeats"))
    for b in raw["breadcrumbs"]:
        for key in ("providerRefs", "requirements", "nextStageTags"):
            b[key] = _list(b.get(key))
        if not isinstance(b.get("isMainJourney"), bool):
            b["isMainJourney"] = True
        if not isinstance(b.get("isEnd"), bool):
            b["isEnd"] = False
        if not isinstance(b.get("weight"), (int, float)):
            b["weight"] = 1
    return raw


def migrate_to_latest(raw: Any) -> dict[str, Any]:
    """Return a normalized copy of ``raw`` at CONTENT_VERSION.

    Raises ValueError for documents without a version, with an unknown older
    version, or with non-object entries in a collection.
    """
    if not isinstance(raw, dict) or not raw.get("version"):
        raise ValueError("Invalid store")
    version = raw["version"]
    if not isinstance(version, int):
        raise ValueError(f"Unsupported version: {version!r}")
    _check_records(raw)

    doc = copy.deepcopy(raw)
    if version == 1:
        logger.info("Migrating content v1 → v2")
        doc = _migrate_v1_to_v2(doc)
        version = 2
    if version == 2:
        logger.info("Migrating content v2 → v3")
        doc = _migrate_v2_to_v3(doc)
        version = 3
    if version < CONTENT_VERSION:
        raise ValueError(f"Unsupported version: {version}")
    return _normalize(doc)
