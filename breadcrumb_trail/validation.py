"""Content audit: dangling references and unreachable stages.

Returns a flat list of ``CODE:detail`` strings; an empty list means the store
is internally consistent. Nothing here blocks generation, which tolerates all
of these conditions and reports them as issues at run time instead.
"""

from __future__ import annotations

from breadcrumb_trail.journey.eligibility import WILDCARD_STAGE
from breadcrumb_trail.models import ContentStore, NpcRef, RespectAtLeastRequirement


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for item_id in ids:
        if item_id in seen and item_id not in dupes:
            dupes.append(item_id)
        seen.add(item_id)
    return dupes


def audit_content(store: ContentStore) -> list[str]:
    errors: list[str] = []
    faction_ids = {f.id for f in store.factions}
    location_ids = {loc.id for loc in store.locations}
    npc_ids = {n.id for n in store.npcs}
    item_ids = {it.id for it in store.items}
    stage_tags = {b.stage_tag for b in store.breadcrumbs}

    for kind, ids in (
        ("FACTION", [f.id for f in store.factions]),
        ("LOCATION", [loc.id for loc in store.locations]),
        ("NPC", [n.id for n in store.npcs]),
        ("ITEM", [it.id for it in store.items]),
        ("BREADCRUMB", [b.id for b in store.breadcrumbs]),
    ):
        for dupe in _duplicates(ids):
            errors.append(f"DUPLICATE_{kind}_ID:{dupe}")

    for loc in store.locations:
        if loc.parent_id and loc.parent_id not in location_ids:
            errors.append(f"DANGLING_LOCATION_PARENT:{loc.id}:{loc.parent_id}")
        for biome_id in loc.biome_ids:
            if biome_id not in location_ids:
                errors.append(f"DANGLING_LOCATION_BIOME:{loc.id}:{biome_id}")
        if loc.default_biome_id and loc.default_biome_id not in location_ids:
            errors.append(f"DANGLING_LOCATION_BIOME:{loc.id}:{loc.default_biome_id}")

    for npc in store.npcs:
        if npc.faction_id and npc.faction_id not in faction_ids:
            errors.append(f"DANGLING_NPC_FACTION:{npc.id}:{npc.faction_id}")
        if npc.location_id and npc.location_id not in location_ids:
            errors.append(f"DANGLING_NPC_LOCATION:{npc.id}:{npc.location_id}")

    for item in store.items:
        if item.location_id and item.location_id not in location_ids:
            errors.append(f"DANGLING_ITEM_LOCATION:{item.id}:{item.location_id}")

    for b in store.breadcrumbs:
        if not b.provider_refs:
            errors.append(f"EMPTY_PROVIDER_POOL:{b.id}")
        for ref in b.provider_refs:
            known = npc_ids if isinstance(ref, NpcRef) else item_ids
            if ref.id not in known:
                errors.append(f"DANGLING_PROVIDER_REF:{b.id}:{ref.type}:{ref.id}")
        for req in b.requirements:
            if isinstance(req, RespectAtLeastRequirement) and req.faction_id not in faction_ids:
                errors.append(f"DANGLING_REQUIREMENT_FACTION:{b.id}:{req.faction_id}")
        for tag in b.next_stage_tags:
            if tag not in stage_tags and WILDCARD_STAGE not in stage_tags:
                errors.append(f"UNKNOWN_NEXT_STAGE:{b.id}:{tag}")

    for conn in store.connections:
        for end in (conn.from_id, conn.to_id):
            if end not in location_ids:
                errors.append(f"DANGLING_CONNECTION_LOCATION:{conn.id}:{end}")

    return errors


def stage_tag_catalog(store: ContentStore) -> list[str]:
    """Every stage tag labelled or pointed at, in first-seen order."""
    tags: list[str] = []
    for b in store.breadcrumbs:
        for tag in [b.stage_tag, *b.next_stage_tags]:
            if tag not in tags:
                tags.append(tag)
    return tags
