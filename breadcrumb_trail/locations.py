"""Location tree logic: ancestry, reparenting, biome inheritance and derived placement.

Locations form a single-parent tree (``parent_id``); children are derived by
filtering on it. Biomes are themselves locations of kind "biome".

Biome resolution for a location:
  1. its own ``biome_ids`` if non-empty
  2. else its own ``default_biome_id``
  3. else the nearest ancestor's ``default_biome_id``
  4. else none

A breadcrumb's location is never authored: it is the set of locations of the
NPCs and items in its provider pool.
"""

from breadcrumb_trail.indexes import Indexes
from breadcrumb_trail.models import BreadcrumbOption, Location, NpcRef


def ancestors(location_id: str, ix: Indexes) -> list[Location]:
    """Parent first, root last. Stops on a missing id or a cycle."""
    result: list[Location] = []
    seen = {location_id}
    loc = ix.locations_by_id.get(location_id)
    cur = loc.parent_id if loc else None
    while cur and cur not in seen:
        parent = ix.locations_by_id.get(cur)
        if parent is None:
            break
        result.append(parent)
        seen.add(cur)
        cur = parent.parent_id
    return result


def children(location_id: str, locations: list[Location]) -> list[Location]:
    return [loc for loc in locations if loc.parent_id == location_id]


def can_reparent(child_id: str, parent_id: str | None, ix: Indexes) -> bool:
    """A location can't become its own parent or a child of its descendant."""
    if parent_id is None:
        return True
    if parent_id == child_id:
        return False
    return all(a.id != child_id for a in ancestors(parent_id, ix))


def inherited_default_biome(location_id: str, ix: Indexes) -> str | None:
    for loc in ancestors(location_id, ix):
        if loc.default_biome_id:
            return loc.default_biome_id
    return None


def effective_biomes(location_id: str, ix: Indexes) -> dict:
    """Return {"biomeIds": [...], "inherited": bool} for display."""
    loc = ix.locations_by_id.get(location_id)
    if loc is None:
        return {"biomeIds": [], "inherited": False}
    if loc.biome_ids:
        return {"biomeIds": list(loc.biome_ids), "inherited": False}
    if loc.default_biome_id:
        return {"biomeIds": [loc.default_biome_id], "inherited": False}
    inherited = inherited_default_biome(location_id, ix)
    if inherited:
        return {"biomeIds": [inherited], "inherited": True}
    return {"biomeIds": [], "inherited": False}


def breadcrumb_location_ids(option: BreadcrumbOption, ix: Indexes) -> list[str]:
    """Unique provider locations in provider order."""
    result: list[str] = []
    for ref in option.provider_refs:
        if isinstance(ref, NpcRef):
            provider = ix.npcs_by_id.get(ref.id)
        else:
            provider = ix.items_by_id.get(ref.id)
        if provider and provider.location_id and provider.location_id not in result:
            result.append(provider.location_id)
    return result
