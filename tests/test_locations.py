"""Tests for the location tree: ancestry, reparent checks, biomes, placement."""

from breadcrumb_trail.indexes import build_indexes
from breadcrumb_trail.locations import (
    ancestors,
    breadcrumb_location_ids,
    can_reparent,
    children,
    effective_biomes,
)
from breadcrumb_trail.models import (
    NPC,
    BreadcrumbOption,
    ContentStore,
    ItemProvider,
    ItemRef,
    Location,
    NpcRef,
)


def _tree():
    locations = [
        Location(id="forest", name="Forest", kind="biome"),
        Location(id="swamp", name="Swamp", kind="biome"),
        Location(id="world", name="World", default_biome_id="forest"),
        Location(id="town", name="Town", parent_id="world"),
        Location(id="inn", name="Inn", kind="landmark", parent_id="town"),
        Location(id="bog", name="Bog", kind="landmark", parent_id="town", biome_ids=["swamp", "forest"]),
        Location(id="camp", name="Camp", parent_id="town", default_biome_id="swamp"),
    ]
    return build_indexes(ContentStore(locations=locations)), locations


# ── Tree ─────────────────────────────────────────────────


def test_ancestors_parent_first():
    ix, _ = _tree()
    assert [a.id for a in ancestors("inn", ix)] == ["town", "world"]
    assert ancestors("world", ix) == []
    assert ancestors("nope", ix) == []


def test_ancestors_stops_on_cycle():
    ix = build_indexes(ContentStore(locations=[
        Location(id="a", name="A", parent_id="b"),
        Location(id="b", name="B", parent_id="a"),
    ]))
    assert [a.id for a in ancestors("a", ix)] == ["b"]


def test_ancestors_stops_on_missing_parent():
    ix = build_indexes(ContentStore(locations=[Location(id="a", name="A", parent_id="ghost")]))
    assert ancestors("a", ix) == []


def test_children():
    _, locations = _tree()
    assert [c.id for c in children("town", locations)] == ["inn", "bog", "camp"]


def test_can_reparent():
    ix, _ = _tree()
    assert can_reparent("inn", "world", ix)
    assert can_reparent("town", None, ix)
    assert not can_reparent("town", "town", ix)
    assert not can_reparent("world", "inn", ix)


# ── Biomes ───────────────────────────────────────────────


def test_own_biome_overlay_wins():
    ix, _ = _tree()
    assert effective_biomes("bog", ix) == {"biomeIds": ["swamp", "forest"], "inherited": False}


def test_own_default_biome():
    ix, _ = _tree()
    assert effective_biomes("camp", ix) == {"biomeIds": ["swamp"], "inherited": False}


def test_inherited_from_nearest_ancestor():
    ix, _ = _tree()
    assert effective_biomes("inn", ix) == {"biomeIds": ["forest"], "inherited": True}


def test_no_biome():
    ix, _ = _tree()
    assert effective_biomes("forest", ix) == {"biomeIds": [], "inherited": False}
    assert effective_biomes("nope", ix) == {"biomeIds": [], "inherited": False}


# ── Derived breadcrumb placement ─────────────────────────


def test_breadcrumb_locations_from_providers():
    option = BreadcrumbOption(id="b", provider_refs=[
        NpcRef(id="n1"), ItemRef(id="i1"), NpcRef(id="n2"), NpcRef(id="ghost"), NpcRef(id="n3"),
    ])
    ix = build_indexes(ContentStore(
        npcs=[
            NPC(id="n1", name="N1", location_id="inn"),
            NPC(id="n2", name="N2", location_id="inn"),
            NPC(id="n3", name="N3"),
        ],
        items=[ItemProvider(id="i1", name="I1", location_id="bog")],
        breadcrumbs=[option],
    ))
    assert breadcrumb_location_ids(option, ix) == ["inn", "bog"]
