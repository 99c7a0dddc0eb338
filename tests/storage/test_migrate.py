"""Tests for content schema migration."""

import pytest

from breadcrumb_trail.models import CONTENT_VERSION, ContentStore
from breadcrumb_trail.storage import migrate_to_latest

V1_DOC = {
    "version": 1,
    "factions": [{"id": "bastion", "name": "Bastion"}],
    "locations": [{"id": "loc", "name": "Loc"}],
    "npcs": [
        {"id": "g1", "name": "Guard One", "roles": ["guard"], "tier": 1},
        {"id": "g2", "name": "Guard Two", "roles": ["guard"], "tier": 3},
        {"id": "g3", "name": "Guard Three", "roles": ["guard", "captain"], "tier": 2},
        {"id": "g4", "name": "Guard Four", "roles": ["guard"], "tier": 2},
        {"id": "s1", "name": "Sage", "roles": ["sage"], "tier": 3},
    ],
    "breadcrumbs": [
        {
            "id": "bc1",
            "title": "Old Lead",
            "stageTag": "Start",
            "providers": [
                {"type": "npc", "rolesAny": ["guard"], "minTier": 2},
                {"type": "chest"},
                {"type": "tavernkeeper"},
                {"type": "note"},
            ],
            "nextStageTags": ["Next"],
            "weight": 2,
        },
    ],
}


def test_v1_npc_specs_become_refs_capped_at_three():
    doc = migrate_to_latest(V1_DOC)
    refs = doc["breadcrumbs"][0]["providerRefs"]
    npc_ids = [r["id"] for r in refs if r["type"] == "npc"]
    assert npc_ids == ["g2", "g3", "g4"]


def test_v1_chest_and_note_become_items():
    doc = migrate_to_latest(V1_DOC)
    item_refs = [r["id"] for r in doc["breadcrumbs"][0]["providerRefs"] if r["type"] == "item"]
    assert item_refs == ["item_migrated_bc1_1", "item_migrated_bc1_3"]
    kinds = {it["id"]: it["kind"] for it in doc["items"]}
    assert kinds == {"item_migrated_bc1_1": "chest", "item_migrated_bc1_3": "note"}
    assert all(it["locationId"] is None for it in doc["items"])


def test_v1_tavernkeeper_spec_dropped():
    doc = migrate_to_latest(V1_DOC)
    assert len(doc["breadcrumbs"][0]["providerRefs"]) == 5


def test_v1_keeps_breadcrumb_fields():
    b = migrate_to_latest(V1_DOC)["breadcrumbs"][0]
    assert b["title"] == "Old Lead"
    assert b["nextStageTags"] == ["Next"]
    assert b["weight"] == 2
    assert b["isMainJourney"] is True
    assert b["isEnd"] is False


def test_v1_validates_at_latest_version():
    store = ContentStore.model_validate(migrate_to_latest(V1_DOC))
    assert store.version == CONTENT_VERSION
    assert store.connections == []
    assert all(npc.brother_beats == [] for npc in store.npcs)


def test_migration_does_not_mutate_input():
    before = repr(V1_DOC)
    migrate_to_latest(V1_DOC)
    assert repr(V1_DOC) == before


def test_v2_adds_connections_and_flags():
    doc = migrate_to_latest({
        "version": 2,
        "npcs": [{"id": "n", "name": "N"}],
        "items": [{"id": "i", "name": "I"}],
        "breadcrumbs": [{"id": "b"}],
    })
    assert doc["version"] == 3
    assert doc["connections"] == []
    assert doc["npcs"][0]["brotherBeats"] == []
    assert doc["items"][0]["brotherBeats"] == []
    assert doc["breadcrumbs"][0]["isMainJourney"] is True


def test_current_version_is_normalized():
    doc = migrate_to_latest({
        "version": 3,
        "locations": [{"id": "l", "name": "L", "biomeIds": None}],
        "breadcrumbs": [{"id": "b", "isMainJourney": "yes", "weight": "heavy", "providerRefs": None}],
    })
    assert doc["factions"] == []
    assert doc["locations"][0]["biomeIds"] == []
    b = doc["breadcrumbs"][0]
    assert b["isMainJourney"] is True
    assert b["weight"] == 1
    assert b["providerRefs"] == []


def test_explicit_main_journey_false_survives():
    doc = migrate_to_latest({"version": 3, "breadcrumbs": [{"id": "b", "isMainJourney": False}]})
    assert doc["breadcrumbs"][0]["isMainJourney"] is False


@pytest.mark.parametrize("raw", [None, [], {}, {"version": 0}, {"factions": []}])
def test_invalid_store(raw):
    with pytest.raises(ValueError, match="Invalid store"):
        migrate_to_latest(raw)


def test_unsupported_version_type():
    with pytest.raises(ValueError, match="Unsupported version"):
        migrate_to_latest({"version": "3"})


@pytest.mark.parametrize("raw", [
    {"version": 3, "locations": [1]},
    {"version": 1, "breadcrumbs": ["oops"]},
    {"version": 2, "npcs": [{"id": "n", "name": "N"}, None]},
])
def test_non_object_records_rejected(raw):
    with pytest.raises(ValueError, match="Invalid store"):
        migrate_to_latest(raw)
