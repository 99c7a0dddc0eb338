"""Id lookup tables over a content store, rebuilt whenever the store changes."""

from dataclasses import dataclass, field

from breadcrumb_trail.models import (
    NPC,
    BreadcrumbOption,
    ContentStore,
    Faction,
    ItemProvider,
    Location,
)


@dataclass
class Indexes:
    factions_by_id: dict[str, Faction] = field(default_factory=dict)
    locations_by_id: dict[str, Location] = field(default_factory=dict)
    npcs_by_id: dict[str, NPC] = field(default_factory=dict)
    items_by_id: dict[str, ItemProvider] = field(default_factory=dict)
    breadcrumbs_by_id: dict[str, BreadcrumbOption] = field(default_factory=dict)
    # stage tags that label at least one main-journey breadcrumb
    stage_tags: set[str] = field(default_factory=set)


def build_indexes(store: ContentStore) -> Indexes:
    return Indexes(
        factions_by_id={f.id: f for f in store.factions},
        locations_by_id={loc.id: loc for loc in store.locations},
        npcs_by_id={n.id: n for n in store.npcs},
        items_by_id={it.id: it for it in store.items},
        breadcrumbs_by_id={b.id: b for b in store.breadcrumbs},
        stage_tags={b.stage_tag for b in store.breadcrumbs if b.is_main_journey},
    )
