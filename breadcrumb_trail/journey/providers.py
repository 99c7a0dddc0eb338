"""Witness resolution: turn a breadcrumb's provider pool into one concrete provider.

NPC refs need the NPC to exist and its faction (if any) to be present in the
run. With ``respect_gating`` on, the run's respect for that faction must also
reach the NPC's tier. Item refs only need the item to exist.

When the pool is empty the caller falls back to a tavernkeeper: any NPC with
the "tavernkeeper" role whose faction is present, else a generic placeholder.
"""

from breadcrumb_trail.indexes import Indexes
from breadcrumb_trail.models import (
    NPC,
    BreadcrumbOption,
    ItemRef,
    ItemStepProvider,
    NpcRef,
    NpcStepProvider,
    RunConfig,
    StepProvider,
    TavernkeeperStepProvider,
)

from .selection import Rng, pick_uniform

TAVERNKEEPER_ROLE = "tavernkeeper"


def faction_present(cfg: RunConfig, faction_id: str | None) -> bool:
    if faction_id is None:
        return True
    return cfg.factions_present.get(faction_id, True)


def npc_rejection(npc: NPC, cfg: RunConfig) -> str | None:
    """Why this NPC can't witness in this run, or None if it can."""
    if not faction_present(cfg, npc.faction_id):
        return f'npc "{npc.id}" blocked: faction "{npc.faction_id}" not present'
    if cfg.respect_gating and npc.faction_id is not None:
        respect = cfg.respect.get(npc.faction_id, 0)
        if respect < npc.tier:
            return (
                f'npc "{npc.id}" blocked: respect {respect} with faction '
                f'"{npc.faction_id}" is below tier {npc.tier}'
            )
    return None


def provider_pool(
    ix: Indexes, option: BreadcrumbOption, cfg: RunConfig
) -> tuple[list[StepProvider], list[str]]:
    """Return (admitted providers in authored order, rejection reasons)."""
    candidates: list[StepProvider] = []
    rejections: list[str] = []
    for ref in option.provider_refs:
        if isinstance(ref, NpcRef):
            npc = ix.npcs_by_id.get(ref.id)
            if npc is None:
                rejections.append(f'npc "{ref.id}" does not exist')
                continue
            reason = npc_rejection(npc, cfg)
            if reason:
                rejections.append(reason)
                continue
            candidates.append(NpcStepProvider(npc_id=npc.id))
        elif isinstance(ref, ItemRef):
            if ref.id not in ix.items_by_id:
                rejections.append(f'item "{ref.id}" does not exist')
                continue
            candidates.append(ItemStepProvider(item_id=ref.id))
        else:
            raise TypeError(f"Unknown provider ref: {ref!r}")
    if not option.provider_refs:
        rejections.append("providerRefs empty")
    return candidates, rejections


def resolve_provider(ix: Indexes, option: BreadcrumbOption, cfg: RunConfig, rng: Rng) -> StepProvider | None:
    """Uniform pick from the admitted pool, or None when nobody can witness."""
    candidates, _ = provider_pool(ix, option, cfg)
    return pick_uniform(rng, candidates)


def fallback_provider(ix: Indexes, cfg: RunConfig, rng: Rng) -> StepProvider:
    keepers = [
        npc for npc in ix.npcs_by_id.values()
        if TAVERNKEEPER_ROLE in npc.roles and faction_present(cfg, npc.faction_id)
    ]
    keeper = pick_uniform(rng, keepers)
    if keeper is None:
        return TavernkeeperStepProvider()
    return NpcStepProvider(npc_id=keeper.id)
