"""Core domain models.

Content authoring, storage and the journey generator all operate on these
types. Pydantic validates every document at the storage and API boundary.

Python attributes are snake_case; the wire format is camelCase so content
exported by earlier versions of the tool loads unchanged. Always dump with
``by_alias=True``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTENT_VERSION = 3

LocationKind = Literal["region", "biome", "settlement", "landmark"]
ItemKind = Literal["note", "chest", "letter", "corpse", "relic", "other"]
BeatKind = Literal["witness", "trade", "fight", "letter", "party", "other"]
BeatMood = Literal["neutral", "friendly", "hostile", "mysterious"]


class Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Faction(Model):
    id: str
    name: str


class Location(Model):
    """A node in the single-parent location tree."""

    id: str
    name: str
    kind: LocationKind = "region"
    parent_id: str | None = None
    biome_ids: list[str] = Field(default_factory=list)  # overlay, multi-select
    default_biome_id: str | None = None  # inherited by descendants without biomes
    tags: list[str] = Field(default_factory=list)


class ProviderBeat(Model):
    """A short narration line a provider can deliver about the brother."""

    id: str
    kind: BeatKind = "witness"
    mood: BeatMood = "neutral"
    text: str = ""
    weight: float = 1.0
    respect_delta: int = 0


class NPC(Model):
    id: str
    name: str
    faction_id: str | None = None  # None = unaffiliated
    roles: list[str] = Field(default_factory=list)
    tier: int = Field(0, ge=0, le=3)  # minimum respect when gating is on
    location_id: str | None = None
    notes: str = ""
    brother_beats: list[ProviderBeat] = Field(default_factory=list)


class ItemProvider(Model):
    id: str
    name: str
    kind: ItemKind = "other"
    location_id: str | None = None
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    brother_beats: list[ProviderBeat] = Field(default_factory=list)


# ── Requirements ─────────────────────────────────────────


class AlwaysRequirement(Model):
    kind: Literal["always"] = "always"


class BlockedFallbackOnlyRequirement(Model):
    kind: Literal["blockedFallbackOnly"] = "blockedFallbackOnly"


class RespectAtLeastRequirement(Model):
    kind: Literal["respectAtLeast"] = "respectAtLeast"
    faction_id: str
    value: int


Requirement = Annotated[
    Union[AlwaysRequirement, BlockedFallbackOnlyRequirement, RespectAtLeastRequirement],
    Field(discriminator="kind"),
]


# ── Provider references ──────────────────────────────────


class NpcRef(Model):
    type: Literal["npc"] = "npc"
    id: str


class ItemRef(Model):
    type: Literal["item"] = "item"
    id: str


ProviderRef = Annotated[Union[NpcRef, ItemRef], Field(discriminator="type")]


class BreadcrumbOption(Model):
    """One authored story beat, selectable while the chain is at ``stage_tag``."""

    id: str
    title: str = "Breadcrumb"
    stage_tag: str = "Any"
    text: str = ""
    provider_refs: list[ProviderRef] = Field(default_factory=list)
    requirements: list[Requirement] = Field(default_factory=list)
    next_stage_tags: list[str] = Field(default_factory=list)
    weight: float = 1.0
    is_main_journey: bool = True
    is_end: bool = False


# ── Connections between locations ────────────────────────


class OpenGate(Model):
    kind: Literal["open"] = "open"


class KeyGate(Model):
    kind: Literal["key"] = "key"
    key_item_id: str


class RespectGate(Model):
    kind: Literal["respect"] = "respect"
    faction_id: str
    value: int


class PowerGate(Model):
    kind: Literal["power"] = "power"
    power_id: str


Gate = Annotated[
    Union[OpenGate, KeyGate, RespectGate, PowerGate],
    Field(discriminator="kind"),
]


class Connection(Model):
    id: str
    from_id: str
    to_id: str
    gate: Gate = Field(default_factory=OpenGate)
    notes: str = ""


class ContentStore(Model):
    """The whole authored document, already migrated to ``CONTENT_VERSION``."""

    version: int = CONTENT_VERSION
    factions: list[Faction] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    npcs: list[NPC] = Field(default_factory=list)
    items: list[ItemProvider] = Field(default_factory=list)
    breadcrumbs: list[BreadcrumbOption] = Field(default_factory=list)
    connections: list[Connection] = Field(default_factory=list)


class RunConfig(Model):
    seed: int = Field(12345, ge=0, le=0xFFFFFFFF)
    chain_length: int = Field(6, ge=1)
    start_stage_tag: str = "Start"
    factions_present: dict[str, bool] = Field(default_factory=dict)  # missing = present
    respect: dict[str, int] = Field(default_factory=dict)  # missing = 0
    respect_gating: bool = False


# ── Generator output ─────────────────────────────────────


class NpcStepProvider(Model):
    type: Literal["npc"] = "npc"
    npc_id: str


class ItemStepProvider(Model):
    type: Literal["item"] = "item"
    item_id: str


class TavernkeeperStepProvider(Model):
    """Generic placeholder used when no concrete witness can be found."""

    type: Literal["tavernkeeper"] = "tavernkeeper"


StepProvider = Annotated[
    Union[NpcStepProvider, ItemStepProvider, TavernkeeperStepProvider],
    Field(discriminator="type"),
]


class JourneyStep(Model):
    idx: int
    stage_tag: str
    option_id: str
    provider: StepProvider
    used_fallback: bool = False
    beat_id: str | None = None
    beat_kind: BeatKind | None = None
    beat_mood: BeatMood | None = None
    rendered: str = ""


class Journey(Model):
    steps: list[JourneyStep] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class RunBundle(Model):
    """Portable export of one generated journey."""

    run_config: RunConfig
    steps: list[JourneyStep] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    content_version: int = CONTENT_VERSION
