"""Default demo world: five factions, a small location tree, providers and a
seven-breadcrumb main journey from "Start" to "BrotherFound"."""

from typing import Any

from breadcrumb_trail.models import ContentStore, RunConfig


def _beat(beat_id: str, kind: str, mood: str, text: str, weight: float = 1, respect_delta: int = 0) -> dict:
    return {
        "id": beat_id,
        "kind": kind,
        "mood": mood,
        "text": text,
        "weight": weight,
        "respectDelta": respect_delta,
    }


def _loc(loc_id: str, name: str, kind: str, parent_id: str | None, tags: list[str]) -> dict:
    return {
        "id": loc_id,
        "name": name,
        "kind": kind,
        "parentId": parent_id,
        "biomeIds": [],
        "defaultBiomeId": None,
        "tags": tags,
    }


DEFAULT_FACTIONS: list[dict[str, Any]] = [
    {"id": "bastion", "name": "Bastion Court"},
    {"id": "root", "name": "Root-Cairn Clans"},
    {"id": "pipe", "name": "Pipewright Union"},
    {"id": "umbral", "name": "Umbral Choir"},
    {"id": "astral", "name": "Astral Hoard"},
]

DEFAULT_LOCATIONS: list[dict[str, Any]] = [
    _loc("reg_surface", "Surface", "region", None, ["surface"]),
    _loc("reg_mid", "Mid-Depth", "region", None, ["mid"]),
    _loc("reg_depths", "Depths", "region", None, ["deep"]),
    _loc("set_gate", "Gate Settlement", "settlement", "reg_surface", ["hub", "bastion"]),
    _loc("set_pipeyard", "Pipeyard", "settlement", "reg_mid", ["hub", "pipe"]),
    _loc("set_rootden", "Rootden", "settlement", "reg_mid", ["hub", "root"]),
    _loc("lm_tavern", "The Bent Lantern (Tavern)", "landmark", "set_gate", ["tavern"]),
    _loc("lm_barracks", "Bastion Barracks", "landmark", "set_gate", ["bastion", "guard"]),
    _loc("lm_graahl_gate", "Graahl Seal-Door", "landmark", "set_gate", ["gate", "locked"]),
    _loc("lm_pipe_valves", "Valve-Rack Gallery", "landmark", "set_pipeyard", ["pipe", "machinery"]),
    _loc("lm_root_trapline", "Trapline Hollows", "landmark", "set_rootden", ["root", "traps"]),
    _loc("lm_crypt_choir", "Choir Crypt", "landmark", "reg_depths", ["umbral", "ritual"]),
    _loc("lm_astral_niche", "Astral Niche", "landmark", "reg_depths", ["astral", "hidden"]),
]

DEFAULT_NPCS: list[dict[str, Any]] = [
    {
        "id": "npc_innkeep",
        "name": "Bent Lantern Keeper",
        "factionId": None,
        "roles": ["tavernkeeper"],
        "tier": 0,
        "locationId": "lm_tavern",
        "notes": "Fallback tavernkeeper.",
        "brotherBeats": [
            _beat("bb_innkeep_witness", "witness", "neutral",
                  "I saw him. Loud laugh, fast hands. He kept saying {nextProvider} "
                  "might know more, down in {nextLocation}.", 2),
        ],
    },
    {
        "id": "npc_bastion_captain",
        "name": "Captain Brann",
        "factionId": "bastion",
        "roles": ["guard", "captain"],
        "tier": 2,
        "locationId": "lm_barracks",
        "notes": "A hard gatekeeper with rules.",
        "brotherBeats": [
            _beat("bb_brann_fight", "fight", "hostile",
                  "Your brother tested my patrol in the alley and vanished laughing. "
                  "If you want the same answers, find {nextProvider} near {nextLocation}.", 2, -1),
            _beat("bb_brann_witness", "witness", "neutral",
                  "He asked after the seal-door. Said the name {nextProvider}. "
                  "Then he headed for {nextLocation}.", 1),
        ],
    },
    {
        "id": "npc_pipe_mechanic",
        "name": "Vessa Valvehand",
        "factionId": "pipe",
        "roles": ["mechanic", "tinkerer"],
        "tier": 1,
        "locationId": "lm_pipe_valves",
        "notes": "Keeps the pipes singing.",
        "brotherBeats": [
            _beat("bb_vessa_trade", "trade", "friendly",
                  "He traded me a coil of old wire for directions. Said {nextProvider} "
                  "in {nextLocation} was worth the trouble.", 2, 1),
        ],
    },
    {
        "id": "npc_root_hunter",
        "name": "Celia Trapbriar",
        "factionId": "root",
        "roles": ["hunter"],
        "tier": 1,
        "locationId": "lm_root_trapline",
        "notes": "Knows beasts and borders.",
        "brotherBeats": [
            _beat("bb_celia_witness", "witness", "neutral",
                  "He came through my trapline like he owned it. If you are chasing him, "
                  "start with {nextProvider} at {nextLocation}.", 2),
            _beat("bb_celia_party", "party", "friendly",
                  "We drank sap-wine and he told stories. In the morning he left toward "
                  "{nextLocation}, looking for {nextProvider}.", 1, 1),
        ],
    },
    {
        "id": "npc_umbral_acolyte",
        "name": "Choir Acolyte",
        "factionId": "umbral",
        "roles": ["cultist"],
        "tier": 2,
        "locationId": "lm_crypt_choir",
        "notes": "Whispers in the dark.",
        "brotherBeats": [
            _beat("bb_umbral_letter", "letter", "mysterious",
                  "He left a folded scrap. Only one name on it: {nextProvider}. "
                  "Find them in {nextLocation}.", 2),
        ],
    },
    {
        "id": "npc_astral_sage",
        "name": "Astral Sage",
        "factionId": "astral",
        "roles": ["sage"],
        "tier": 3,
        "locationId": "lm_astral_niche",
        "notes": "Hoarder of strange knowing.",
        "brotherBeats": [
            _beat("bb_astral_witness", "witness", "mysterious",
                  "He listened more than he spoke. Before leaving, he asked for "
                  "{nextProvider} and vanished toward {nextLocation}.", 2),
        ],
    },
]

DEFAULT_ITEMS: list[dict[str, Any]] = [
    {
        "id": "item_graahl_note",
        "name": "Smeared Note (Graahl)",
        "kind": "note",
        "locationId": "lm_graahl_gate",
        "notes": "A note jammed near the seal-door.",
        "tags": ["graahl", "clue"],
        "brotherBeats": [
            _beat("bb_note_witness", "letter", "neutral",
                  "The note mentions {nextProvider} and a meeting in {nextLocation}.", 1),
        ],
    },
]


def _crumb(crumb_id: str, title: str, stage: str, refs: list[tuple[str, str]],
           next_tags: list[str], weight: float, text: str = "") -> dict:
    return {
        "id": crumb_id,
        "title": title,
        "stageTag": stage,
        "text": text,
        "providerRefs": [{"type": t, "id": i} for t, i in refs],
        "requirements": [],
        "nextStageTags": next_tags,
        "weight": weight,
        "isMainJourney": True,
    }


DEFAULT_BREADCRUMBS: list[dict[str, Any]] = [
    _crumb("bc_start", "Starting Rumor", "Start",
           [("npc", "npc_innkeep")], ["GraahlGate"], 3),
    _crumb("bc_graahl_gate", "Graahl Seal-Door", "GraahlGate",
           [("npc", "npc_bastion_captain"), ("item", "item_graahl_note")],
           ["PipeLead", "RootLead"], 3),
    _crumb("bc_pipe_lead", "Pipewright Lead", "PipeLead",
           [("npc", "npc_pipe_mechanic")], ["Deeper", "UmbralLead"], 3),
    _crumb("bc_root_lead", "Root-Cairn Lead", "RootLead",
           [("npc", "npc_root_hunter")], ["Deeper"], 3),
    _crumb("bc_umbral_whisper", "Umbral Whisper", "UmbralLead",
           [("npc", "npc_umbral_acolyte")], ["Deeper"], 2),
    _crumb("bc_deeper", "Downward Trail", "Deeper",
           [("npc", "npc_astral_sage")], ["BrotherFound"], 2),
    _crumb("bc_brother_found", "Brother Found", "BrotherFound",
           [("npc", "npc_astral_sage")], [], 1,
           text="You finally catch up. The trail ends here."),
]


def default_content() -> ContentStore:
    """A fresh copy of the demo world."""
    return ContentStore.model_validate({
        "factions": DEFAULT_FACTIONS,
        "locations": DEFAULT_LOCATIONS,
        "npcs": DEFAULT_NPCS,
        "items": DEFAULT_ITEMS,
        "breadcrumbs": DEFAULT_BREADCRUMBS,
        "connections": [],
    })


def default_run_config(store: ContentStore) -> RunConfig:
    """Every faction present at respect 0, seed 12345, six steps from "Start"."""
    return RunConfig(
        factions_present={f.id: True for f in store.factions},
        respect={f.id: 0 for f in store.factions},
    )
