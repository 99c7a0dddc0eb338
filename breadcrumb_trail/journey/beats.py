"""Provider beats: the line a witness says about the brother at each step.

Beat text is a Handlebars template rendered with:
  me              this step's provider name
  myLocation      this step's provider location name
  nextProvider    next step's provider name ("" on the last step)
  nextLocation    next step's provider location name
  nextBreadcrumb  next step's breadcrumb title

Authors may also write the short form ``{me}``; it is rewritten to an
unescaped ``{{{me}}}`` before compiling.
"""

import re
from collections.abc import Callable
from typing import Any

import pybars

from breadcrumb_trail.indexes import Indexes
from breadcrumb_trail.models import (
    ItemStepProvider,
    JourneyStep,
    NpcStepProvider,
    ProviderBeat,
    StepProvider,
)

from .selection import Rng, pick_weighted

TAVERNKEEPER_NAME = "Tavernkeeper"

_SHORT_TOKEN = re.compile(r"(?<!\{)\{(\w+)\}(?!\})")

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class BeatTemplateError(Exception):
    """Raised when beat text fails to compile or render."""


def render_beat(text: str, context: dict[str, Any]) -> str:
    source = _SHORT_TOKEN.sub(r"{{{\1}}}", text)
    try:
        compiled = _cache.get(source)
        if compiled is None:
            compiled = _compiler.compile(source)
            _cache[source] = compiled
        return str(compiled(context))
    except Exception as e:
        raise BeatTemplateError(f"Template error: {e}") from e


def provider_beats(provider: StepProvider, ix: Indexes) -> list[ProviderBeat]:
    if isinstance(provider, NpcStepProvider):
        npc = ix.npcs_by_id.get(provider.npc_id)
        return npc.brother_beats if npc else []
    if isinstance(provider, ItemStepProvider):
        item = ix.items_by_id.get(provider.item_id)
        return item.brother_beats if item else []
    return []


def provider_name(provider: StepProvider, ix: Indexes) -> str:
    if isinstance(provider, NpcStepProvider):
        npc = ix.npcs_by_id.get(provider.npc_id)
        return npc.name if npc else provider.npc_id
    if isinstance(provider, ItemStepProvider):
        item = ix.items_by_id.get(provider.item_id)
        return item.name if item else provider.item_id
    return TAVERNKEEPER_NAME


def provider_location_name(provider: StepProvider, ix: Indexes) -> str:
    location_id = None
    if isinstance(provider, NpcStepProvider):
        npc = ix.npcs_by_id.get(provider.npc_id)
        location_id = npc.location_id if npc else None
    elif isinstance(provider, ItemStepProvider):
        item = ix.items_by_id.get(provider.item_id)
        location_id = item.location_id if item else None
    if location_id is None:
        return ""
    location = ix.locations_by_id.get(location_id)
    return location.name if location else location_id


def beat_context(steps: list[JourneyStep], idx: int, ix: Indexes) -> dict[str, Any]:
    step = steps[idx]
    ctx = {
        "me": provider_name(step.provider, ix),
        "myLocation": provider_location_name(step.provider, ix),
        "nextProvider": "",
        "nextLocation": "",
        "nextBreadcrumb": "",
    }
    if idx + 1 < len(steps):
        nxt = steps[idx + 1]
        option = ix.breadcrumbs_by_id.get(nxt.option_id)
        ctx["nextProvider"] = provider_name(nxt.provider, ix)
        ctx["nextLocation"] = provider_location_name(nxt.provider, ix)
        ctx["nextBreadcrumb"] = option.title if option else nxt.option_id
    return ctx


def attach_beats(
    steps: list[JourneyStep], ix: Indexes, rng: Rng, report: Callable[[str], None]
) -> None:
    """Pick and render a beat for every step, in place. Render failures go to ``report``."""
    for idx, step in enumerate(steps):
        beat = pick_weighted(rng, [(b.weight, b) for b in provider_beats(step.provider, ix)])
        if beat is not None:
            step.beat_id = beat.id
            step.beat_kind = beat.kind
            step.beat_mood = beat.mood
            text = beat.text
        else:
            option = ix.breadcrumbs_by_id.get(step.option_id)
            text = (option.text or option.title) if option else ""
        try:
            step.rendered = render_beat(text, beat_context(steps, idx, ix))
        except BeatTemplateError as e:
            report(f"Step {idx + 1}: beat text failed to render ({e}).")
            step.rendered = text
