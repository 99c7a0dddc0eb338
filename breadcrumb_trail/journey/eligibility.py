"""Which breadcrumb options may be chosen at a step, and how strongly.

Filtering is an AND of:
  - main-journey flag (opt-out: only an explicit False excludes)
  - stage match (exact, or the "Any" wildcard on mid-chain steps only)
  - not used earlier in the same run
  - requirements (strict pass first; "blockedFallbackOnly" only in the
    degraded pass, which runs when the strict pass admits nothing)

Then the survivors are narrowed by shape. On the last step terminators
(``is_end`` or no ``next_stage_tags``) are preferred; mid-chain,
forward-pointing options are preferred. The other shape is admitted only when
the preferred one is empty, so a stage with only mute options still yields a
step (and the chain then ends early) instead of blocking outright.
"""

from dataclasses import dataclass, field

from breadcrumb_trail.indexes import Indexes
from breadcrumb_trail.models import (
    AlwaysRequirement,
    BlockedFallbackOnlyRequirement,
    BreadcrumbOption,
    ContentStore,
    RespectAtLeastRequirement,
    Requirement,
    RunConfig,
)

from .providers import provider_pool
from .selection import clean_weight

WILDCARD_STAGE = "Any"

FORWARD_BIAS = 2.0
DEAD_END_BIAS = 0.25
UNRESOLVABLE_BIAS = 0.5


@dataclass
class Eligibility:
    options: list[BreadcrumbOption] = field(default_factory=list)
    degraded: bool = False  # requirements were relaxed to blocked-fallback
    relaxed: bool = False  # the non-preferred shape had to be admitted


def is_terminator(option: BreadcrumbOption) -> bool:
    return option.is_end or not option.next_stage_tags


def matches_stage(option: BreadcrumbOption, stage: str, *, is_first: bool, is_last: bool) -> bool:
    if option.stage_tag == stage:
        return True
    return option.stage_tag == WILDCARD_STAGE and not is_first and not is_last


def requirement_met(req: Requirement, cfg: RunConfig, *, degraded: bool = False) -> bool:
    if isinstance(req, AlwaysRequirement):
        return True
    if isinstance(req, BlockedFallbackOnlyRequirement):
        return degraded
    if isinstance(req, RespectAtLeastRequirement):
        return cfg.respect.get(req.faction_id, 0) >= req.value
    raise TypeError(f"Unknown requirement: {req!r}")


def requirements_met(option: BreadcrumbOption, cfg: RunConfig, *, degraded: bool = False) -> bool:
    return all(requirement_met(r, cfg, degraded=degraded) for r in option.requirements)


def eligible_options(
    store: ContentStore,
    cfg: RunConfig,
    stage: str,
    used_ids: set[str],
    *,
    is_first: bool,
    is_last: bool,
) -> Eligibility:
    """Options usable at this step, in store order."""
    base = [
        b for b in store.breadcrumbs
        if b.is_main_journey is not False
        and b.id not in used_ids
        and matches_stage(b, stage, is_first=is_first, is_last=is_last)
    ]

    result = Eligibility()
    admitted = [b for b in base if requirements_met(b, cfg)]
    if not admitted:
        admitted = [b for b in base if requirements_met(b, cfg, degraded=True)]
        result.degraded = bool(admitted)

    if is_last:
        preferred = [b for b in admitted if is_terminator(b)]
    else:
        preferred = [b for b in admitted if not is_terminator(b)]

    if preferred:
        result.options = preferred
    else:
        result.options = admitted
        result.relaxed = bool(admitted)
    return result


def leads_forward(option: BreadcrumbOption, ix: Indexes) -> bool:
    """True if some next stage tag has main-journey content to continue with."""
    if WILDCARD_STAGE in ix.stage_tags:
        return bool(option.next_stage_tags)
    return any(tag in ix.stage_tags for tag in option.next_stage_tags)


def candidate_weight(option: BreadcrumbOption, ix: Indexes, cfg: RunConfig, *, is_last: bool) -> float:
    """Authored weight, biased toward options that can progress and be witnessed."""
    weight = clean_weight(option.weight)
    if not is_last:
        weight *= FORWARD_BIAS if leads_forward(option, ix) else DEAD_END_BIAS
    candidates, _ = provider_pool(ix, option, cfg)
    if not candidates:
        weight *= UNRESOLVABLE_BIAS
    return weight
