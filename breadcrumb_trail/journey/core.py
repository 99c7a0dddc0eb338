"""Journey generator: stitch breadcrumbs into one seeded playthrough trace."""

import logging

from breadcrumb_trail.indexes import build_indexes
from breadcrumb_trail.models import (
    BreadcrumbOption,
    ContentStore,
    Journey,
    JourneyStep,
    NpcStepProvider,
    RunConfig,
    StepProvider,
)

from .beats import attach_beats, provider_name
from .eligibility import candidate_weight, eligible_options
from .providers import fallback_provider, provider_pool, resolve_provider
from .rng import Prng
from .selection import pick_uniform, pick_weighted

logger = logging.getLogger(__name__)

# draws per step before giving up on a witnessed option and using the fallback
RETRY_BUDGET = 16


def _label(option: BreadcrumbOption) -> str:
    return f'"{option.title or option.id}" ({option.id})'


def generate_journey(store: ContentStore, cfg: RunConfig) -> Journey:
    """Generate one journey. Deterministic for a given (store, cfg).

    Content problems never raise: they end the chain early or substitute a
    fallback witness, and are reported in ``issues``.
    """
    ix = build_indexes(store)
    rng = Prng(cfg.seed)
    steps: list[JourneyStep] = []
    issues: list[str] = []
    used_ids: set[str] = set()
    stage = cfg.start_stage_tag

    def _issue(msg: str) -> None:
        logger.warning("journey seed=%s: %s", cfg.seed, msg)
        issues.append(msg)

    logger.info(
        "Generating journey seed=%s length=%s start=%r",
        cfg.seed, cfg.chain_length, cfg.start_stage_tag,
    )

    for i in range(cfg.chain_length):
        is_last = i == cfg.chain_length - 1
        eligibility = eligible_options(
            store, cfg, stage, used_ids, is_first=i == 0, is_last=is_last,
        )
        if not eligibility.options:
            _issue(f"Blocked at step {i + 1} (stage: {stage}): no eligible breadcrumb.")
            break
        if eligibility.degraded:
            _issue(
                f"Step {i + 1} (stage: {stage}): no breadcrumb met its requirements; "
                "used a blocked-fallback breadcrumb."
            )

        # ── Draw an option whose provider pool resolves ──
        candidates = [
            (candidate_weight(b, ix, cfg, is_last=is_last), b) for b in eligibility.options
        ]
        chosen: BreadcrumbOption | None = None
        provider: StepProvider | None = None
        failed: list[BreadcrumbOption] = []
        for _attempt in range(RETRY_BUDGET):
            if not candidates:
                break
            option = pick_weighted(rng, candidates)
            if option is None:
                # every weight is zero; fall back to a uniform draw
                option = pick_uniform(rng, [b for _, b in candidates])
            provider = resolve_provider(ix, option, cfg, rng)
            if provider is not None:
                chosen = option
                break
            failed.append(option)
            candidates = [(w, b) for w, b in candidates if b.id != option.id]

        used_fallback = chosen is None
        if chosen is None:
            chosen = failed[0]
            provider = fallback_provider(ix, cfg, rng)
            _, rejections = provider_pool(ix, chosen, cfg)
            if isinstance(provider, NpcStepProvider):
                substitute = f'fallback tavernkeeper "{provider_name(provider, ix)}"'
            else:
                substitute = "generic tavernkeeper placeholder"
            _issue(
                f"Step {i + 1}: breadcrumb {_label(chosen)} has no available provider "
                f"({'; '.join(rejections)}); used {substitute}."
            )

        if is_last and eligibility.relaxed:
            _issue(
                f"Step {i + 1} (stage: {stage}): no terminating breadcrumb; "
                f"journey ends on {_label(chosen)} which points onward."
            )
        used_ids.add(chosen.id)
        steps.append(JourneyStep(
            idx=i,
            stage_tag=stage,
            option_id=chosen.id,
            provider=provider,
            used_fallback=used_fallback,
        ))
        logger.debug("step %s stage=%r option=%s provider=%s", i + 1, stage, chosen.id, provider)

        # ── Advance ──
        if is_last:
            break
        if chosen.is_end:
            _issue(
                f"Chain ended early at {i + 1}/{cfg.chain_length}: "
                f"breadcrumb {_label(chosen)} is marked as an end."
            )
            break
        next_stage = pick_uniform(rng, chosen.next_stage_tags)
        if next_stage is None:
            _issue(
                f"Chain ended early at {i + 1}/{cfg.chain_length}: "
                f"breadcrumb {_label(chosen)} has no nextStageTags."
            )
            break
        stage = next_stage

    if len(steps) < cfg.chain_length:
        _issue(f"Chain ended early at {len(steps)}/{cfg.chain_length}.")

    attach_beats(steps, ix, rng, _issue)
    return Journey(steps=steps, issues=issues)
