"""Tests for eligibility filtering and candidate weighting."""

from breadcrumb_trail.indexes import build_indexes
from breadcrumb_trail.journey import candidate_weight, eligible_options, is_terminator
from breadcrumb_trail.journey.eligibility import (
    DEAD_END_BIAS,
    FORWARD_BIAS,
    UNRESOLVABLE_BIAS,
    requirements_met,
)
from breadcrumb_trail.models import (
    NPC,
    BlockedFallbackOnlyRequirement,
    BreadcrumbOption,
    ContentStore,
    NpcRef,
    RespectAtLeastRequirement,
    RunConfig,
)


def _crumb(crumb_id: str, stage: str, next_tags=(), **kw) -> BreadcrumbOption:
    kw.setdefault("provider_refs", [NpcRef(id="npc_a")])
    return BreadcrumbOption(id=crumb_id, stage_tag=stage, next_stage_tags=list(next_tags), **kw)


def _store(*crumbs: BreadcrumbOption) -> ContentStore:
    return ContentStore(npcs=[NPC(id="npc_a", name="A")], breadcrumbs=list(crumbs))


def _ids(eligibility) -> list[str]:
    return [b.id for b in eligibility.options]


CFG = RunConfig()


# ── Basic filters ────────────────────────────────────────────


def test_exact_stage_match():
    store = _store(_crumb("a", "Start", ["X"]), _crumb("b", "Other", ["X"]))
    result = eligible_options(store, CFG, "Start", set(), is_first=True, is_last=False)
    assert _ids(result) == ["a"]


def test_main_journey_opt_out():
    store = _store(_crumb("a", "Start", ["X"], is_main_journey=False), _crumb("b", "Start", ["X"]))
    result = eligible_options(store, CFG, "Start", set(), is_first=True, is_last=False)
    assert _ids(result) == ["b"]


def test_main_journey_defaults_true():
    assert BreadcrumbOption(id="x").is_main_journey is True


def test_used_ids_excluded():
    store = _store(_crumb("a", "Start", ["X"]), _crumb("b", "Start", ["X"]))
    result = eligible_options(store, CFG, "Start", {"a"}, is_first=True, is_last=False)
    assert _ids(result) == ["b"]


def test_store_order_preserved():
    store = _store(_crumb("c", "S", ["X"]), _crumb("a", "S", ["X"]), _crumb("b", "S", ["X"]))
    result = eligible_options(store, CFG, "S", set(), is_first=False, is_last=False)
    assert _ids(result) == ["c", "a", "b"]


# ── Wildcard stage ───────────────────────────────────────────


def test_wildcard_never_first():
    store = _store(_crumb("any", "Any", ["X"]))
    result = eligible_options(store, CFG, "Start", set(), is_first=True, is_last=False)
    assert result.options == []


def test_wildcard_matches_mid_chain():
    store = _store(_crumb("any", "Any", ["X"]))
    result = eligible_options(store, CFG, "Whatever", set(), is_first=False, is_last=False)
    assert _ids(result) == ["any"]


def test_wildcard_not_on_last_step():
    store = _store(_crumb("any", "Any"))
    result = eligible_options(store, CFG, "Whatever", set(), is_first=False, is_last=True)
    assert result.options == []


# ── Terminal shape ───────────────────────────────────────────


def test_is_terminator():
    assert is_terminator(_crumb("a", "S"))
    assert is_terminator(_crumb("a", "S", ["X"], is_end=True))
    assert not is_terminator(_crumb("a", "S", ["X"]))


def test_last_step_prefers_terminators():
    store = _store(_crumb("fwd", "S", ["X"]), _crumb("end", "S"))
    result = eligible_options(store, CFG, "S", set(), is_first=False, is_last=True)
    assert _ids(result) == ["end"]
    assert result.relaxed is False


def test_last_step_explicit_end_flag_counts():
    store = _store(_crumb("fwd", "S", ["X"]), _crumb("flagged", "S", ["X"], is_end=True))
    result = eligible_options(store, CFG, "S", set(), is_first=False, is_last=True)
    assert _ids(result) == ["flagged"]


def test_last_step_relaxes_without_terminators():
    store = _store(_crumb("fwd", "S", ["X"]))
    result = eligible_options(store, CFG, "S", set(), is_first=False, is_last=True)
    assert _ids(result) == ["fwd"]
    assert result.relaxed is True


def test_mid_chain_prefers_forward():
    store = _store(_crumb("mute", "S"), _crumb("fwd", "S", ["X"]))
    result = eligible_options(store, CFG, "S", set(), is_first=False, is_last=False)
    assert _ids(result) == ["fwd"]


def test_mid_chain_admits_mute_when_nothing_else():
    store = _store(_crumb("mute", "S"))
    result = eligible_options(store, CFG, "S", set(), is_first=True, is_last=False)
    assert _ids(result) == ["mute"]
    assert result.relaxed is True


# ── Requirements ─────────────────────────────────────────────


def test_respect_requirement():
    option = _crumb("a", "S", requirements=[RespectAtLeastRequirement(faction_id="f", value=2)])
    assert not requirements_met(option, RunConfig(respect={"f": 1}))
    assert requirements_met(option, RunConfig(respect={"f": 2}))
    assert not requirements_met(option, RunConfig())  # missing respect counts as 0


def test_blocked_fallback_only_needs_degraded_pass():
    option = _crumb("a", "S", requirements=[BlockedFallbackOnlyRequirement()])
    assert not requirements_met(option, CFG)
    assert requirements_met(option, CFG, degraded=True)


def test_requirements_are_anded():
    option = _crumb("a", "S", requirements=[
        RespectAtLeastRequirement(faction_id="f", value=1),
        RespectAtLeastRequirement(faction_id="g", value=1),
    ])
    assert not requirements_met(option, RunConfig(respect={"f": 1}))
    assert requirements_met(option, RunConfig(respect={"f": 1, "g": 3}))


def test_degraded_pass_only_when_strict_pass_empty():
    gated = _crumb("gated", "S", ["X"], requirements=[BlockedFallbackOnlyRequirement()])
    plain = _crumb("plain", "S", ["X"])
    result = eligible_options(_store(gated, plain), CFG, "S", set(), is_first=True, is_last=False)
    assert _ids(result) == ["plain"]
    assert result.degraded is False

    result = eligible_options(_store(gated), CFG, "S", set(), is_first=True, is_last=False)
    assert _ids(result) == ["gated"]
    assert result.degraded is True


def test_degraded_pass_still_checks_respect():
    option = _crumb("a", "S", ["X"], requirements=[
        BlockedFallbackOnlyRequirement(),
        RespectAtLeastRequirement(faction_id="f", value=5),
    ])
    result = eligible_options(_store(option), CFG, "S", set(), is_first=True, is_last=False)
    assert result.options == []


# ── candidate_weight ─────────────────────────────────────────


def test_forward_bias_mid_chain():
    fwd = _crumb("fwd", "S", ["T"], weight=1)
    target = _crumb("t", "T")
    ix = build_indexes(_store(fwd, target))
    assert candidate_weight(fwd, ix, CFG, is_last=False) == FORWARD_BIAS


def test_dead_end_bias_when_next_stage_has_no_content():
    nowhere = _crumb("n", "S", ["Missing"], weight=1)
    ix = build_indexes(_store(nowhere))
    assert candidate_weight(nowhere, ix, CFG, is_last=False) == DEAD_END_BIAS


def test_no_progress_bias_on_last_step():
    end = _crumb("end", "S", weight=3)
    ix = build_indexes(_store(end))
    assert candidate_weight(end, ix, CFG, is_last=True) == 3


def test_unresolvable_provider_bias():
    option = _crumb("a", "S", weight=2, provider_refs=[])
    ix = build_indexes(_store(option))
    assert candidate_weight(option, ix, CFG, is_last=True) == 2 * UNRESOLVABLE_BIAS


def test_negative_weight_is_zero():
    option = _crumb("a", "S", weight=-4)
    ix = build_indexes(_store(option))
    assert candidate_weight(option, ix, CFG, is_last=True) == 0
