"""Persisted generator run configuration (run-config.json).

get_run_config() returns defaults merged with stored values, then synced to
the current faction list: new factions default to present with respect 0,
entries for deleted factions are dropped. update_run_config() applies a
partial update; factionsPresent and respect are merged key-by-key, scalars
are overwritten.
"""

import json
from typing import Any

from breadcrumb_trail.defaults import default_run_config
from breadcrumb_trail.models import ContentStore, RunConfig

from .content import get_content
from .core import run_config_path

_SCALAR_FIELDS = ("seed", "chainLength", "startStageTag", "respectGating")
_MAP_FIELDS = ("factionsPresent", "respect")


def _sync_factions(cfg: dict[str, Any], store: ContentStore) -> dict[str, Any]:
    faction_ids = [f.id for f in store.factions]
    present = cfg.get("factionsPresent", {})
    respect = cfg.get("respect", {})
    cfg["factionsPresent"] = {fid: present.get(fid, True) for fid in faction_ids}
    cfg["respect"] = {fid: respect.get(fid, 0) for fid in faction_ids}
    return cfg


def _merge(cfg: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    for key in _SCALAR_FIELDS:
        if key in fields:
            cfg[key] = fields[key]
    for key in _MAP_FIELDS:
        if isinstance(fields.get(key), dict):
            cfg[key] = {**cfg.get(key, {}), **fields[key]}
    return cfg


def get_run_config() -> RunConfig:
    store = get_content()
    cfg = default_run_config(store).model_dump(by_alias=True)
    path = run_config_path()
    if path.is_file():
        cfg = _merge(cfg, json.loads(path.read_text()))
    return RunConfig.model_validate(_sync_factions(cfg, store))


def update_run_config(fields: dict[str, Any]) -> RunConfig:
    """Merge fields into the run config and persist. Raises ValidationError on bad values."""
    cfg = _merge(get_run_config().model_dump(by_alias=True), fields)
    run_config = RunConfig.model_validate(_sync_factions(cfg, get_content()))
    run_config_path().write_text(run_config.model_dump_json(indent=2, by_alias=True))
    return run_config
