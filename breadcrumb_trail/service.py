"""Generate a journey against the stored content and run config.

Shared by the HTTP routes, the MCP server and the CLI so all three produce
the same RunBundle for the same stored state.
"""

import random
from typing import Any

from breadcrumb_trail import storage
from breadcrumb_trail.journey import generate_journey
from breadcrumb_trail.models import RunBundle, RunConfig

MAX_RANDOM_SEED = 2147483000


def random_seed() -> int:
    return random.randint(1, MAX_RANDOM_SEED)


def resolve_run_config(overrides: dict[str, Any] | None = None, *, randomize_seed: bool = False) -> RunConfig:
    """Stored run config with per-call overrides applied (not persisted).

    Raises pydantic ValidationError on bad override values.
    """
    cfg = storage.get_run_config().model_dump(by_alias=True)
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key in ("factionsPresent", "respect") and isinstance(value, dict):
            cfg[key] = {**cfg[key], **value}
        else:
            cfg[key] = value
    if randomize_seed:
        cfg["seed"] = random_seed()
    return RunConfig.model_validate(cfg)


def generate_run(
    overrides: dict[str, Any] | None = None,
    *,
    randomize_seed: bool = False,
    save: bool = False,
) -> dict[str, Any]:
    """Run the generator and return the export bundle (with ``slug`` if saved)."""
    store = storage.get_content()
    cfg = resolve_run_config(overrides, randomize_seed=randomize_seed)
    journey = generate_journey(store, cfg)
    bundle = RunBundle(
        run_config=cfg,
        steps=journey.steps,
        issues=journey.issues,
        content_version=store.version,
    )
    if save:
        return storage.save_run(bundle)
    return bundle.model_dump(by_alias=True)
