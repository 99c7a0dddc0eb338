"""Saved journey exports (runs/<slug>.json)."""

import json
from typing import Any

from breadcrumb_trail.models import RunBundle

from .core import runs_dir, slugify


def save_run(bundle: RunBundle) -> dict[str, Any]:
    """Persist a run bundle under a unique ``journey-seed-<seed>`` slug."""
    base_slug = slugify(f"journey seed {bundle.run_config.seed}")
    target_slug = base_slug
    counter = 2
    while (runs_dir() / f"{target_slug}.json").exists():
        target_slug = f"{base_slug}-{counter}"
        counter += 1
    data = {"slug": target_slug, **bundle.model_dump(by_alias=True)}
    (runs_dir() / f"{target_slug}.json").write_text(json.dumps(data, indent=2))
    return data


def list_runs() -> list[dict[str, Any]]:
    """Summaries of saved runs, sorted by slug."""
    results = []
    for path in sorted(runs_dir().glob("*.json")):
        data = json.loads(path.read_text())
        results.append({
            "slug": data["slug"],
            "seed": data["runConfig"]["seed"],
            "steps": len(data["steps"]),
            "issues": len(data["issues"]),
        })
    return results


def get_run(slug: str) -> dict[str, Any] | None:
    path = runs_dir() / f"{slug}.json"
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def delete_run(slug: str) -> bool:
    path = runs_dir() / f"{slug}.json"
    if not path.is_file():
        return False
    path.unlink()
    return True
