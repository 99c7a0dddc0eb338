"""File-based JSON storage for the authoring tool.

Data layout:
  data/
    content.json        The content store (factions, locations, npcs, items,
                        breadcrumbs, connections), camelCase, current version
    run-config.json     Generator run configuration (seed, chain length,
                        start stage, faction presence, respect, gating)
    runs/
      <slug>.json       Saved journey exports {slug, runConfig, steps,
                        issues, contentVersion}

Content is migrated on every read (see migrate.py), so older documents keep
loading. A missing content.json serves the demo world; nothing is written
until the first save.

Run config: get_run_config() returns defaults merged with stored values and
synced to the current faction list.
"""

# Re-export all public symbols so `from breadcrumb_trail import storage` keeps working.

from .core import (  # noqa: F401
    content_path,
    data_dir,
    init_storage,
    run_config_path,
    runs_dir,
    slugify,
)

from .migrate import migrate_to_latest  # noqa: F401

from .content import (  # noqa: F401
    COLLECTION_MODELS,
    Collection,
    delete_entity,
    export_content,
    get_content,
    get_entity,
    import_content,
    list_entities,
    reparent_location,
    reset_content,
    save_content,
    upsert_entity,
)

from .run_config import (  # noqa: F401
    get_run_config,
    update_run_config,
)

from .runs import (  # noqa: F401
    delete_run,
    get_run,
    list_runs,
    save_run,
)
