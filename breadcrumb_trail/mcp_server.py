"""FastMCP server exposing the journey generator and content lookup as MCP tools.

Tools:
  - generate_journey(seed, chain_length, start_stage_tag): run the generator
    against stored content and run config; arguments override the config
  - list_stage_tags(): every known stage tag
  - lookup_breadcrumbs(ids): fetch breadcrumbs by id, skipping unknown ids

Reads whatever storage was initialised; running as __main__ initialises it
from DATA_DIR (default ./data).

Usage:
    uv run python -m breadcrumb_trail.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from breadcrumb_trail import storage
from breadcrumb_trail.service import generate_run
from breadcrumb_trail.validation import stage_tag_catalog

mcp = FastMCP("breadcrumb-trail")


@mcp.tool()
def generate_journey(
    seed: int | None = None,
    chain_length: int | None = None,
    start_stage_tag: str | None = None,
) -> dict:
    """Generate a breadcrumb journey and return {runConfig, steps, issues, contentVersion}."""
    return generate_run({
        "seed": seed,
        "chainLength": chain_length,
        "startStageTag": start_stage_tag,
    })


@mcp.tool()
def list_stage_tags() -> list[str]:
    """List every stage tag used by or pointed at by breadcrumbs."""
    return stage_tag_catalog(storage.get_content())


@mcp.tool()
def lookup_breadcrumbs(ids: list[str]) -> list[dict]:
    """Look up breadcrumbs by id, skipping unknown ids."""
    found = []
    for breadcrumb_id in ids:
        entity = storage.get_entity("breadcrumbs", breadcrumb_id)
        if entity is not None:
            found.append(entity)
    return found


if __name__ == "__main__":
    import os
    from pathlib import Path

    storage.init_storage(Path(os.getenv("DATA_DIR", "data")))
    mcp.run()
