"""Pydantic request models for API endpoints."""

from breadcrumb_trail.models import Model


class ReparentBody(Model):
    parent_id: str | None = None


class GenerateBody(Model):
    seed: int | None = None
    chain_length: int | None = None
    start_stage_tag: str | None = None
    factions_present: dict[str, bool] | None = None
    respect: dict[str, int] | None = None
    respect_gating: bool | None = None
    randomize_seed: bool = False
    save: bool = False
