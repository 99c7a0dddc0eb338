"""Journey generation and saved-run endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from breadcrumb_trail import storage
from breadcrumb_trail.service import generate_run

from .models import GenerateBody

router = APIRouter()


@router.post("/generate")
async def generate(body: GenerateBody | None = None):
    """Generate a journey from the stored run config plus any overrides."""
    body = body or GenerateBody()
    overrides = body.model_dump(by_alias=True, exclude={"randomize_seed", "save"})
    try:
        return generate_run(overrides, randomize_seed=body.randomize_seed, save=body.save)
    except ValidationError as e:
        raise HTTPException(400, str(e))


@router.get("/runs")
async def list_runs():
    """List saved journeys."""
    return storage.list_runs()


@router.get("/runs/{slug}")
async def get_run(slug: str):
    """Get a saved journey bundle."""
    run = storage.get_run(slug)
    if run is None:
        raise HTTPException(404, "Run not found")
    return run


@router.delete("/runs/{slug}")
async def delete_run(slug: str):
    """Delete a saved journey."""
    if not storage.delete_run(slug):
        raise HTTPException(404, "Run not found")
    return {"ok": True}
