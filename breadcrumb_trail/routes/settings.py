"""Health check and run-config endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from breadcrumb_trail import storage

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/run-config")
async def get_run_config():
    """Get the generator run config, synced to the current factions."""
    return storage.get_run_config().model_dump(by_alias=True)


@router.patch("/run-config")
async def update_run_config(body: dict):
    """Update the run config (partial merge)."""
    try:
        return storage.update_run_config(body).model_dump(by_alias=True)
    except ValidationError as e:
        raise HTTPException(400, str(e))
