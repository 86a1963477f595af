"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ValidationError

from models.diff import DiffOptions
from services.config_manager import ConfigManager
from services.diff_generator import InvalidOptionsError, validate_options

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: dict | None = None
    blob_store: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: DiffOptions
    blob_store: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config_manager = ConfigManager.get_instance()
    config = config_manager.get_config()

    return ConfigResponse(
        diff=config_manager.get_diff_options(),
        blob_store=config.get("blob_store", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.diff:
        merged = {**current_config.get("diff", {}), **request.diff}
        try:
            options = DiffOptions(**merged)
            validate_options(options)
        except (ValidationError, InvalidOptionsError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid diff options: {e}")
        current_config["diff"] = options.model_dump(mode="json")
    if request.blob_store:
        current_config["blob_store"] = {**current_config.get("blob_store", {}), **request.blob_store}

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
