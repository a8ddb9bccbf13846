"""
API routes for AI provider keys
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from incubator.dependencies import get_api_config_service
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import ApiConfigCreate, ApiConfigRead, ApiConfigUpdate
from incubator.models.api_config import Provider
from incubator.services import ApiConfigService

router = APIRouter(tags=["api-configs"])


class ConnectionTestRequest(BaseModel):
    provider: Provider


@router.get("/api-configs", response_model=List[ApiConfigRead])
async def list_api_configs(service: ApiConfigService = Depends(get_api_config_service)):
    """Stored provider keys, masked"""
    try:
        return [ApiConfigRead.from_config(config) for config in await service.list_configs()]
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching API configs: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching API configs")


@router.post("/api-configs", response_model=ApiConfigRead, status_code=201)
async def create_api_config(
    payload: ApiConfigCreate,
    service: ApiConfigService = Depends(get_api_config_service),
):
    try:
        return ApiConfigRead.from_config(await service.create_config(payload))
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error storing API config for {payload.provider}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error storing API config")


@router.put("/api-configs/{config_id}", response_model=ApiConfigRead)
async def update_api_config(
    config_id: int,
    patch: ApiConfigUpdate,
    service: ApiConfigService = Depends(get_api_config_service),
):
    try:
        return ApiConfigRead.from_config(await service.update_config(config_id, patch))
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error updating API config {config_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating API config")


@router.delete("/api-configs/{config_id}", status_code=204)
async def delete_api_config(config_id: int, service: ApiConfigService = Depends(get_api_config_service)):
    try:
        await service.delete_config(config_id)
        return Response(status_code=204)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error deleting API config {config_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error deleting API config")


@router.post("/test-ai-connection")
async def test_ai_connection(
    payload: ConnectionTestRequest,
    service: ApiConfigService = Depends(get_api_config_service),
):
    """Simulated check: reports whether the provider has an active key"""
    try:
        connected = await service.test_connection(payload.provider)
        return {
            "provider": payload.provider,
            "success": connected,
            "message": "API key configured" if connected else "No active API key for provider",
        }
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error checking connection for {payload.provider}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error checking connection")
