"""
API routes for registration, login and per-user settings
"""
from fastapi import APIRouter, Depends, HTTPException

from incubator.dependencies import get_account_service
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import UserCreate, UserLogin, UserRead, UserSettings, UserSettingsUpdate
from incubator.services import AccountService

router = APIRouter(tags=["accounts"])


@router.post("/register", response_model=UserRead, status_code=201)
async def register(payload: UserCreate, service: AccountService = Depends(get_account_service)):
    """Create a user and their default settings"""
    try:
        return await service.register(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {str(e)}")
        raise HTTPException(status_code=500, detail="Error registering user")


@router.post("/login", response_model=UserRead)
async def login(payload: UserLogin, service: AccountService = Depends(get_account_service)):
    """Check credentials; no session is issued"""
    try:
        return await service.login(payload.username, payload.password)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error during login: {str(e)}")
        raise HTTPException(status_code=500, detail="Error during login")


@router.get("/settings/{user_id}", response_model=UserSettings)
async def get_settings(user_id: int, service: AccountService = Depends(get_account_service)):
    try:
        return await service.get_settings(user_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching settings for user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching settings")


@router.put("/settings/{user_id}", response_model=UserSettings)
async def update_settings(
    user_id: int,
    patch: UserSettingsUpdate,
    service: AccountService = Depends(get_account_service),
):
    try:
        return await service.update_settings(user_id, patch)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error updating settings for user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating settings")
