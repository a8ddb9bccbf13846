"""
AI provider key storage with a single active key per provider
"""
from typing import List, Optional

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import ApiConfig, ApiConfigCreate, ApiConfigUpdate
from incubator.storage import Storage


class ApiConfigService:
    """Manages provider keys; activating a key deactivates the provider's previous one"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def _deactivate_current(self, provider: str, keep_id: Optional[int] = None) -> None:
        current = await self.storage.get_active_api_config(provider)
        if current is not None and current.id != keep_id:
            await self.storage.update_api_config(current.id, {"is_active": False})
            logger.info(f"Deactivated API config {current.id} for {provider}")

    async def list_configs(self) -> List[ApiConfig]:
        return await self.storage.list_api_configs()

    async def create_config(self, payload: ApiConfigCreate) -> ApiConfig:
        async with self.storage.transaction():
            if payload.is_active:
                await self._deactivate_current(payload.provider)
            config = await self.storage.create_api_config(ApiConfig.model_validate(payload))

        logger.info(f"Stored API config {config.id} for {config.provider}")
        return config

    async def update_config(self, config_id: int, patch: ApiConfigUpdate) -> ApiConfig:
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)

        async with self.storage.transaction():
            config = await self.storage.get_api_config(config_id)
            if config is None:
                raise NotFoundError("API config", config_id)
            if changes.get("is_active"):
                await self._deactivate_current(config.provider, keep_id=config_id)
            return await self.storage.update_api_config(config_id, changes)

    async def delete_config(self, config_id: int) -> None:
        if not await self.storage.delete_api_config(config_id):
            raise NotFoundError("API config", config_id)

    async def test_connection(self, provider: str) -> bool:
        """Report whether the provider has an active key; no remote call is made"""
        return await self.storage.get_active_api_config(provider) is not None
