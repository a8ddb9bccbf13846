"""
Idea lifecycle: creation, edits and deletion, each recorded in version history
"""
from typing import List, Optional

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import Idea, IdeaCreate, IdeaUpdate
from incubator.services.version_manager import VersionManager
from incubator.storage import Storage


class IdeaService:
    """Idea CRUD with automatic snapshots"""

    def __init__(self, storage: Storage, version_manager: Optional[VersionManager] = None):
        self.storage = storage
        self.version_manager = version_manager or VersionManager(storage)

    async def _check_owner(self, user_id: int) -> None:
        if await self.storage.get_user(user_id) is None:
            raise NotFoundError("User", user_id)

    async def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and await self.storage.get_category(category_id) is None:
            raise NotFoundError("Category", category_id)

    async def list_ideas(self, user_id: int) -> List[Idea]:
        return await self.storage.list_ideas(user_id)

    async def get_idea(self, idea_id: int) -> Idea:
        idea = await self.storage.get_idea(idea_id)
        if idea is None:
            raise NotFoundError("Idea", idea_id)
        return idea

    async def create_idea(self, payload: IdeaCreate) -> Idea:
        """Create an idea together with its initial, answer-less version"""
        async with self.storage.transaction():
            await self._check_owner(payload.user_id)
            await self._check_category(payload.category_id)
            idea = await self.storage.create_idea(Idea.model_validate(payload))
            await self.version_manager.create_version(idea.id, idea.title, idea.description, [])

        logger.info(f"Created idea {idea.id} for user {idea.user_id}")
        return idea

    async def update_idea(self, idea_id: int, patch: IdeaUpdate) -> Idea:
        """Apply the fields set on the patch and snapshot the result"""
        # category_id is the only field that may be cleared with null
        changes = {
            field: value for field, value in patch.model_dump(exclude_unset=True).items()
            if value is not None or field == "category_id"
        }

        async with self.storage.transaction():
            if await self.storage.get_idea(idea_id) is None:
                raise NotFoundError("Idea", idea_id)
            if "category_id" in changes:
                await self._check_category(changes["category_id"])

            idea = await self.storage.update_idea(idea_id, changes)
            await self.version_manager.snapshot_idea(idea)

        logger.info(f"Updated idea {idea_id} fields: {sorted(changes)}")
        return idea

    async def delete_idea(self, idea_id: int) -> None:
        async with self.storage.transaction():
            if not await self.storage.delete_idea(idea_id):
                raise NotFoundError("Idea", idea_id)
        logger.info(f"Deleted idea {idea_id}")
