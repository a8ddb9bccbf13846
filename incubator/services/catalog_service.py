"""
Categories and the shared question catalog
"""
from typing import List, Optional

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import Category, CategoryCreate, CategoryUpdate, Question, QuestionCreate
from incubator.storage import Storage

DEFAULT_QUESTIONS = [
    "Who is the target audience for this?",
    "What problem does this solve?",
    "What resources would be needed to implement this?",
    "What are potential challenges or obstacles?",
    "How would you measure success for this idea?",
    "What's the timeline for implementation?",
    "How is this different from existing solutions?",
    "What are the first steps to move this forward?",
]


class CatalogService:
    def __init__(self, storage: Storage):
        self.storage = storage

    # Categories
    async def list_categories(self, user_id: Optional[int] = None) -> List[Category]:
        return await self.storage.list_categories(user_id)

    async def create_category(self, payload: CategoryCreate) -> Category:
        if payload.user_id is not None and await self.storage.get_user(payload.user_id) is None:
            raise NotFoundError("User", payload.user_id)
        category = await self.storage.create_category(Category.model_validate(payload))
        logger.info(f"Created category {category.id}")
        return category

    async def update_category(self, category_id: int, patch: CategoryUpdate) -> Category:
        return await self.storage.update_category(
            category_id, patch.model_dump(exclude_unset=True, exclude_none=True)
        )

    async def delete_category(self, category_id: int) -> None:
        if not await self.storage.delete_category(category_id):
            raise NotFoundError("Category", category_id)
        logger.info(f"Deleted category {category_id}")

    # Questions
    async def list_questions(self, category_id: Optional[int] = None) -> List[Question]:
        if category_id is None:
            return await self.storage.list_questions()
        return await self.storage.list_questions_for_category(category_id)

    async def get_question(self, question_id: int) -> Question:
        question = await self.storage.get_question(question_id)
        if question is None:
            raise NotFoundError("Question", question_id)
        return question

    async def create_question(self, payload: QuestionCreate) -> Question:
        if payload.category_id is not None and await self.storage.get_category(payload.category_id) is None:
            raise NotFoundError("Category", payload.category_id)
        return await self.storage.create_question(Question.model_validate(payload))

    async def seed_default_questions(self) -> int:
        """
        Add the generic question set when the catalog is empty

        Returns:
            Number of questions created
        """
        async with self.storage.transaction():
            if await self.storage.list_questions():
                return 0
            for text in DEFAULT_QUESTIONS:
                await self.storage.create_question(Question(text=text, is_generic=True))

        logger.info(f"Seeded {len(DEFAULT_QUESTIONS)} default questions")
        return len(DEFAULT_QUESTIONS)
