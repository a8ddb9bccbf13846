"""
Selection of the next round of follow-up questions for an idea
"""
from typing import List

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import Question
from incubator.storage import Storage


class QuestionSelector:
    """Picks unanswered category and generic questions for an idea"""

    def __init__(self, storage: Storage, limit: int = 5):
        """
        Initialize question selector

        Args:
            storage: Persistence backend
            limit: Maximum number of questions returned per round
        """
        self.storage = storage
        self.limit = limit

    async def select(self, idea_id: int) -> List[Question]:
        """
        Choose the questions to surface next for an idea

        The pool is the idea's category questions plus every generic question,
        minus those already answered for the idea. When the owner has
        self-learning enabled the pool is ordered by effectiveness, highest
        first; ties keep pool order.

        Args:
            idea_id: Idea to select questions for

        Returns:
            Up to ``limit`` questions, possibly none
        """
        idea = await self.storage.get_idea(idea_id)
        if idea is None:
            raise NotFoundError("Idea", idea_id)

        answered_ids = {answer.question_id for answer in await self.storage.list_answers(idea_id)}
        pool = await self.storage.list_questions_for_category(idea.category_id)
        candidates = [question for question in pool if question.id not in answered_ids]

        user_settings = await self.storage.get_settings(idea.user_id)
        if user_settings is not None and user_settings.enable_self_learning:
            candidates.sort(key=lambda question: question.effectiveness or 0, reverse=True)

        selected = candidates[:self.limit]
        logger.debug(
            f"Selected {len(selected)} of {len(candidates)} candidate questions for idea {idea_id}"
        )
        return selected
