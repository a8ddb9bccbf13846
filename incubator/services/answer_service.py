"""
Answers to follow-up questions, one per (idea, question) pair
"""
from typing import List, Tuple

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import Answer, AnswerCreate, AnswerWithQuestion
from incubator.storage import Storage

UNKNOWN_QUESTION_TEXT = "Unknown question"


class AnswerService:
    """Stores answers and keeps the owning idea's updated_at current"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_answers(self, idea_id: int) -> List[AnswerWithQuestion]:
        """Answers for an idea with the question text joined in"""
        if await self.storage.get_idea(idea_id) is None:
            raise NotFoundError("Idea", idea_id)

        answers = []
        for answer in await self.storage.list_answers(idea_id):
            question = await self.storage.get_question(answer.question_id)
            answers.append(AnswerWithQuestion(
                **answer.model_dump(),
                question_text=question.text if question else UNKNOWN_QUESTION_TEXT,
            ))
        return answers

    async def save_answer(self, payload: AnswerCreate) -> Tuple[Answer, bool]:
        """
        Store an answer, replacing the text of an existing answer to the same
        question for the same idea

        Returns:
            Tuple of (stored answer, True if a new answer was created)
        """
        async with self.storage.transaction():
            if await self.storage.get_idea(payload.idea_id) is None:
                raise NotFoundError("Idea", payload.idea_id)
            if await self.storage.get_question(payload.question_id) is None:
                raise NotFoundError("Question", payload.question_id)

            existing = next(
                (a for a in await self.storage.list_answers(payload.idea_id)
                 if a.question_id == payload.question_id),
                None,
            )
            if existing is not None:
                answer = await self.storage.update_answer(existing.id, {"text": payload.text})
            else:
                answer = await self.storage.create_answer(Answer.model_validate(payload))

            await self.storage.update_idea(payload.idea_id, {})

        logger.debug(
            f"{'Updated' if existing else 'Created'} answer {answer.id} "
            f"for idea {payload.idea_id}, question {payload.question_id}"
        )
        return answer, existing is None

    async def update_answer(self, answer_id: int, text: str) -> Answer:
        async with self.storage.transaction():
            if await self.storage.get_answer(answer_id) is None:
                raise NotFoundError("Answer", answer_id)
            answer = await self.storage.update_answer(answer_id, {"text": text})
            if await self.storage.get_idea(answer.idea_id) is not None:
                await self.storage.update_idea(answer.idea_id, {})
        return answer
