"""
Question effectiveness scoring from accumulated thumbs up/down feedback
"""
from typing import Optional, Sequence

from incubator.exceptions import NotFoundError
from incubator.logging_config import logger
from incubator.models import Question, QuestionFeedback, QuestionFeedbackCreate
from incubator.storage import Storage

MAX_EFFECTIVENESS = 5


def compute_effectiveness(feedback: Sequence[QuestionFeedback]) -> Optional[int]:
    """
    Score a question from its full feedback history

    Args:
        feedback: Every feedback row recorded for the question

    Returns:
        round(5 * helpful / total) with halves rounded up, or None when there
        is no feedback to score
    """
    total = len(feedback)
    if total == 0:
        return None
    helpful = sum(1 for item in feedback if item.helpful)
    # Integer form of floor(5 * helpful / total + 0.5)
    return (2 * MAX_EFFECTIVENESS * helpful + total) // (2 * total)


class EffectivenessScorer:
    """Keeps Question.effectiveness in line with the feedback history"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def rescore(self, question_id: int) -> Optional[Question]:
        """Recompute and store the score; returns None when nothing was updated"""
        feedback = await self.storage.list_feedback(question_id)
        effectiveness = compute_effectiveness(feedback)
        if effectiveness is None:
            logger.debug(f"No feedback for question {question_id}, effectiveness unchanged")
            return None

        question = await self.storage.update_question_effectiveness(question_id, effectiveness)
        logger.info(
            f"Question {question_id} effectiveness set to {effectiveness} from {len(feedback)} feedback rows"
        )
        return question

    async def record_feedback(self, payload: QuestionFeedbackCreate) -> QuestionFeedback:
        async with self.storage.transaction():
            if await self.storage.get_question(payload.question_id) is None:
                raise NotFoundError("Question", payload.question_id)
            if payload.user_id is not None and await self.storage.get_user(payload.user_id) is None:
                raise NotFoundError("User", payload.user_id)

            feedback = await self.storage.create_feedback(QuestionFeedback.model_validate(payload))
            await self.rescore(payload.question_id)

        return feedback
