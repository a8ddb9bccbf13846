"""
Unit tests for question effectiveness scoring
"""
import pytest

from incubator.exceptions import NotFoundError
from incubator.models import QuestionFeedback, QuestionFeedbackCreate
from incubator.services import EffectivenessScorer, compute_effectiveness


def votes(*helpful):
    return [QuestionFeedback(question_id=1, helpful=h) for h in helpful]


class TestComputeEffectiveness:
    """Test the scoring formula"""

    def test_no_feedback(self):
        assert compute_effectiveness([]) is None

    def test_all_helpful(self):
        assert compute_effectiveness(votes(True, True)) == 5

    def test_none_helpful(self):
        assert compute_effectiveness(votes(False, False, False)) == 0

    def test_three_of_four(self):
        # 3.75 rounds to 4
        assert compute_effectiveness(votes(True, True, True, False)) == 4

    def test_half_rounds_up(self):
        # 2.5 rounds to 3
        assert compute_effectiveness(votes(True, False)) == 3

    def test_one_of_three(self):
        # 1.67 rounds to 2
        assert compute_effectiveness(votes(True, False, False)) == 2


class TestEffectivenessScorer:
    """Test feedback recording"""

    @pytest.mark.asyncio
    async def test_record_feedback_rescores(self, storage, workspace):
        scorer = EffectivenessScorer(storage)
        question_id = workspace["generic"].id

        for helpful in (True, True, True, False):
            await scorer.record_feedback(QuestionFeedbackCreate(question_id=question_id, helpful=helpful))

        question = await storage.get_question(question_id)
        assert question.effectiveness == 4
        assert len(await storage.list_feedback(question_id)) == 4

    @pytest.mark.asyncio
    async def test_rescore_without_feedback_leaves_score(self, storage, workspace):
        question_id = workspace["generic"].id
        await storage.update_question_effectiveness(question_id, 2)

        assert await EffectivenessScorer(storage).rescore(question_id) is None
        assert (await storage.get_question(question_id)).effectiveness == 2

    @pytest.mark.asyncio
    async def test_feedback_for_missing_question(self, storage):
        with pytest.raises(NotFoundError):
            await EffectivenessScorer(storage).record_feedback(QuestionFeedbackCreate(question_id=42, helpful=True))

        assert await storage.list_feedback(42) == []

    @pytest.mark.asyncio
    async def test_feedback_for_missing_user(self, storage, workspace):
        question_id = workspace["generic"].id

        with pytest.raises(NotFoundError):
            await EffectivenessScorer(storage).record_feedback(
                QuestionFeedbackCreate(question_id=question_id, user_id=99, helpful=True)
            )

        assert await storage.list_feedback(question_id) == []
        assert (await storage.get_question(question_id)).effectiveness == 0
