"""
Unit tests for idea and answer services
"""
import pytest

from incubator.exceptions import NotFoundError
from incubator.models import Answer, AnswerCreate, IdeaCreate, IdeaStatus, IdeaUpdate
from incubator.services import AnswerService, IdeaService
from incubator.services.answer_service import UNKNOWN_QUESTION_TEXT


class TestIdeaService:
    """Test idea lifecycle"""

    @pytest.mark.asyncio
    async def test_create_idea_records_initial_version(self, storage, workspace):
        service = IdeaService(storage)

        idea = await service.create_idea(IdeaCreate(
            title="Recipe swapper", description="Trade recipes", user_id=workspace["user"].id,
        ))

        assert idea.id is not None
        assert idea.status == IdeaStatus.draft
        assert idea.media_urls == []
        versions = await storage.list_versions(idea.id)
        assert len(versions) == 1
        assert versions[0].title == "Recipe swapper"
        assert versions[0].answers_snapshot == []

    @pytest.mark.asyncio
    async def test_create_idea_for_missing_user(self, storage):
        with pytest.raises(NotFoundError, match="User 99 not found"):
            await IdeaService(storage).create_idea(IdeaCreate(title="Orphan", description="d", user_id=99))

        assert await storage.list_ideas(99) == []

    @pytest.mark.asyncio
    async def test_create_idea_unknown_category(self, storage, workspace):
        with pytest.raises(NotFoundError):
            await IdeaService(storage).create_idea(IdeaCreate(
                title="t", description="d", user_id=workspace["user"].id, category_id=99,
            ))
        assert [i.id for i in await storage.list_ideas(workspace["user"].id)] == [workspace["idea"].id]

    @pytest.mark.asyncio
    async def test_update_applies_only_set_fields(self, storage, workspace):
        idea = workspace["idea"]

        updated = await IdeaService(storage).update_idea(idea.id, IdeaUpdate(status=IdeaStatus.in_progress))

        assert updated.status == IdeaStatus.in_progress
        assert updated.title == idea.title
        assert updated.category_id == idea.category_id
        assert updated.updated_at >= idea.updated_at

    @pytest.mark.asyncio
    async def test_update_can_clear_category(self, storage, workspace):
        idea = workspace["idea"]

        updated = await IdeaService(storage).update_idea(idea.id, IdeaUpdate(category_id=None))

        assert updated.category_id is None

    @pytest.mark.asyncio
    async def test_update_snapshots_result(self, storage, workspace):
        idea = workspace["idea"]

        await IdeaService(storage).update_idea(idea.id, IdeaUpdate(title="Plant doctor"))

        versions = await storage.list_versions(idea.id)
        assert [v.title for v in versions] == ["Plant doctor"]

    @pytest.mark.asyncio
    async def test_update_missing_idea(self, storage):
        with pytest.raises(NotFoundError):
            await IdeaService(storage).update_idea(42, IdeaUpdate(title="x"))

    @pytest.mark.asyncio
    async def test_delete_cascades(self, storage, workspace):
        idea = workspace["idea"]
        service = IdeaService(storage)
        await storage.create_answer(Answer(idea_id=idea.id, question_id=workspace["generic"].id, text="a"))
        await service.update_idea(idea.id, IdeaUpdate(title="Renamed"))

        await service.delete_idea(idea.id)

        assert await storage.get_idea(idea.id) is None
        assert await storage.list_answers(idea.id) == []
        assert await storage.list_versions(idea.id) == []

    @pytest.mark.asyncio
    async def test_delete_missing_idea(self, storage):
        with pytest.raises(NotFoundError):
            await IdeaService(storage).delete_idea(42)


class TestAnswerService:
    """Test answer upserts"""

    @pytest.mark.asyncio
    async def test_save_creates_then_updates(self, storage, workspace):
        service = AnswerService(storage)
        payload = AnswerCreate(idea_id=workspace["idea"].id, question_id=workspace["generic"].id, text="Gardeners")

        first, created = await service.save_answer(payload)
        assert created is True

        second, created = await service.save_answer(payload.model_copy(update={"text": "Everyone"}))
        assert created is False
        assert second.id == first.id
        assert second.text == "Everyone"
        assert len(await storage.list_answers(workspace["idea"].id)) == 1

    @pytest.mark.asyncio
    async def test_save_touches_idea(self, storage, workspace):
        idea = workspace["idea"]

        await AnswerService(storage).save_answer(
            AnswerCreate(idea_id=idea.id, question_id=workspace["generic"].id, text="a")
        )

        assert (await storage.get_idea(idea.id)).updated_at >= idea.updated_at

    @pytest.mark.asyncio
    async def test_save_missing_question(self, storage, workspace):
        with pytest.raises(NotFoundError):
            await AnswerService(storage).save_answer(
                AnswerCreate(idea_id=workspace["idea"].id, question_id=42, text="a")
            )

    @pytest.mark.asyncio
    async def test_save_missing_idea(self, storage, workspace):
        with pytest.raises(NotFoundError):
            await AnswerService(storage).save_answer(
                AnswerCreate(idea_id=42, question_id=workspace["generic"].id, text="a")
            )

    @pytest.mark.asyncio
    async def test_list_joins_question_text(self, storage, workspace):
        idea = workspace["idea"]
        await storage.create_answer(Answer(idea_id=idea.id, question_id=workspace["other"].id, text="Wilting"))
        await storage.create_answer(Answer(idea_id=idea.id, question_id=999, text="Orphan"))

        answers = await AnswerService(storage).list_answers(idea.id)

        assert [(a.question_text, a.text) for a in answers] == [
            ("What problem does this solve?", "Wilting"),
            (UNKNOWN_QUESTION_TEXT, "Orphan"),
        ]

    @pytest.mark.asyncio
    async def test_update_missing_answer(self, storage):
        with pytest.raises(NotFoundError):
            await AnswerService(storage).update_answer(42, "text")
