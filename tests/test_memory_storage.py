"""
Unit tests for the in-memory storage backend
"""
import pytest

from incubator.exceptions import ConflictError, NotFoundError
from incubator.models import Answer, Category, Idea, IdeaVersion, User, UserSettings


class TestIdentifiers:
    """Test id assignment"""

    @pytest.mark.asyncio
    async def test_ids_start_at_one_per_table(self, storage):
        user = await storage.create_user(User(username="ada", password_hash="x"))
        category = await storage.create_category(Category(name="Apps"))
        second = await storage.create_category(Category(name="Games"))

        assert user.id == 1
        assert category.id == 1
        assert second.id == 2

    @pytest.mark.asyncio
    async def test_returned_rows_are_detached(self, storage):
        category = await storage.create_category(Category(name="Apps"))
        category.name = "Changed outside"

        assert (await storage.get_category(category.id)).name == "Apps"


class TestConstraints:
    """Test uniqueness checks"""

    @pytest.mark.asyncio
    async def test_duplicate_username(self, storage):
        await storage.create_user(User(username="ada", password_hash="x"))

        with pytest.raises(ConflictError):
            await storage.create_user(User(username="ada", password_hash="y"))

    @pytest.mark.asyncio
    async def test_duplicate_settings(self, storage):
        await storage.create_settings(UserSettings(user_id=1))

        with pytest.raises(ConflictError):
            await storage.create_settings(UserSettings(user_id=1))

    @pytest.mark.asyncio
    async def test_patch_missing_row(self, storage):
        with pytest.raises(NotFoundError):
            await storage.update_answer(42, {"text": "x"})


class TestTransactions:
    """Test transactional rollback"""

    @pytest.mark.asyncio
    async def test_rollback_restores_all_tables(self, storage, workspace):
        idea = workspace["idea"]

        with pytest.raises(RuntimeError):
            async with storage.transaction():
                await storage.update_idea(idea.id, {"title": "Half-done"})
                await storage.create_answer(Answer(idea_id=idea.id, question_id=workspace["generic"].id, text="a"))
                raise RuntimeError("boom")

        assert (await storage.get_idea(idea.id)).title == "Plant tracker"
        assert await storage.list_answers(idea.id) == []

    @pytest.mark.asyncio
    async def test_rollback_restores_id_counters(self, storage):
        with pytest.raises(RuntimeError):
            async with storage.transaction():
                await storage.create_category(Category(name="Discarded"))
                raise RuntimeError("boom")

        category = await storage.create_category(Category(name="Kept"))
        assert category.id == 1

    @pytest.mark.asyncio
    async def test_nested_transaction_joins_outer(self, storage):
        with pytest.raises(RuntimeError):
            async with storage.transaction():
                async with storage.transaction():
                    await storage.create_category(Category(name="Inner"))
                raise RuntimeError("boom")

        assert await storage.list_categories() == []

    @pytest.mark.asyncio
    async def test_commit(self, storage):
        async with storage.transaction():
            await storage.create_category(Category(name="Apps"))

        assert [c.name for c in await storage.list_categories()] == ["Apps"]


class TestCascades:
    """Test deletes that touch related rows"""

    @pytest.mark.asyncio
    async def test_delete_idea_removes_answers_and_versions(self, storage, workspace):
        idea = workspace["idea"]
        keeper = await storage.create_idea(Idea(title="Keep", description="d", user_id=workspace["user"].id))
        await storage.create_answer(Answer(idea_id=idea.id, question_id=workspace["generic"].id, text="a"))
        await storage.create_version(IdeaVersion(idea_id=idea.id, title="t", description="d"))
        await storage.create_version(IdeaVersion(idea_id=keeper.id, title="k", description="d"))

        assert await storage.delete_idea(idea.id) is True

        assert await storage.list_answers(idea.id) == []
        assert await storage.list_versions(idea.id) == []
        assert len(await storage.list_versions(keeper.id)) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_idea(self, storage):
        assert await storage.delete_idea(42) is False
