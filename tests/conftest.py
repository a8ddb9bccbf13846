"""
Shared fixtures: fresh storage backends and a seeded workspace
"""
import pytest
import pytest_asyncio

from incubator.models import Category, Idea, Question, User, UserSettings
from incubator.storage import DatabaseManager, DatabaseStorage, MemStorage

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def storage():
    """Empty in-memory backend"""
    return MemStorage()


@pytest_asyncio.fixture
async def db_storage():
    """Relational backend on a private in-memory SQLite database"""
    backend = DatabaseStorage(DatabaseManager(IN_MEMORY_DATABASE_URL))
    await backend.initialize()
    yield backend
    await backend.close()


async def seed_workspace(backend):
    """
    One user with settings, a category, three questions and an idea

    Returns a dict with the created entities keyed by role.
    """
    user = await backend.create_user(User(username="ada", password_hash="x"))
    await backend.create_settings(UserSettings(user_id=user.id))
    category = await backend.create_category(Category(name="Apps"))
    generic = await backend.create_question(Question(text="Who is the target audience for this?"))
    specific = await backend.create_question(
        Question(text="Which platform ships first?", category_id=category.id, is_generic=False)
    )
    other = await backend.create_question(Question(text="What problem does this solve?"))
    idea = await backend.create_idea(Idea(
        title="Plant tracker",
        description="Reminds you to water plants",
        user_id=user.id,
        category_id=category.id,
    ))
    return {
        "user": user,
        "category": category,
        "generic": generic,
        "specific": specific,
        "other": other,
        "idea": idea,
    }


@pytest_asyncio.fixture
async def workspace(storage):
    return await seed_workspace(storage)


@pytest_asyncio.fixture
async def db_workspace(db_storage):
    return await seed_workspace(db_storage)
