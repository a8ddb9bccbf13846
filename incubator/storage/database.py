"""
Relational storage on an async SQLAlchemy engine with SQLModel tables
"""
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Any, AsyncGenerator, Dict, List, Optional, Type, TypeVar

from sqlalchemy import delete, or_, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel, select

from incubator.exceptions import ConflictError, NotFoundError
from incubator.logging_config import logger
from incubator.models import (
    Answer,
    ApiConfig,
    Category,
    Idea,
    IdeaVersion,
    Question,
    QuestionFeedback,
    User,
    UserSettings,
)
from incubator.storage.base import Storage

ModelT = TypeVar("ModelT", bound=SQLModel)


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the driver reports a duplicate key rather than another constraint"""
    orig = error.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    message = str(orig)
    return "UNIQUE constraint failed" in message or "Duplicate entry" in message


class DatabaseManager:
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self.engine = None
        self.async_session_maker = None
        self._initialized = False

    def _engine_options(self) -> Dict[str, Any]:
        if self.database_url.startswith("sqlite") and ":memory:" in self.database_url:
            # A single shared connection keeps the in-memory database alive
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {"poolclass": NullPool, "pool_pre_ping": True}

    async def initialize(self):
        """Initialize database connection and create tables if needed"""
        if self._initialized:
            return

        try:
            self.engine = create_async_engine(
                self.database_url,
                echo=self.echo,
                **self._engine_options(),
            )

            self.async_session_maker = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False
            )

            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

            self._initialized = True
            logger.info("Database initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

    async def close(self):
        """Close database connections"""
        if self.engine:
            await self.engine.dispose()
            self._initialized = False
            logger.info("Database connections closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get an async database session"""
        if not self._initialized:
            await self.initialize()

        async with self.async_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def health_check(self) -> bool:
        """Check if database is accessible"""
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False


class DatabaseStorage(Storage):
    """
    Storage backed by a relational database.

    Outside a transaction each call runs in its own committed session. Inside
    ``transaction()`` the calls share one session that commits when the block
    exits and rolls back if it raises.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self._current_session: ContextVar[Optional[AsyncSession]] = ContextVar(
            f"db_storage_session_{id(self)}", default=None
        )

    async def initialize(self) -> None:
        await self.db_manager.initialize()

    async def close(self) -> None:
        await self.db_manager.close()

    async def health_check(self) -> bool:
        return await self.db_manager.health_check()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        if self._current_session.get() is not None:
            yield
            return

        async with self.db_manager.get_session() as session:
            token = self._current_session.set(session)
            try:
                yield
            finally:
                self._current_session.reset(token)

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._current_session.get()
        if session is not None:
            yield session
            return
        async with self.db_manager.get_session() as session:
            yield session

    async def _add(self, entity: ModelT) -> ModelT:
        try:
            async with self._session() as session:
                session.add(entity)
                await session.flush()
                await session.refresh(entity)
                return entity
        except IntegrityError as e:
            logger.warning(f"Integrity error storing {type(entity).__name__}: {str(e.orig)}")
            if not is_unique_violation(e):
                raise
            raise ConflictError(f"{type(entity).__name__} conflicts with an existing record") from e

    async def _get(self, model: Type[ModelT], entity_id: int) -> Optional[ModelT]:
        async with self._session() as session:
            return await session.get(model, entity_id)

    async def _all(self, statement) -> List[Any]:
        async with self._session() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def _first(self, statement) -> Optional[Any]:
        async with self._session() as session:
            result = await session.execute(statement)
            return result.scalars().first()

    async def _patch(self, model: Type[ModelT], entity_id: int, changes: Dict[str, Any], label: str) -> ModelT:
        try:
            async with self._session() as session:
                entity = await session.get(model, entity_id)
                if entity is None:
                    raise NotFoundError(label, entity_id)
                for field, value in changes.items():
                    setattr(entity, field, value)
                session.add(entity)
                await session.flush()
                await session.refresh(entity)
                return entity
        except IntegrityError as e:
            logger.warning(f"Integrity error updating {label} {entity_id}: {str(e.orig)}")
            if not is_unique_violation(e):
                raise
            raise ConflictError(f"{label} {entity_id} conflicts with an existing record") from e

    async def _delete(self, model: Type[ModelT], entity_id: int) -> bool:
        async with self._session() as session:
            entity = await session.get(model, entity_id)
            if entity is None:
                return False
            await session.delete(entity)
            await session.flush()
            return True

    # Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._first(select(User).where(User.username == username))

    async def create_user(self, user: User) -> User:
        return await self._add(user)

    # Categories
    async def list_categories(self, user_id: Optional[int] = None) -> List[Category]:
        statement = select(Category)
        if user_id is None:
            statement = statement.where(Category.user_id.is_(None))
        else:
            statement = statement.where(or_(Category.user_id == user_id, Category.user_id.is_(None)))
        return await self._all(statement.order_by(Category.id))

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self._get(Category, category_id)

    async def create_category(self, category: Category) -> Category:
        return await self._add(category)

    async def update_category(self, category_id: int, changes: Dict[str, Any]) -> Category:
        return await self._patch(Category, category_id, changes, "Category")

    async def delete_category(self, category_id: int) -> bool:
        async with self.transaction(), self._session() as session:
            await session.execute(
                update(Idea).where(Idea.category_id == category_id).values(category_id=None)
            )
            await session.execute(
                update(Question).where(Question.category_id == category_id).values(category_id=None)
            )
            return await self._delete(Category, category_id)

    # Ideas
    async def list_ideas(self, user_id: int) -> List[Idea]:
        return await self._all(select(Idea).where(Idea.user_id == user_id).order_by(Idea.id))

    async def list_ideas_by_category(self, category_id: int) -> List[Idea]:
        return await self._all(select(Idea).where(Idea.category_id == category_id).order_by(Idea.id))

    async def get_idea(self, idea_id: int) -> Optional[Idea]:
        return await self._get(Idea, idea_id)

    async def create_idea(self, idea: Idea) -> Idea:
        return await self._add(idea)

    async def update_idea(self, idea_id: int, changes: Dict[str, Any]) -> Idea:
        return await self._patch(Idea, idea_id, {**changes, "updated_at": datetime.utcnow()}, "Idea")

    async def delete_idea(self, idea_id: int) -> bool:
        async with self.transaction(), self._session() as session:
            await session.execute(delete(Answer).where(Answer.idea_id == idea_id))
            await session.execute(delete(IdeaVersion).where(IdeaVersion.idea_id == idea_id))
            return await self._delete(Idea, idea_id)

    # Questions
    async def list_questions(self) -> List[Question]:
        return await self._all(select(Question).order_by(Question.id))

    async def list_questions_for_category(self, category_id: Optional[int]) -> List[Question]:
        statement = select(Question)
        if category_id is None:
            statement = statement.where(Question.is_generic == True)  # noqa: E712
        else:
            statement = statement.where(
                or_(Question.category_id == category_id, Question.is_generic == True)  # noqa: E712
            )
        return await self._all(statement.order_by(Question.id))

    async def get_question(self, question_id: int) -> Optional[Question]:
        return await self._get(Question, question_id)

    async def get_question_by_text(self, text: str) -> Optional[Question]:
        return await self._first(select(Question).where(Question.text == text).order_by(Question.id))

    async def create_question(self, question: Question) -> Question:
        return await self._add(question)

    async def update_question_effectiveness(self, question_id: int, effectiveness: int) -> Question:
        return await self._patch(Question, question_id, {"effectiveness": effectiveness}, "Question")

    # Answers
    async def list_answers(self, idea_id: int) -> List[Answer]:
        return await self._all(select(Answer).where(Answer.idea_id == idea_id).order_by(Answer.id))

    async def get_answer(self, answer_id: int) -> Optional[Answer]:
        return await self._get(Answer, answer_id)

    async def create_answer(self, answer: Answer) -> Answer:
        return await self._add(answer)

    async def update_answer(self, answer_id: int, changes: Dict[str, Any]) -> Answer:
        return await self._patch(Answer, answer_id, changes, "Answer")

    # Versions
    async def list_versions(self, idea_id: int) -> List[IdeaVersion]:
        return await self._all(
            select(IdeaVersion)
            .where(IdeaVersion.idea_id == idea_id)
            .order_by(IdeaVersion.created_at.desc(), IdeaVersion.id.desc())
        )

    async def get_version(self, version_id: int) -> Optional[IdeaVersion]:
        return await self._get(IdeaVersion, version_id)

    async def create_version(self, version: IdeaVersion) -> IdeaVersion:
        return await self._add(version)

    # Feedback
    async def create_feedback(self, feedback: QuestionFeedback) -> QuestionFeedback:
        return await self._add(feedback)

    async def list_feedback(self, question_id: int) -> List[QuestionFeedback]:
        return await self._all(
            select(QuestionFeedback).where(QuestionFeedback.question_id == question_id)
        )

    # Settings
    async def get_settings(self, user_id: int) -> Optional[UserSettings]:
        return await self._first(select(UserSettings).where(UserSettings.user_id == user_id))

    async def create_settings(self, settings: UserSettings) -> UserSettings:
        return await self._add(settings)

    async def update_settings(self, user_id: int, changes: Dict[str, Any]) -> UserSettings:
        existing = await self.get_settings(user_id)
        if existing is None:
            raise NotFoundError("Settings for user", user_id)
        return await self._patch(UserSettings, existing.id, changes, "Settings")

    # API configs
    async def list_api_configs(self) -> List[ApiConfig]:
        return await self._all(select(ApiConfig).order_by(ApiConfig.id))

    async def get_api_config(self, config_id: int) -> Optional[ApiConfig]:
        return await self._get(ApiConfig, config_id)

    async def get_active_api_config(self, provider: str) -> Optional[ApiConfig]:
        return await self._first(
            select(ApiConfig).where(ApiConfig.provider == provider, ApiConfig.is_active == True)  # noqa: E712
        )

    async def create_api_config(self, config: ApiConfig) -> ApiConfig:
        return await self._add(config)

    async def update_api_config(self, config_id: int, changes: Dict[str, Any]) -> ApiConfig:
        return await self._patch(ApiConfig, config_id, {**changes, "updated_at": datetime.utcnow()}, "API config")

    async def delete_api_config(self, config_id: int) -> bool:
        return await self._delete(ApiConfig, config_id)
