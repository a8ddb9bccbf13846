"""
Process-lifetime storage backed by plain dictionaries
"""
import asyncio
import copy
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional, TypeVar

from sqlmodel import SQLModel

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

TABLES = (
    "users",
    "categories",
    "ideas",
    "questions",
    "answers",
    "idea_versions",
    "question_feedback",
    "settings",
    "api_configs",
)


def _clone(entity: ModelT) -> ModelT:
    """Detached copy so callers never mutate stored rows in place"""
    return type(entity)(**copy.deepcopy(entity.model_dump()))


class MemStorage(Storage):
    """
    In-memory backend with auto-incrementing integer ids starting at 1 per
    entity type. Transactions are serialized by a lock and roll every table
    back to its pre-transaction contents on error.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[int, SQLModel]] = {name: {} for name in TABLES}
        self._counters: Dict[str, int] = {name: 1 for name in TABLES}
        self._lock = asyncio.Lock()
        self._in_transaction: ContextVar[bool] = ContextVar(
            f"mem_storage_tx_{id(self)}", default=False
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._in_transaction.get():
            yield
            return

        async with self._lock:
            tables_backup = {
                name: {key: _clone(row) for key, row in rows.items()}
                for name, rows in self._tables.items()
            }
            counters_backup = dict(self._counters)
            token = self._in_transaction.set(True)
            try:
                yield
            except Exception:
                self._tables = tables_backup
                self._counters = counters_backup
                logger.warning("In-memory transaction rolled back")
                raise
            finally:
                self._in_transaction.reset(token)

    def _insert(self, table: str, entity: ModelT) -> ModelT:
        stored = _clone(entity)
        stored.id = self._counters[table]
        self._counters[table] += 1
        self._tables[table][stored.id] = stored
        return _clone(stored)

    def _get(self, table: str, entity_id: int) -> Optional[SQLModel]:
        row = self._tables[table].get(entity_id)
        return _clone(row) if row is not None else None

    def _rows(self, table: str) -> List[SQLModel]:
        return list(self._tables[table].values())

    def _patch(self, table: str, entity_id: int, changes: Dict[str, Any], label: str) -> SQLModel:
        row = self._tables[table].get(entity_id)
        if row is None:
            raise NotFoundError(label, entity_id)
        for field, value in changes.items():
            setattr(row, field, copy.deepcopy(value))
        return _clone(row)

    # Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return self._get("users", user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._rows("users"):
            if user.username == username:
                return _clone(user)
        return None

    async def create_user(self, user: User) -> User:
        if await self.get_user_by_username(user.username):
            raise ConflictError("Username already exists")
        return self._insert("users", user)

    # Categories
    async def list_categories(self, user_id: Optional[int] = None) -> List[Category]:
        return [
            _clone(category) for category in self._rows("categories")
            if category.user_id is None or (user_id is not None and category.user_id == user_id)
        ]

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self._get("categories", category_id)

    async def create_category(self, category: Category) -> Category:
        return self._insert("categories", category)

    async def update_category(self, category_id: int, changes: Dict[str, Any]) -> Category:
        return self._patch("categories", category_id, changes, "Category")

    async def delete_category(self, category_id: int) -> bool:
        if self._tables["categories"].pop(category_id, None) is None:
            return False
        for row in self._rows("ideas") + self._rows("questions"):
            if row.category_id == category_id:
                row.category_id = None
        return True

    # Ideas
    async def list_ideas(self, user_id: int) -> List[Idea]:
        return [_clone(idea) for idea in self._rows("ideas") if idea.user_id == user_id]

    async def list_ideas_by_category(self, category_id: int) -> List[Idea]:
        return [_clone(idea) for idea in self._rows("ideas") if idea.category_id == category_id]

    async def get_idea(self, idea_id: int) -> Optional[Idea]:
        return self._get("ideas", idea_id)

    async def create_idea(self, idea: Idea) -> Idea:
        now = datetime.utcnow()
        idea.created_at = now
        idea.updated_at = now
        return self._insert("ideas", idea)

    async def update_idea(self, idea_id: int, changes: Dict[str, Any]) -> Idea:
        return self._patch("ideas", idea_id, {**changes, "updated_at": datetime.utcnow()}, "Idea")

    async def delete_idea(self, idea_id: int) -> bool:
        if self._tables["ideas"].pop(idea_id, None) is None:
            return False
        for table in ("answers", "idea_versions"):
            self._tables[table] = {
                key: row for key, row in self._tables[table].items() if row.idea_id != idea_id
            }
        return True

    # Questions
    async def list_questions(self) -> List[Question]:
        return [_clone(question) for question in self._rows("questions")]

    async def list_questions_for_category(self, category_id: Optional[int]) -> List[Question]:
        return [
            _clone(question) for question in self._rows("questions")
            if question.is_generic or (category_id is not None and question.category_id == category_id)
        ]

    async def get_question(self, question_id: int) -> Optional[Question]:
        return self._get("questions", question_id)

    async def get_question_by_text(self, text: str) -> Optional[Question]:
        for question in self._rows("questions"):
            if question.text == text:
                return _clone(question)
        return None

    async def create_question(self, question: Question) -> Question:
        return self._insert("questions", question)

    async def update_question_effectiveness(self, question_id: int, effectiveness: int) -> Question:
        return self._patch("questions", question_id, {"effectiveness": effectiveness}, "Question")

    # Answers
    async def list_answers(self, idea_id: int) -> List[Answer]:
        return [_clone(answer) for answer in self._rows("answers") if answer.idea_id == idea_id]

    async def get_answer(self, answer_id: int) -> Optional[Answer]:
        return self._get("answers", answer_id)

    async def create_answer(self, answer: Answer) -> Answer:
        return self._insert("answers", answer)

    async def update_answer(self, answer_id: int, changes: Dict[str, Any]) -> Answer:
        return self._patch("answers", answer_id, changes, "Answer")

    # Versions
    async def list_versions(self, idea_id: int) -> List[IdeaVersion]:
        versions = [_clone(v) for v in self._rows("idea_versions") if v.idea_id == idea_id]
        return sorted(versions, key=lambda v: (v.created_at, v.id), reverse=True)

    async def get_version(self, version_id: int) -> Optional[IdeaVersion]:
        return self._get("idea_versions", version_id)

    async def create_version(self, version: IdeaVersion) -> IdeaVersion:
        version.created_at = datetime.utcnow()
        return self._insert("idea_versions", version)

    # Feedback
    async def create_feedback(self, feedback: QuestionFeedback) -> QuestionFeedback:
        return self._insert("question_feedback", feedback)

    async def list_feedback(self, question_id: int) -> List[QuestionFeedback]:
        return [_clone(fb) for fb in self._rows("question_feedback") if fb.question_id == question_id]

    # Settings
    def _settings_row(self, user_id: int) -> Optional[UserSettings]:
        for row in self._rows("settings"):
            if row.user_id == user_id:
                return row
        return None

    async def get_settings(self, user_id: int) -> Optional[UserSettings]:
        row = self._settings_row(user_id)
        return _clone(row) if row is not None else None

    async def create_settings(self, settings: UserSettings) -> UserSettings:
        if self._settings_row(settings.user_id) is not None:
            raise ConflictError(f"Settings for user {settings.user_id} already exist")
        return self._insert("settings", settings)

    async def update_settings(self, user_id: int, changes: Dict[str, Any]) -> UserSettings:
        row = self._settings_row(user_id)
        if row is None:
            raise NotFoundError("Settings for user", user_id)
        return self._patch("settings", row.id, changes, "Settings")

    # API configs
    def _check_single_active(self, provider: str, is_active: bool, exclude_id: Optional[int] = None) -> None:
        if not is_active:
            return
        for row in self._rows("api_configs"):
            if row.provider == provider and row.is_active and row.id != exclude_id:
                raise ConflictError(f"An active API config for {provider} already exists")

    async def list_api_configs(self) -> List[ApiConfig]:
        return [_clone(config) for config in self._rows("api_configs")]

    async def get_api_config(self, config_id: int) -> Optional[ApiConfig]:
        return self._get("api_configs", config_id)

    async def get_active_api_config(self, provider: str) -> Optional[ApiConfig]:
        for row in self._rows("api_configs"):
            if row.provider == provider and row.is_active:
                return _clone(row)
        return None

    async def create_api_config(self, config: ApiConfig) -> ApiConfig:
        self._check_single_active(config.provider, config.is_active)
        now = datetime.utcnow()
        config.created_at = now
        config.updated_at = now
        return self._insert("api_configs", config)

    async def update_api_config(self, config_id: int, changes: Dict[str, Any]) -> ApiConfig:
        row = self._tables["api_configs"].get(config_id)
        if row is None:
            raise NotFoundError("API config", config_id)
        self._check_single_active(row.provider, changes.get("is_active", row.is_active), exclude_id=config_id)
        return self._patch("api_configs", config_id, {**changes, "updated_at": datetime.utcnow()}, "API config")

    async def delete_api_config(self, config_id: int) -> bool:
        return self._tables["api_configs"].pop(config_id, None) is not None
