"""
Abstract persistence interface shared by the in-memory and relational backends
"""
from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, Dict, List, Optional

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


class Storage(ABC):
    """
    CRUD primitives per entity plus a transactional boundary.

    Create methods receive unsaved model instances (id unset) and return the
    stored entity with its assigned id. Update methods receive a dict of the
    fields to change and raise NotFoundError when the row does not exist.
    Every multi-step mutation performed by a service is wrapped in
    ``transaction()`` so it either applies completely or not at all.
    """

    async def initialize(self) -> None:
        """Prepare the backend (connections, tables)"""

    async def close(self) -> None:
        """Release backend resources"""

    async def health_check(self) -> bool:
        return True

    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """
        Group the storage calls made inside the block into one atomic unit.

        Nested calls join the outermost transaction.
        """

    # Users
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        pass

    # Categories
    @abstractmethod
    async def list_categories(self, user_id: Optional[int] = None) -> List[Category]:
        """Global categories plus, when user_id is given, the user's own"""

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def create_category(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def update_category(self, category_id: int, changes: Dict[str, Any]) -> Category:
        pass

    @abstractmethod
    async def delete_category(self, category_id: int) -> bool:
        """Delete a category and detach the ideas and questions that referenced it"""

    # Ideas
    @abstractmethod
    async def list_ideas(self, user_id: int) -> List[Idea]:
        pass

    @abstractmethod
    async def list_ideas_by_category(self, category_id: int) -> List[Idea]:
        pass

    @abstractmethod
    async def get_idea(self, idea_id: int) -> Optional[Idea]:
        pass

    @abstractmethod
    async def create_idea(self, idea: Idea) -> Idea:
        pass

    @abstractmethod
    async def update_idea(self, idea_id: int, changes: Dict[str, Any]) -> Idea:
        """Apply changes and bump updated_at, even when changes is empty"""

    @abstractmethod
    async def delete_idea(self, idea_id: int) -> bool:
        """Delete an idea together with its answers and versions"""

    # Questions
    @abstractmethod
    async def list_questions(self) -> List[Question]:
        pass

    @abstractmethod
    async def list_questions_for_category(self, category_id: Optional[int]) -> List[Question]:
        """Questions of the category plus all generic ones, in id order"""

    @abstractmethod
    async def get_question(self, question_id: int) -> Optional[Question]:
        pass

    @abstractmethod
    async def get_question_by_text(self, text: str) -> Optional[Question]:
        pass

    @abstractmethod
    async def create_question(self, question: Question) -> Question:
        pass

    @abstractmethod
    async def update_question_effectiveness(self, question_id: int, effectiveness: int) -> Question:
        pass

    # Answers
    @abstractmethod
    async def list_answers(self, idea_id: int) -> List[Answer]:
        pass

    @abstractmethod
    async def get_answer(self, answer_id: int) -> Optional[Answer]:
        pass

    @abstractmethod
    async def create_answer(self, answer: Answer) -> Answer:
        pass

    @abstractmethod
    async def update_answer(self, answer_id: int, changes: Dict[str, Any]) -> Answer:
        pass

    # Versions
    @abstractmethod
    async def list_versions(self, idea_id: int) -> List[IdeaVersion]:
        """Versions of the idea, newest first"""

    @abstractmethod
    async def get_version(self, version_id: int) -> Optional[IdeaVersion]:
        pass

    @abstractmethod
    async def create_version(self, version: IdeaVersion) -> IdeaVersion:
        pass

    # Feedback
    @abstractmethod
    async def create_feedback(self, feedback: QuestionFeedback) -> QuestionFeedback:
        pass

    @abstractmethod
    async def list_feedback(self, question_id: int) -> List[QuestionFeedback]:
        pass

    # Settings
    @abstractmethod
    async def get_settings(self, user_id: int) -> Optional[UserSettings]:
        pass

    @abstractmethod
    async def create_settings(self, settings: UserSettings) -> UserSettings:
        pass

    @abstractmethod
    async def update_settings(self, user_id: int, changes: Dict[str, Any]) -> UserSettings:
        pass

    # API configs
    @abstractmethod
    async def list_api_configs(self) -> List[ApiConfig]:
        pass

    @abstractmethod
    async def get_api_config(self, config_id: int) -> Optional[ApiConfig]:
        pass

    @abstractmethod
    async def get_active_api_config(self, provider: str) -> Optional[ApiConfig]:
        pass

    @abstractmethod
    async def create_api_config(self, config: ApiConfig) -> ApiConfig:
        """Store a config; ConflictError if it would be a second active one for its provider"""

    @abstractmethod
    async def update_api_config(self, config_id: int, changes: Dict[str, Any]) -> ApiConfig:
        pass

    @abstractmethod
    async def delete_api_config(self, config_id: int) -> bool:
        pass
