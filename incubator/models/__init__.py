# Database models package
from .user import User, UserCreate, UserLogin, UserRead
from .category import Category, CategoryCreate, CategoryUpdate
from .idea import Idea, IdeaCreate, IdeaRead, IdeaStatus, IdeaUpdate
from .question import Question, QuestionCreate
from .answer import Answer, AnswerCreate, AnswerUpdate, AnswerWithQuestion
from .idea_version import AnswerSnapshot, IdeaVersion, IdeaVersionCreate, IdeaVersionRead
from .question_feedback import QuestionFeedback, QuestionFeedbackCreate
from .user_settings import UserSettings, UserSettingsUpdate
from .api_config import ApiConfig, ApiConfigCreate, ApiConfigRead, ApiConfigUpdate

__all__ = [
    "User", "UserCreate", "UserLogin", "UserRead",
    "Category", "CategoryCreate", "CategoryUpdate",
    "Idea", "IdeaCreate", "IdeaRead", "IdeaStatus", "IdeaUpdate",
    "Question", "QuestionCreate",
    "Answer", "AnswerCreate", "AnswerUpdate", "AnswerWithQuestion",
    "AnswerSnapshot", "IdeaVersion", "IdeaVersionCreate", "IdeaVersionRead",
    "QuestionFeedback", "QuestionFeedbackCreate",
    "UserSettings", "UserSettingsUpdate",
    "ApiConfig", "ApiConfigCreate", "ApiConfigRead", "ApiConfigUpdate",
]
