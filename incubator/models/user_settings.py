from typing import Optional
from sqlmodel import Field, SQLModel


class UserSettingsBase(SQLModel):
    enable_self_learning: bool = Field(default=True)
    store_question_effectiveness: bool = Field(default=True)
    improve_questions_based_on_answers: bool = Field(default=True)
    theme: str = Field(default="light", max_length=20)
    language: str = Field(default="en", max_length=10)
    version: str = Field(default="1.0.0", max_length=20)
    preferred_provider: str = Field(default="openai", max_length=50)
    openai_model: str = Field(default="gpt-4o")
    gemini_model: str = Field(default="gemini-pro")
    mistral_model: str = Field(default="mistral-large")
    anthropic_model: str = Field(default="claude-3-opus")


class UserSettings(UserSettingsBase, table=True):
    __tablename__ = "settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, nullable=False)


class UserSettingsUpdate(SQLModel):
    enable_self_learning: Optional[bool] = None
    store_question_effectiveness: Optional[bool] = None
    improve_questions_based_on_answers: Optional[bool] = None
    theme: Optional[str] = None
    language: Optional[str] = None
    version: Optional[str] = None
    preferred_provider: Optional[str] = None
    openai_model: Optional[str] = None
    gemini_model: Optional[str] = None
    mistral_model: Optional[str] = None
    anthropic_model: Optional[str] = None
