from datetime import datetime
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class QuestionFeedbackBase(SQLModel):
    question_id: int = Field(foreign_key="questions.id", index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    helpful: bool


class QuestionFeedback(QuestionFeedbackBase, table=True):
    __tablename__ = "question_feedback"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))


class QuestionFeedbackCreate(QuestionFeedbackBase):
    pass
