from datetime import datetime
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class AnswerBase(SQLModel):
    idea_id: int = Field(foreign_key="ideas.id", index=True)
    question_id: int = Field(foreign_key="questions.id")
    text: str


class Answer(AnswerBase, table=True):
    __tablename__ = "answers"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))


class AnswerCreate(AnswerBase):
    pass


class AnswerUpdate(SQLModel):
    text: str


class AnswerWithQuestion(AnswerBase):
    id: int
    created_at: datetime
    question_text: str
