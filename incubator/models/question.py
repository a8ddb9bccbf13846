from typing import Optional
from sqlmodel import Field, SQLModel


class QuestionBase(SQLModel):
    text: str = Field(min_length=1)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id")
    effectiveness: int = Field(default=0, ge=0, le=5)
    is_generic: bool = Field(default=True)


class Question(QuestionBase, table=True):
    __tablename__ = "questions"

    id: Optional[int] = Field(default=None, primary_key=True)


class QuestionCreate(QuestionBase):
    pass
