from datetime import datetime
from typing import Dict, List, Optional, Any
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel, Column, JSON


class AnswerSnapshot(SQLModel):
    """Answer captured at snapshot time, with the question text denormalized"""

    question_id: int
    question_text: str
    answer_text: str


class IdeaVersion(SQLModel, table=True):
    __tablename__ = "idea_versions"

    id: Optional[int] = Field(default=None, primary_key=True)
    idea_id: int = Field(foreign_key="ideas.id", index=True)
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    answers_snapshot: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))

    def snapshot_entries(self) -> List[AnswerSnapshot]:
        return [AnswerSnapshot.model_validate(entry) for entry in self.answers_snapshot or []]


class IdeaVersionCreate(SQLModel):
    idea_id: int
    title: str
    description: str
    answers_snapshot: List[AnswerSnapshot] = Field(default_factory=list)


class IdeaVersionRead(SQLModel):
    id: int
    idea_id: int
    title: str
    description: str
    answers_snapshot: List[AnswerSnapshot] = Field(default_factory=list)
    created_at: datetime
