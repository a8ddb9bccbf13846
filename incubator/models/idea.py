from datetime import datetime
from enum import Enum
from typing import List, Optional
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel, Column, JSON


class IdeaStatus(str, Enum):
    draft = "draft"
    in_progress = "in_progress"
    completed = "completed"


class IdeaBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id")
    user_id: int = Field(foreign_key="users.id", index=True)
    status: IdeaStatus = Field(default=IdeaStatus.draft)


class Idea(IdeaBase, table=True):
    __tablename__ = "ideas"

    id: Optional[int] = Field(default=None, primary_key=True)
    media_urls: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))


class IdeaCreate(IdeaBase):
    media_urls: List[str] = Field(default_factory=list)


class IdeaUpdate(SQLModel):
    """Partial update; only fields present in the request are applied"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[IdeaStatus] = None
    media_urls: Optional[List[str]] = None


class IdeaRead(IdeaBase):
    id: int
    media_urls: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
