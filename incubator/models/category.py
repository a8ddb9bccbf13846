from typing import Optional
from sqlmodel import Field, SQLModel


class CategoryBase(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")


class Category(CategoryBase, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
