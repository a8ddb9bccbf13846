from typing import Optional
from pydantic import field_validator
from sqlmodel import Field, SQLModel

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=100, unique=True, nullable=False, index=True)
    password_hash: str = Field(nullable=False)
    email: Optional[str] = Field(default="")


class UserCreate(SQLModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    email: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserLogin(SQLModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserRead(SQLModel):
    id: int
    username: str
