from datetime import datetime
from typing import Literal, Optional
from sqlalchemy import DateTime, Index, text
from sqlmodel import Field, SQLModel

Provider = Literal["openai", "gemini", "mistral", "anthropic"]


class ApiConfig(SQLModel, table=True):
    __tablename__ = "api_configs"
    __table_args__ = (
        # At most one active key per provider
        Index(
            "uq_api_configs_active_provider",
            "provider",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    provider: str = Field(max_length=50, nullable=False)
    api_key: str = Field(nullable=False)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime(timezone=False))


class ApiConfigCreate(SQLModel):
    provider: Provider
    api_key: str = Field(min_length=1)
    is_active: bool = True


class ApiConfigUpdate(SQLModel):
    api_key: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


def mask_api_key(api_key: str) -> str:
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:3]}...{api_key[-4:]}"


class ApiConfigRead(SQLModel):
    id: int
    provider: str
    api_key: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_config(cls, config: ApiConfig) -> "ApiConfigRead":
        return cls(
            id=config.id,
            provider=config.provider,
            api_key=mask_api_key(config.api_key),
            is_active=config.is_active,
            created_at=config.created_at,
            updated_at=config.updated_at,
        )
