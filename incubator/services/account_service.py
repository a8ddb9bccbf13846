"""
User registration, credential checks and per-user settings
"""
from typing import Optional

import bcrypt

from incubator.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from incubator.logging_config import logger
from incubator.models import User, UserCreate, UserSettings, UserSettingsUpdate
from incubator.models.user import MAX_PASSWORD_BYTES
from incubator.storage import Storage


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


class AccountService:
    """Accounts and the settings row created alongside each one"""

    def __init__(self, storage: Storage, app_version: str = "1.0.0"):
        self.storage = storage
        self.app_version = app_version

    async def register(self, payload: UserCreate) -> User:
        """
        Create a user with default settings

        Raises:
            ConflictError: if the username is taken
        """
        async with self.storage.transaction():
            if await self.storage.get_user_by_username(payload.username) is not None:
                raise ConflictError("Username already exists")

            user = await self.storage.create_user(User(
                username=payload.username,
                password_hash=hash_password(payload.password),
                email=payload.email or "",
            ))
            await self.storage.create_settings(UserSettings(user_id=user.id, version=self.app_version))

        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, username: Optional[str], password: Optional[str]) -> User:
        if not username or not password:
            raise ValidationError("Username and password are required")

        # No stored hash can match input past the bcrypt limit
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise AuthenticationError("Invalid username or password")

        user = await self.storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt", extra={'username': username})
            raise AuthenticationError("Invalid username or password")
        return user

    async def get_settings(self, user_id: int) -> UserSettings:
        user_settings = await self.storage.get_settings(user_id)
        if user_settings is None:
            raise NotFoundError("Settings for user", user_id)
        return user_settings

    async def update_settings(self, user_id: int, patch: UserSettingsUpdate) -> UserSettings:
        return await self.storage.update_settings(
            user_id, patch.model_dump(exclude_unset=True, exclude_none=True)
        )
