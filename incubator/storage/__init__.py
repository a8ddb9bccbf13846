# Persistence backends package
from incubator.config import Settings
from incubator.logging_config import logger
from .base import Storage
from .memory import MemStorage
from .database import DatabaseManager, DatabaseStorage


def build_storage(settings: Settings) -> Storage:
    """Construct the backend selected by configuration"""
    if settings.storage_backend == "database":
        logger.info("Using relational storage backend")
        return DatabaseStorage(DatabaseManager(settings.DATABASE_URL, echo=settings.DATABASE_ECHO))
    logger.info("Using in-memory storage backend")
    return MemStorage()


__all__ = [
    "Storage",
    "MemStorage",
    "DatabaseManager",
    "DatabaseStorage",
    "build_storage",
]
