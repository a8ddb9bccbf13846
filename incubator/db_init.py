"""
Database initialization utilities
"""
import asyncio
from typing import Optional

from incubator.config import get_settings
from incubator.logging_config import logger
from incubator.services import CatalogService
from incubator.storage import DatabaseManager, DatabaseStorage


def _build_storage(database_url: Optional[str] = None) -> DatabaseStorage:
    settings = get_settings()
    return DatabaseStorage(DatabaseManager(database_url or settings.DATABASE_URL, echo=settings.DATABASE_ECHO))


async def init_database(database_url: Optional[str] = None, seed: bool = True) -> int:
    """Create all tables and optionally seed the generic questions.

    Returns the number of questions seeded.
    """
    storage = _build_storage(database_url)
    try:
        logger.info("Initializing database...")
        await storage.initialize()

        seeded = 0
        if seed:
            seeded = await CatalogService(storage).seed_default_questions()

        logger.info(f"Database initialization completed successfully ({seeded} questions seeded)")
        return seeded

    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise
    finally:
        await storage.close()


async def check_database_health(database_url: Optional[str] = None) -> bool:
    """Check database connectivity"""
    storage = _build_storage(database_url)
    try:
        logger.info("Checking database health...")
        await storage.initialize()

        is_healthy = await storage.health_check()
        if is_healthy:
            logger.info("Database health check passed")
        else:
            logger.error("Database health check failed")

        return is_healthy

    except Exception as e:
        logger.error(f"Database health check error: {str(e)}")
        return False
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(init_database())
