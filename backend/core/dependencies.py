from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from .config import Settings, get_settings
from .database import get_database_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager.

    The session commits when the request handler returns and rolls back if it raises.
    """
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def get_app_settings() -> Settings:
    """FastAPI dependency returning the cached application settings."""
    return get_settings()
