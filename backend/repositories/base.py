from __future__ import annotations

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common session helpers.

    No commits are performed here - commit responsibility is left to the
    session owner (DatabaseManager.session or the request dependency).
    """

    model: Type[T]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity to the session (not committed)."""
        self.session.add(entity)
        return entity

    async def get_by_id(self, id_value: str | int) -> Optional[T]:
        """Get an entity of this repository's model by primary key."""
        return await self.session.get(self.model, id_value)
