from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.competition import Competition
from .base import BaseRepository


class CompetitionRepository(BaseRepository[Competition]):
    """Repository for Competition entities."""

    model = Competition

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def create(self, competition: Competition) -> Competition:
        await self.add(competition)
        return competition

    async def set_final_judge_coordinate(
        self, competition_id: str, x: float, y: float
    ) -> Optional[Competition]:
        """Overwrite the final judge coordinate; None if the competition does not exist."""
        competition = await self.get_by_id(competition_id)
        if competition is None:
            return None
        competition.final_judge_x = x
        competition.final_judge_y = y
        self.session.add(competition)
        return competition
