"""Competition result repository; implements the CompetitionResultStore protocol."""

from __future__ import annotations

import json
import logging
from datetime import timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.competition_result import CompetitionResultRecord
from winners.types import CompetitionResult, ScoredTicket
from .base import BaseRepository

logger = logging.getLogger(__name__)


class CompetitionResultRepository(BaseRepository[CompetitionResultRecord]):
    model = CompetitionResultRecord

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get(self, competition_id: str) -> Optional[CompetitionResult]:
        """Stored result for the competition, or None if never computed."""
        record = await self.get_by_id(competition_id)
        if record is None:
            return None
        winners = json.loads(record.winners_json) if record.winners_json else []
        computed_at = record.computed_at_utc
        if computed_at.tzinfo is None:
            computed_at = computed_at.replace(tzinfo=timezone.utc)
        return CompetitionResult(
            competition_id=record.competition_id,
            final_judge_x=record.final_judge_x,
            final_judge_y=record.final_judge_y,
            winners=[ScoredTicket.from_dict(w) for w in winners if isinstance(w, dict)],
            computed_at=computed_at,
        )

    async def upsert(self, result: CompetitionResult) -> CompetitionResult:
        """Replace every column of the competition's result row (insert if missing)."""
        winners_json = json.dumps([w.to_dict(rounded=False) for w in result.winners])
        record = await self.get_by_id(result.competition_id)
        if record is None:
            record = CompetitionResultRecord(competition_id=result.competition_id)
        record.final_judge_x = result.final_judge_x
        record.final_judge_y = result.final_judge_y
        record.winners_json = winners_json
        record.computed_at_utc = result.computed_at
        await self.add(record)
        logger.info(
            "Upserted result for competition_id=%s (%d winners)",
            result.competition_id,
            len(result.winners),
        )
        return result
