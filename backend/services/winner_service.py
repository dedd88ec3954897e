"""Compute, store and read competition winners (orchestrates the winners engine)."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.competition import Competition
from repositories.checkout_summary_repo import CheckoutSummaryRepository
from repositories.competition_repo import CompetitionRepository
from repositories.competition_result_repo import CompetitionResultRepository
from repositories.ticket_submission_repo import TicketSubmissionRepository
from winners.aggregation import summary_participant_id
from winners.engine import compute_winners
from winners.errors import (
    CompetitionNotFoundError,
    CoordinateNotSetError,
    InvalidCoordinateError,
    ResultStorageError,
)
from winners.ranking import MAX_WINNERS
from winners.store import CompetitionResultStore, WinnerSources
from winners.types import CompetitionResult, JudgeCoordinate

logger = logging.getLogger(__name__)


def validate_coordinate(x: Any, y: Any) -> JudgeCoordinate:
    """Both values must be finite real numbers in [0, 1]."""
    for name, value in (("finalJudgeX", x), ("finalJudgeY", y)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinateError(f"{name} must be a number")
        if not math.isfinite(value) or value < 0 or value > 1:
            raise InvalidCoordinateError(f"{name} must be between 0 and 1")
    return JudgeCoordinate(x=float(x), y=float(y))


def _coordinate_of(competition: Competition) -> Optional[JudgeCoordinate]:
    x, y = competition.final_judge_x, competition.final_judge_y
    if x is None or y is None:
        return None
    return JudgeCoordinate(x=float(x), y=float(y))


class DatabaseWinnerSources:
    """WinnerSources backed by the competition, checkout-summary and submission tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.competitions = CompetitionRepository(session)
        self.summaries = CheckoutSummaryRepository(session)
        self.submissions = TicketSubmissionRepository(session)

    async def get_checkout_summaries_by_competition(self, competition_id: str) -> List[Dict[str, Any]]:
        return await self.summaries.list_documents_by_competition(competition_id)

    async def get_ticket_submissions_by_participant(
        self, competition_id: str, participant_id: str
    ) -> List[Dict[str, Any]]:
        return await self.submissions.list_documents_by_participant(competition_id, participant_id)

    async def get_final_judge_coordinate(self, competition_id: str) -> Optional[JudgeCoordinate]:
        competition = await self.competitions.get_by_id(competition_id)
        if competition is None:
            raise CompetitionNotFoundError(competition_id)
        return _coordinate_of(competition)


class WinnerService:
    """
    compute_and_store: read both sources, rank, upsert (last write wins).
    get_result: pure lookup, no computation.

    Sources and store default to the database; any WinnerSources /
    CompetitionResultStore implementation can be passed instead.
    """

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        *,
        sources: Optional[WinnerSources] = None,
        store: Optional[CompetitionResultStore] = None,
        limit: int = MAX_WINNERS,
    ) -> None:
        if session is None and (sources is None or store is None):
            raise ValueError("WinnerService needs a session unless both sources and store are given")
        self.session = session
        self.sources: WinnerSources = sources or DatabaseWinnerSources(session)
        self.store: CompetitionResultStore = store or CompetitionResultRepository(session)
        self.limit = limit

    async def _collect_submissions(
        self, competition_id: str, summaries: List[Dict[str, Any]]
    ) -> Dict[str, List[Dict[str, Any]]]:
        submissions: Dict[str, List[Dict[str, Any]]] = {}
        for summary in summaries:
            participant_id = summary_participant_id(summary)
            if not participant_id or participant_id in submissions:
                continue
            submissions[participant_id] = await self.sources.get_ticket_submissions_by_participant(
                competition_id, participant_id
            )
        return submissions

    async def compute_and_store(self, competition_id: str) -> CompetitionResult:
        """
        Compute winners and upsert the result keyed by competition id.

        Raises CoordinateNotSetError (nothing computed or written) when the final
        judge coordinate is missing, and ResultStorageError carrying the computed
        result when the write fails.
        """
        judge = await self.sources.get_final_judge_coordinate(competition_id)
        if judge is None:
            logger.warning("Final judge coordinate not set for competition_id=%s", competition_id)
            raise CoordinateNotSetError(competition_id)

        summaries = await self.sources.get_checkout_summaries_by_competition(competition_id)
        logger.info(
            "Computing winners for competition_id=%s from %d checkout summaries",
            competition_id,
            len(summaries),
        )
        submissions = await self._collect_submissions(competition_id, summaries)
        result = compute_winners(
            competition_id,
            judge,
            summaries,
            submissions,
            limit=self.limit,
        )

        try:
            await self.store.upsert(result)
            if self.session is not None:
                await self.session.flush()
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Failed to store result for competition_id=%s", competition_id)
            raise ResultStorageError(competition_id, result=result) from e
        return result

    async def get_result(self, competition_id: str) -> Optional[CompetitionResult]:
        result = await self.store.get(competition_id)
        if result is None:
            logger.info("No stored result for competition_id=%s", competition_id)
        return result


async def set_final_judge_coordinate(
    session: AsyncSession, competition_id: str, x: Any, y: Any
) -> Competition:
    """Validate and overwrite the competition's final judge coordinate."""
    coordinate = validate_coordinate(x, y)
    competition = await CompetitionRepository(session).set_final_judge_coordinate(
        competition_id, coordinate.x, coordinate.y
    )
    if competition is None:
        raise CompetitionNotFoundError(competition_id)
    logger.info(
        "Final judge coordinate set for competition_id=%s: (%.6f, %.6f)",
        competition_id,
        coordinate.x,
        coordinate.y,
    )
    return competition


async def compute_and_store(
    session: AsyncSession, competition_id: str, *, limit: int = MAX_WINNERS
) -> CompetitionResult:
    return await WinnerService(session, limit=limit).compute_and_store(competition_id)


async def get_result(session: AsyncSession, competition_id: str) -> Optional[CompetitionResult]:
    return await WinnerService(session).get_result(competition_id)
