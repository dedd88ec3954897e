"""Ticket submission repository: live ticket/marker state per participant."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.ticket_submission import TicketSubmission
from .base import BaseRepository

logger = logging.getLogger(__name__)


class TicketSubmissionRepository(BaseRepository[TicketSubmission]):
    model = TicketSubmission

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_ticket(self, competition_id: str, ticket_id: str) -> Optional[TicketSubmission]:
        stmt = select(TicketSubmission).where(
            TicketSubmission.competition_id == competition_id,
            TicketSubmission.ticket_id == ticket_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def record(
        self,
        competition_id: str,
        participant_id: str,
        ticket_id: str,
        ticket_number: int,
        markers: Sequence[Dict[str, Any]],
    ) -> TicketSubmission:
        """Store the markers placed on a ticket, replacing any earlier submission."""
        markers_json = json.dumps(list(markers))
        now = datetime.now(timezone.utc)
        existing = await self.get_by_ticket(competition_id, ticket_id)
        if existing is not None:
            existing.participant_id = participant_id
            existing.ticket_number = ticket_number
            existing.markers_json = markers_json
            existing.submitted_at_utc = now
            self.session.add(existing)
            return existing
        row = TicketSubmission(
            competition_id=competition_id,
            participant_id=participant_id,
            ticket_id=ticket_id,
            ticket_number=ticket_number,
            markers_json=markers_json,
            submitted_at_utc=now,
        )
        await self.add(row)
        return row

    async def list_by_participant(self, competition_id: str, participant_id: str) -> List[TicketSubmission]:
        stmt = (
            select(TicketSubmission)
            .where(
                TicketSubmission.competition_id == competition_id,
                TicketSubmission.participant_id == participant_id,
            )
            .order_by(TicketSubmission.ticket_number, TicketSubmission.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_documents_by_participant(
        self, competition_id: str, participant_id: str
    ) -> List[Dict[str, Any]]:
        """Submissions as {ticketId, ticketNumber, markers}; unreadable marker JSON becomes []."""
        documents: List[Dict[str, Any]] = []
        for row in await self.list_by_participant(competition_id, participant_id):
            try:
                markers = json.loads(row.markers_json) if row.markers_json else []
            except (json.JSONDecodeError, TypeError):
                logger.warning("Unreadable markers for ticket %s; treating as empty", row.ticket_id)
                markers = []
            documents.append(
                {
                    "ticketId": row.ticket_id,
                    "ticketNumber": row.ticket_number,
                    "markers": markers if isinstance(markers, list) else [],
                }
            )
        return documents
