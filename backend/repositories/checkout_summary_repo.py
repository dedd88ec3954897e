"""Checkout summary repository: raw documents keyed by (competition, participant)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.checkout_summary import CheckoutSummary
from .base import BaseRepository

logger = logging.getLogger(__name__)


def _load_document(raw: Optional[str], summary_id: int) -> Dict[str, Any]:
    """Parse summary_json; unreadable or non-object documents become {}."""
    if not raw or not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Unreadable checkout summary document (id=%s); using empty document", summary_id)
        return {}
    return parsed if isinstance(parsed, dict) else {}


class CheckoutSummaryRepository(BaseRepository[CheckoutSummary]):
    model = CheckoutSummary

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get(self, competition_id: str, participant_id: str) -> Optional[CheckoutSummary]:
        stmt = select(CheckoutSummary).where(
            CheckoutSummary.competition_id == competition_id,
            CheckoutSummary.participant_id == participant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        competition_id: str,
        participant_id: str,
        document: Dict[str, Any],
        *,
        user_id: Optional[str] = None,
        completed: bool = False,
        completed_at_utc: Optional[datetime] = None,
    ) -> CheckoutSummary:
        """Insert or replace the summary document for (competition, participant)."""
        summary_json = json.dumps(document, sort_keys=True)
        existing = await self.get(competition_id, participant_id)
        if existing is not None:
            existing.user_id = user_id
            existing.summary_json = summary_json
            existing.completed = completed
            existing.completed_at_utc = completed_at_utc
            self.session.add(existing)
            return existing
        row = CheckoutSummary(
            competition_id=competition_id,
            participant_id=participant_id,
            user_id=user_id,
            summary_json=summary_json,
            completed=completed,
            completed_at_utc=completed_at_utc,
            created_at_utc=datetime.now(timezone.utc),
        )
        await self.add(row)
        return row

    async def list_by_competition(self, competition_id: str) -> List[CheckoutSummary]:
        stmt = (
            select(CheckoutSummary)
            .where(CheckoutSummary.competition_id == competition_id)
            .order_by(CheckoutSummary.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_documents_by_competition(self, competition_id: str) -> List[Dict[str, Any]]:
        """
        Parsed summary documents in insertion order.

        participantId / userId are filled from the row columns when the document lacks them.
        """
        documents: List[Dict[str, Any]] = []
        for row in await self.list_by_competition(competition_id):
            document = _load_document(row.summary_json, row.id)
            document.setdefault("participantId", row.participant_id)
            if row.user_id is not None:
                document.setdefault("userId", row.user_id)
            documents.append(document)
        return documents
