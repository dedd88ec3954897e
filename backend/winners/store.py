"""
Collaborator interfaces of the winner engine.

Any backend satisfying these protocols can feed and persist computations; the
SQLAlchemy repositories are the default implementation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .types import CompetitionResult, JudgeCoordinate


class WinnerSources(Protocol):
    """Read-only queries against the two submission stores and the competition."""

    async def get_checkout_summaries_by_competition(
        self, competition_id: str
    ) -> List[Dict[str, Any]]:
        """Raw checkout-summary documents for the competition."""
        ...

    async def get_ticket_submissions_by_participant(
        self, competition_id: str, participant_id: str
    ) -> List[Dict[str, Any]]:
        """Raw {ticketId, ticketNumber, markers} documents for one participant."""
        ...

    async def get_final_judge_coordinate(
        self, competition_id: str
    ) -> Optional[JudgeCoordinate]:
        """Final judge coordinate, or None when not set."""
        ...


class CompetitionResultStore(Protocol):
    """Keyed by competition id; upsert replaces the whole result."""

    async def get(self, competition_id: str) -> Optional[CompetitionResult]:
        ...

    async def upsert(self, result: CompetitionResult) -> CompetitionResult:
        ...
