"""Repository layer for DB access only (CRUD + simple queries).

Repositories accept an AsyncSession explicitly and never commit.
"""

from .base import BaseRepository
from .checkout_summary_repo import CheckoutSummaryRepository
from .competition_repo import CompetitionRepository
from .competition_result_repo import CompetitionResultRepository
from .ticket_submission_repo import TicketSubmissionRepository

__all__ = [
    "BaseRepository",
    "CheckoutSummaryRepository",
    "CompetitionRepository",
    "CompetitionResultRepository",
    "TicketSubmissionRepository",
]
