"""SQLAlchemy models for competitions, the two submission sources and computed results.

Models define the schema only; reconciliation and ranking live in ``winners``.
"""

from .base import Base
from .checkout_summary import CheckoutSummary
from .competition import Competition
from .competition_result import CompetitionResultRecord
from .ticket_submission import TicketSubmission

__all__ = [
    "Base",
    "CheckoutSummary",
    "Competition",
    "CompetitionResultRecord",
    "TicketSubmission",
]
