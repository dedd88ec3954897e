"""Winner engine: marker normalization, ticket scoring, participant aggregation, ranking."""

from .aggregation import build_candidates, reconcile_participants
from .engine import compute_winners
from .errors import (
    CompetitionNotFoundError,
    CoordinateNotSetError,
    InvalidCoordinateError,
    ResultStorageError,
    WinnerComputationError,
)
from .markers import normalize_markers
from .ranking import MAX_WINNERS, rank_winners
from .scoring import marker_distance, score_ticket
from .types import (
    CompetitionResult,
    JudgeCoordinate,
    Marker,
    ParticipantRecord,
    ScoredTicket,
    Ticket,
)

__all__ = [
    "MAX_WINNERS",
    "CompetitionNotFoundError",
    "CompetitionResult",
    "CoordinateNotSetError",
    "InvalidCoordinateError",
    "JudgeCoordinate",
    "Marker",
    "ParticipantRecord",
    "ResultStorageError",
    "ScoredTicket",
    "Ticket",
    "WinnerComputationError",
    "build_candidates",
    "compute_winners",
    "marker_distance",
    "normalize_markers",
    "rank_winners",
    "reconcile_participants",
    "score_ticket",
]
