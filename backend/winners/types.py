"""
Typed values flowing through the winner engine.

Raw source documents (checkout summaries, ticket submissions) are plain dicts;
everything past marker normalization is one of the closed dataclasses below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

# Distances are rounded to this many decimals when leaving the service.
DISTANCE_DECIMALS = 6


@dataclass(frozen=True)
class Marker:
    """One placed point, both coordinates finite and within [0, 1]."""

    id: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class JudgeCoordinate:
    """Final judged (x, y) for a competition."""

    x: float
    y: float


@dataclass(frozen=True)
class Ticket:
    """A participant's entry unit. ticket_id is always populated after reconciliation."""

    ticket_id: str
    ticket_number: int
    markers: Tuple[Marker, ...] = ()


@dataclass(frozen=True)
class ParticipantRecord:
    """Reconciled view of one participant; rebuilt on every computation."""

    participant_id: str
    user_id: Optional[str]
    name: str
    phone: str
    tickets: Tuple[Ticket, ...] = ()


@dataclass(frozen=True)
class ScoredTicket:
    """A ticket's best marker and its distance to the final judge coordinate."""

    ticket_id: str
    ticket_number: int
    participant_id: str
    user_id: Optional[str]
    participant_name: str
    participant_phone: str
    distance: float
    marker: Optional[Marker]

    def to_dict(self, *, rounded: bool = True) -> Dict[str, Any]:
        """
        Serialize with the camelCase keys of the result payload.

        rounded=True rounds distance to DISTANCE_DECIMALS (API boundary);
        rounded=False keeps full precision (storage). Non-finite distances become None.
        """
        distance: Optional[float] = self.distance
        if distance is None or not math.isfinite(distance):
            distance = None
        elif rounded:
            distance = round(distance, DISTANCE_DECIMALS)
        return {
            "ticketId": self.ticket_id,
            "ticketNumber": self.ticket_number,
            "participantId": self.participant_id,
            "userId": self.user_id,
            "participantName": self.participant_name,
            "participantPhone": self.participant_phone,
            "distance": distance,
            "marker": self.marker.to_dict() if self.marker is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoredTicket":
        """Rebuild from a stored winner dict (inverse of to_dict(rounded=False))."""
        raw_marker = data.get("marker")
        marker = None
        if isinstance(raw_marker, dict):
            marker = Marker(
                id=str(raw_marker.get("id", "")),
                x=float(raw_marker.get("x", 0.0)),
                y=float(raw_marker.get("y", 0.0)),
            )
        raw_distance = data.get("distance")
        user_id = data.get("userId")
        return cls(
            ticket_id=str(data.get("ticketId", "")),
            ticket_number=int(data.get("ticketNumber", 0)),
            participant_id=str(data.get("participantId", "")),
            user_id=str(user_id) if user_id is not None else None,
            participant_name=str(data.get("participantName", "")),
            participant_phone=str(data.get("participantPhone", "")),
            distance=float(raw_distance) if raw_distance is not None else math.inf,
            marker=marker,
        )


@dataclass
class CompetitionResult:
    """Outcome of one computation run; replaced wholesale on recompute."""

    competition_id: str
    final_judge_x: float
    final_judge_y: float
    winners: List[ScoredTicket] = field(default_factory=list)
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready payload: ISO-8601 computedAt, distances rounded to 6 decimals."""
        computed_at = self.computed_at
        if computed_at.tzinfo is None:
            computed_at = computed_at.replace(tzinfo=timezone.utc)
        return {
            "competitionId": self.competition_id,
            "finalJudgeX": self.final_judge_x,
            "finalJudgeY": self.final_judge_y,
            "computedAt": computed_at.isoformat(),
            "winners": [w.to_dict(rounded=True) for w in self.winners],
        }
