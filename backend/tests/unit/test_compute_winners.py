"""Pure winner computation end to end, plus the result payload shape."""

from __future__ import annotations

import math
import sys
from datetime import datetime, timezone
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from winners.engine import compute_winners
from winners.types import CompetitionResult, JudgeCoordinate, Marker, ScoredTicket

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def _summary(participant_id, name, tickets):
    return {
        "participantId": participant_id,
        "participant": {"id": participant_id, "name": name, "phone": f"04{participant_id}"},
        "tickets": tickets,
    }


def _three_participants():
    return [
        _summary("A", "Alice", [{"ticketNumber": 1, "markers": [{"id": "a1", "x": 0.5, "y": 0.51}]}]),
        _summary("B", "Bob", [{"ticketNumber": 1, "markers": [{"id": "b1", "x": 0.6, "y": 0.6}]}]),
        _summary("C", "Cara", [{"ticketNumber": 1, "markers": []}]),
    ]


def test_concrete_scenario_ranks_t1_then_t2():
    submissions = {
        "A": [{"ticketId": "T1", "ticketNumber": 1, "markers": []}],
        "B": [{"ticketId": "T2", "ticketNumber": 1, "markers": []}],
        "C": [{"ticketId": "T3", "ticketNumber": 1, "markers": []}],
    }
    result = compute_winners(
        "comp-1", JudgeCoordinate(0.5, 0.5), _three_participants(), submissions, computed_at=FIXED_NOW
    )
    payload = result.to_dict()
    assert [w["ticketId"] for w in payload["winners"]] == ["T1", "T2"]
    assert payload["winners"][0]["distance"] == 0.01
    assert payload["winners"][1]["distance"] == 0.141421
    assert payload["finalJudgeX"] == 0.5 and payload["finalJudgeY"] == 0.5
    assert payload["computedAt"] == "2025-06-01T12:00:00+00:00"


def test_full_precision_kept_on_result():
    result = compute_winners("comp-1", JudgeCoordinate(0.5, 0.5), _three_participants(), {})
    assert [w.ticket_id for w in result.winners] == ["A:1", "B:1"]
    assert abs(result.winners[1].distance - math.sqrt(0.02)) < 1e-12
    assert result.winners[1].distance != round(result.winners[1].distance, 6)


def test_no_summaries_gives_empty_winners():
    result = compute_winners("comp-empty", JudgeCoordinate(0.2, 0.8), [], {})
    assert result.winners == []
    payload = result.to_dict()
    assert payload["winners"] == []
    assert payload["finalJudgeX"] == 0.2 and payload["finalJudgeY"] == 0.8
    assert datetime.fromisoformat(payload["computedAt"]).tzinfo is not None


def test_recompute_is_deterministic():
    args = ("comp-1", JudgeCoordinate(0.5, 0.5), _three_participants(), {})
    first = compute_winners(*args)
    second = compute_winners(*args)
    assert first.winners == second.winners


def test_winner_payload_keys():
    result = compute_winners("comp-1", JudgeCoordinate(0.5, 0.5), _three_participants(), {}, computed_at=FIXED_NOW)
    winner = result.to_dict()["winners"][0]
    assert set(winner) == {
        "ticketId",
        "ticketNumber",
        "participantId",
        "userId",
        "participantName",
        "participantPhone",
        "distance",
        "marker",
    }
    assert winner["marker"] == {"id": "a1", "x": 0.5, "y": 0.51}
    assert winner["userId"] == "A"
    assert winner["participantName"] == "Alice"


def test_scored_ticket_storage_round_trip_keeps_precision():
    ticket = ScoredTicket(
        ticket_id="T1",
        ticket_number=3,
        participant_id="p",
        user_id=None,
        participant_name="n",
        participant_phone="0",
        distance=0.123456789,
        marker=None,
    )
    stored = ticket.to_dict(rounded=False)
    assert stored["distance"] == 0.123456789
    assert stored["marker"] is None
    assert ScoredTicket.from_dict(stored) == ticket
    assert ticket.to_dict()["distance"] == 0.123457


def test_non_finite_distance_serializes_as_none():
    ticket = ScoredTicket("T", 1, "p", None, "n", "0", math.inf, Marker("m", 0.1, 0.1))
    assert ticket.to_dict()["distance"] is None


def test_naive_computed_at_rendered_as_utc():
    result = CompetitionResult("c", 0.1, 0.1, [], datetime(2025, 1, 1, 0, 0, 0))
    assert result.to_dict()["computedAt"] == "2025-01-01T00:00:00+00:00"
