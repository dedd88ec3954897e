"""Participant aggregation: summary/submission reconciliation and candidate building."""

from __future__ import annotations

import copy
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from winners.aggregation import build_candidates, reconcile_participants
from winners.engine import compute_winners
from winners.ranking import rank_winners
from winners.types import JudgeCoordinate


def _summary(participant_id, tickets, name="Ann", phone="0400000000", user_id=None):
    doc = {
        "participantId": participant_id,
        "participant": {"id": participant_id, "name": name, "phone": phone},
        "tickets": tickets,
    }
    if user_id is not None:
        doc["userId"] = user_id
    return doc


def test_summary_markers_used_when_present():
    summaries = [
        _summary("p1", [{"ticketNumber": 1, "markers": [{"id": "s1", "x": 0.1, "y": 0.1, "label": "M1"}]}])
    ]
    submissions = {"p1": [{"ticketId": "t-1", "ticketNumber": 1, "markers": [{"id": "live", "x": 0.9, "y": 0.9}]}]}
    [record] = reconcile_participants(summaries, submissions)
    [ticket] = record.tickets
    assert [m.id for m in ticket.markers] == ["s1"]
    # Ticket id comes from the submission with the same number.
    assert ticket.ticket_id == "t-1"
    assert ticket.ticket_number == 1


def test_empty_summary_markers_fall_back_to_submission():
    summaries = [_summary("p1", [{"ticketNumber": 2, "markers": []}])]
    submissions = {"p1": [{"ticketId": "t-2", "ticketNumber": 2, "markers": [{"id": "live", "x": 0.4, "y": 0.4}]}]}
    [record] = reconcile_participants(summaries, submissions)
    assert [m.id for m in record.tickets[0].markers] == ["live"]


def test_all_invalid_summary_markers_fall_back_to_submission():
    summaries = [_summary("p1", [{"ticketNumber": 1, "markers": [{"id": "bad", "x": "NaN", "y": 0.1}]}])]
    submissions = {"p1": [{"ticketId": "t-1", "ticketNumber": 1, "markers": [{"x": 0.3, "y": 0.3}]}]}
    [record] = reconcile_participants(summaries, submissions)
    assert [m.id for m in record.tickets[0].markers] == ["p1:1-marker-1"]


def test_ticket_id_synthesized_without_submission():
    summaries = [_summary("p9", [{"ticketNumber": 4, "markers": [{"x": 0.5, "y": 0.5}]}])]
    [record] = reconcile_participants(summaries, {})
    assert record.tickets[0].ticket_id == "p9:4"


def test_submission_only_tickets_are_appended():
    summaries = [_summary("p1", [{"ticketNumber": 1, "markers": [{"id": "a", "x": 0.1, "y": 0.1}]}])]
    submissions = {
        "p1": [
            {"ticketId": "t-1", "ticketNumber": 1, "markers": []},
            {"ticketId": "t-2", "ticketNumber": 2, "markers": [{"id": "b", "x": 0.2, "y": 0.2}]},
        ]
    }
    [record] = reconcile_participants(summaries, submissions)
    assert [t.ticket_id for t in record.tickets] == ["t-1", "t-2"]


def test_empty_summary_document_uses_submissions():
    """Participants only marked complete have an empty summary document."""
    summaries = [{"participantId": "p3"}]
    submissions = {"p3": [{"ticketId": "t-9", "ticketNumber": 1, "markers": [{"id": "z", "x": 0.6, "y": 0.6}]}]}
    [record] = reconcile_participants(summaries, submissions)
    assert record.name == "" and record.phone == ""
    assert [t.ticket_id for t in record.tickets] == ["t-9"]


def test_submissions_of_participants_without_summary_are_ignored():
    summaries = [_summary("p1", [])]
    submissions = {"ghost": [{"ticketId": "t-x", "ticketNumber": 1, "markers": [{"x": 0.5, "y": 0.5}]}]}
    [record] = reconcile_participants(summaries, submissions)
    assert record.tickets == ()


def test_user_id_defaults_to_participant_id():
    records = reconcile_participants(
        [_summary("p1", []), _summary("p2", [], user_id="u-2")], {}
    )
    assert records[0].user_id == "p1"
    assert records[1].user_id == "u-2"


def test_malformed_identity_becomes_empty_strings():
    summaries = [
        {"participant": {"id": None, "name": ["x"], "phone": 12345}, "tickets": [{"ticketNumber": 1, "markers": [{"x": 0.5, "y": 0.5}]}]},
        "garbage",
        _summary("p2", [{"ticketNumber": 1, "markers": [{"x": 0.2, "y": 0.2}]}]),
    ]
    records = reconcile_participants(summaries, {})
    assert len(records) == 3
    assert records[0].participant_id == ""
    assert records[0].name == ""
    assert records[0].phone == "12345"
    assert records[0].user_id is None
    assert records[1].tickets == ()
    assert records[2].participant_id == "p2"


def test_missing_ticket_number_uses_position():
    summaries = [_summary("p1", [{"markers": [{"x": 0.1, "y": 0.1}]}, {"ticketNumber": "x", "markers": []}])]
    [record] = reconcile_participants(summaries, {})
    assert [t.ticket_number for t in record.tickets] == [1, 2]


def test_inputs_not_mutated():
    summaries = [_summary("p1", [{"ticketNumber": 1, "markers": []}])]
    submissions = {"p1": [{"ticketId": "t-1", "ticketNumber": 1, "markers": [{"x": 0.4, "y": 0.4}]}]}
    before = (copy.deepcopy(summaries), copy.deepcopy(submissions))
    reconcile_participants(summaries, submissions)
    assert (summaries, submissions) == before


def test_build_candidates_skips_tickets_without_markers():
    summaries = [
        _summary("A", [{"ticketNumber": 1, "markers": [{"id": "a1", "x": 0.5, "y": 0.51}]}], name="Alice", phone="1"),
        _summary("C", [{"ticketNumber": 1, "markers": []}], name="Cara", phone="3"),
    ]
    participants = reconcile_participants(summaries, {})
    candidates = build_candidates(participants, JudgeCoordinate(0.5, 0.5))
    assert len(candidates) == 1
    c = candidates[0]
    assert c.ticket_id == "A:1"
    assert c.participant_id == "A"
    assert c.user_id == "A"
    assert c.participant_name == "Alice"
    assert c.participant_phone == "1"
    assert c.marker is not None and c.marker.id == "a1"
    assert c.distance == pytest.approx(0.01, abs=1e-12)


def test_build_candidates_empty():
    assert build_candidates([], JudgeCoordinate(0.5, 0.5)) == []


def test_participants_without_ids_keep_distinct_tickets():
    summaries = [
        {"participant": {"name": "Ann"}, "tickets": [{"ticketNumber": 1, "markers": [{"x": 0.5, "y": 0.5}]}]},
        {"participant": {"name": "Ben"}, "tickets": [{"ticketNumber": 1, "markers": [{"x": 0.6, "y": 0.6}]}]},
    ]
    result = compute_winners("c1", JudgeCoordinate(0.5, 0.5), summaries, {})
    assert [(w.ticket_id, w.participant_name) for w in result.winners] == [("#1:1", "Ann"), ("#2:1", "Ben")]
    assert [w.participant_id for w in result.winners] == ["", ""]


def test_unnumbered_ticket_skips_numbers_already_used():
    summaries = [
        _summary(
            "p1",
            [
                {"ticketNumber": 2, "markers": [{"x": 0.1, "y": 0.1}]},
                {"markers": [{"x": 0.2, "y": 0.2}]},
                {"markers": [{"x": 0.3, "y": 0.3}]},
            ],
        )
    ]
    [record] = reconcile_participants(summaries, {})
    assert [t.ticket_number for t in record.tickets] == [2, 3, 4]
    assert [t.ticket_id for t in record.tickets] == ["p1:2", "p1:3", "p1:4"]

    candidates = build_candidates([record], JudgeCoordinate(0.0, 0.0))
    assert len(rank_winners(candidates, limit=3)) == 3
