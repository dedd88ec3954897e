"""
Participant aggregation: reconcile checkout summaries with ticket submissions and
turn every ticket that has a valid marker into a scored candidate.

Merge policy:
- Checkout summaries enumerate participants (one record per summary, duplicates kept).
- A summary ticket whose markers normalize to nothing takes its markers from the
  participant's ticket submission with the same ticket number.
- Submission tickets whose number is absent from the summary are appended after
  the summary tickets.
- Ticket identity: explicit ticket id from the summary, else the matching
  submission's ticketId, else '<participantId>:<ticketNumber>' ('#<summaryIndex>'
  stands in for a missing participant id).
- Tickets without a usable number take the first free number at or after
  their position.

Bad identity fields become empty strings; one malformed record never aborts the run.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .markers import marker_id_prefix, normalize_markers
from .scoring import score_ticket
from .types import JudgeCoordinate, ParticipantRecord, ScoredTicket, Ticket

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """Identity field as a string; anything unusable becomes ''."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _explicit_ticket_number(value: Any) -> Optional[int]:
    """Positive integer ticket number, or None when the value is unusable."""
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != number:
        return None
    return number if number > 0 else None


def _assign_ticket_numbers(values: Sequence[Any]) -> List[int]:
    """
    Ticket number per entry. Explicit numbers are kept; a missing or invalid
    one becomes the first number >= its 1-based position that no other entry uses.
    """
    explicit = [_explicit_ticket_number(value) for value in values]
    taken = {number for number in explicit if number is not None}
    numbers: List[int] = []
    for position, number in enumerate(explicit, start=1):
        if number is None:
            number = position
            while number in taken:
                number += 1
            taken.add(number)
        numbers.append(number)
    return numbers


def summary_participant_id(summary: Any) -> str:
    """participantId of a raw checkout summary, falling back to participant.id; '' if neither."""
    document = _as_dict(summary)
    return _text(document.get("participantId")) or _text(_as_dict(document.get("participant")).get("id"))


def ticket_owner_key(participant_id: str, summary_index: int) -> str:
    """Owner part of synthesized ids; '#<summaryIndex>' when the participant id is missing."""
    return participant_id or f"#{summary_index}"


def synthesized_ticket_id(owner: str, ticket_number: int) -> str:
    return f"{owner}:{ticket_number}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _index_submissions(submissions: Sequence[Any]) -> Dict[int, Dict[str, Any]]:
    """Map ticket number -> submission; first submission per number wins."""
    documents = [_as_dict(raw) for raw in submissions or ()]
    numbers = _assign_ticket_numbers([document.get("ticketNumber") for document in documents])
    by_number: Dict[int, Dict[str, Any]] = {}
    for number, submission in zip(numbers, documents):
        if submission:
            by_number.setdefault(number, submission)
    return by_number


def _reconcile_one(
    summary: Dict[str, Any],
    submissions: Sequence[Any],
    summary_index: int,
) -> ParticipantRecord:
    participant = _as_dict(summary.get("participant"))
    participant_id = summary_participant_id(summary)
    name = _text(participant.get("name"))
    phone = _text(participant.get("phone"))
    if not participant_id or not name:
        logger.warning(
            "Checkout summary #%d with incomplete participant identity (participant_id=%r)",
            summary_index,
            participant_id,
        )
    user_id: Optional[str] = _text(summary.get("userId")) or participant_id or None
    owner = ticket_owner_key(participant_id, summary_index)

    by_number = _index_submissions(submissions)
    tickets: List[Ticket] = []

    raw_tickets = summary.get("tickets")
    if not isinstance(raw_tickets, list):
        raw_tickets = []
    raw_tickets = [_as_dict(raw) for raw in raw_tickets]
    numbers = _assign_ticket_numbers([raw.get("ticketNumber") for raw in raw_tickets])
    for number, raw_ticket in zip(numbers, raw_tickets):
        submission = by_number.get(number)
        prefix = marker_id_prefix(owner, number)

        markers = normalize_markers(raw_ticket.get("markers"), prefix)
        if not markers and submission is not None:
            markers = normalize_markers(submission.get("markers"), prefix)

        ticket_id = _text(raw_ticket.get("ticketId")) or _text(raw_ticket.get("id"))
        if not ticket_id and submission is not None:
            ticket_id = _text(submission.get("ticketId"))
        if not ticket_id:
            ticket_id = synthesized_ticket_id(owner, number)
        tickets.append(Ticket(ticket_id=ticket_id, ticket_number=number, markers=tuple(markers)))

    seen_numbers = set(numbers)
    for number, submission in by_number.items():
        if number in seen_numbers:
            continue
        markers = normalize_markers(submission.get("markers"), marker_id_prefix(owner, number))
        ticket_id = _text(submission.get("ticketId")) or synthesized_ticket_id(owner, number)
        tickets.append(Ticket(ticket_id=ticket_id, ticket_number=number, markers=tuple(markers)))

    return ParticipantRecord(
        participant_id=participant_id,
        user_id=user_id,
        name=name,
        phone=phone,
        tickets=tuple(tickets),
    )


def reconcile_participants(
    checkout_summaries: Sequence[Any],
    submissions_by_participant: Mapping[str, Sequence[Any]],
) -> List[ParticipantRecord]:
    """
    Build one ParticipantRecord per checkout summary.

    Pure: neither input is mutated. submissions_by_participant is keyed by
    participant id; missing keys mean no fallback data.
    """
    records: List[ParticipantRecord] = []
    for summary_index, raw in enumerate(checkout_summaries or (), start=1):
        summary = _as_dict(raw)
        participant_id = summary_participant_id(summary)
        submissions = (submissions_by_participant.get(participant_id) if participant_id else None) or ()
        records.append(_reconcile_one(summary, submissions, summary_index))
    return records


def build_candidates(
    participants: Sequence[ParticipantRecord],
    judge: JudgeCoordinate,
) -> List[ScoredTicket]:
    """One ScoredTicket per ticket with at least one marker, in participant/ticket order."""
    candidates: List[ScoredTicket] = []
    for participant in participants:
        for ticket in participant.tickets:
            if not ticket.markers:
                logger.debug(
                    "Skipping ticket %s of participant %s: no valid markers",
                    ticket.ticket_id,
                    participant.participant_id,
                )
                continue
            marker, distance = score_ticket(ticket.markers, judge)
            candidates.append(
                ScoredTicket(
                    ticket_id=ticket.ticket_id,
                    ticket_number=ticket.ticket_number,
                    participant_id=participant.participant_id,
                    user_id=participant.user_id,
                    participant_name=participant.name,
                    participant_phone=participant.phone,
                    distance=distance,
                    marker=marker,
                )
            )
    return candidates
