"""Winner ranking: stable sort by distance, dedup by ticket id, top-N cut."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .types import ScoredTicket

logger = logging.getLogger(__name__)

MAX_WINNERS = 3


def rank_winners(candidates: Sequence[ScoredTicket], limit: int = MAX_WINNERS) -> List[ScoredTicket]:
    """
    Return at most `limit` winners ordered by ascending distance.

    The sort is stable on full-precision distances, so equal distances keep
    candidate order. A ticket id seen earlier in the sorted walk shadows later
    duplicates. An empty candidate list gives [].
    """
    if limit < 1:
        return []

    ordered = sorted(candidates, key=lambda c: c.distance)
    winners: List[ScoredTicket] = []
    seen_ticket_ids = set()
    for candidate in ordered:
        if candidate.ticket_id in seen_ticket_ids:
            logger.debug("Dropping duplicate candidate for ticket %s", candidate.ticket_id)
            continue
        seen_ticket_ids.add(candidate.ticket_id)
        winners.append(candidate)
        if len(winners) >= limit:
            break
    return winners
