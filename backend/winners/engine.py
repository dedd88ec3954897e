"""
Pure winner computation: source documents + judge coordinate -> CompetitionResult.

No I/O and no mutation of inputs; persistence is the service layer's job.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from .aggregation import build_candidates, reconcile_participants
from .ranking import MAX_WINNERS, rank_winners
from .types import CompetitionResult, JudgeCoordinate

logger = logging.getLogger(__name__)


def compute_winners(
    competition_id: str,
    judge: JudgeCoordinate,
    checkout_summaries: Sequence[Any],
    submissions_by_participant: Mapping[str, Sequence[Any]],
    *,
    limit: int = MAX_WINNERS,
    computed_at: Optional[datetime] = None,
) -> CompetitionResult:
    """Reconcile, score and rank; an empty input yields a result with no winners."""
    participants = reconcile_participants(checkout_summaries, submissions_by_participant)
    candidates = build_candidates(participants, judge)
    winners = rank_winners(candidates, limit=limit)
    logger.info(
        "Computed winners for competition_id=%s: participants=%d candidates=%d winners=%d",
        competition_id,
        len(participants),
        len(candidates),
        len(winners),
    )
    return CompetitionResult(
        competition_id=competition_id,
        final_judge_x=judge.x,
        final_judge_y=judge.y,
        winners=winners,
        computed_at=computed_at or datetime.now(timezone.utc),
    )
