"""Ticket scoring: closest marker to the final judge coordinate."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from .types import JudgeCoordinate, Marker


def marker_distance(marker: Marker, judge: JudgeCoordinate) -> float:
    """Euclidean distance between a marker and the judge coordinate."""
    return math.hypot(marker.x - judge.x, marker.y - judge.y)


def score_ticket(markers: Sequence[Marker], judge: JudgeCoordinate) -> Tuple[Marker, float]:
    """
    Return (closest marker, distance).

    Linear scan with strict '<', so among equidistant markers the first in input
    order wins. Callers skip tickets without markers; an empty sequence raises ValueError.
    """
    if not markers:
        raise ValueError("score_ticket requires at least one marker")

    best = markers[0]
    best_distance = marker_distance(best, judge)
    for marker in markers[1:]:
        distance = marker_distance(marker, judge)
        if distance < best_distance:
            best = marker
            best_distance = distance
    return best, best_distance
