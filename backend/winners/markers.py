"""
Marker normalization: raw marker payloads (either storage shape) -> Marker values.

Checkout summaries carry {id, x, y, label}; ticket submissions carry {id, x, y}.
Entries whose x or y is not a finite number in [0, 1] are dropped, never raised.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

from .types import Marker

logger = logging.getLogger(__name__)


def marker_id_prefix(participant_id: str, ticket_ref: Any) -> str:
    """Prefix for synthesized ids: '<participantId>:<ticketNumber or index>'."""
    return f"{participant_id}:{ticket_ref}"


def coerce_coordinate(value: Any) -> Optional[float]:
    """Return value as a float in [0, 1], or None if it cannot be one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number) or number < 0.0 or number > 1.0:
        return None
    return number


def normalize_markers(raw_markers: Any, id_prefix: str) -> List[Marker]:
    """
    Validate and canonicalize a raw marker list.

    Missing, empty or non-string ids are synthesized as
    '<id_prefix>-marker-<position>' (1-based position in the raw list).
    Input order is preserved. A non-list payload yields [].
    """
    if not isinstance(raw_markers, (list, tuple)):
        return []

    markers: List[Marker] = []
    for position, raw in enumerate(raw_markers, start=1):
        if not isinstance(raw, dict):
            continue
        x = coerce_coordinate(raw.get("x"))
        y = coerce_coordinate(raw.get("y"))
        if x is None or y is None:
            continue
        marker_id = raw.get("id")
        if not isinstance(marker_id, str) or not marker_id:
            marker_id = f"{id_prefix}-marker-{position}"
        markers.append(Marker(id=marker_id, x=x, y=y))

    dropped = len(raw_markers) - len(markers)
    if dropped:
        logger.debug("Dropped %d malformed marker(s) under %s", dropped, id_prefix)
    return markers

