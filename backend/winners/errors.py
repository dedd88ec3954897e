"""Named failure conditions of the winner engine and the result service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import CompetitionResult


class WinnerComputationError(Exception):
    """Base class for winner engine errors."""

    code = "winner_computation_failed"


class CompetitionNotFoundError(WinnerComputationError, LookupError):
    code = "competition_not_found"

    def __init__(self, competition_id: str) -> None:
        super().__init__(f"Competition not found: competition_id={competition_id}")
        self.competition_id = competition_id


class CoordinateNotSetError(WinnerComputationError):
    """The competition has no final judge coordinate; nothing is computed or written."""

    code = "final_judge_coordinate_not_set"

    def __init__(self, competition_id: str) -> None:
        super().__init__(
            f"Final judge coordinate not set for competition_id={competition_id}"
        )
        self.competition_id = competition_id


class InvalidCoordinateError(WinnerComputationError, ValueError):
    """A final judge coordinate outside [0, 1] or not finite."""

    code = "final_judge_coordinate_invalid"


class ResultStorageError(WinnerComputationError):
    """
    The result was computed but the upsert failed.

    The computed result travels with the error so callers can retry the write
    without recomputing.
    """

    code = "result_storage_failed"

    def __init__(self, competition_id: str, result: Optional["CompetitionResult"] = None) -> None:
        super().__init__(f"Failed to store result for competition_id={competition_id}")
        self.competition_id = competition_id
        self.result = result
