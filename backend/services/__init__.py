"""Services: composition layer between repositories and the winners engine."""

from .winner_service import (
    WinnerService,
    compute_and_store,
    get_result,
    set_final_judge_coordinate,
)

__all__ = [
    "WinnerService",
    "compute_and_store",
    "get_result",
    "set_final_judge_coordinate",
]
