"""Admin endpoints for a competition's final judge coordinate, winner computation and results."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.dependencies import get_app_settings, get_db_session
from repositories.competition_repo import CompetitionRepository
from services.winner_service import WinnerService, set_final_judge_coordinate
from winners.errors import (
    CompetitionNotFoundError,
    CoordinateNotSetError,
    InvalidCoordinateError,
    ResultStorageError,
)

router = APIRouter(prefix="/competitions", tags=["competitions"])


class FinalResultBody(BaseModel):
    """Body for PATCH /competitions/{competition_id}/final-result."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"finalJudgeX": 0.5, "finalJudgeY": 0.5}}
    )

    finalJudgeX: float = Field(..., ge=0, le=1, allow_inf_nan=False, description="Normalized x of the judged spot")
    finalJudgeY: float = Field(..., ge=0, le=1, allow_inf_nan=False, description="Normalized y of the judged spot")


def _error_detail(exc: Exception, **extra: Any) -> Dict[str, Any]:
    detail: Dict[str, Any] = {"code": getattr(exc, "code", "error"), "message": str(exc)}
    detail.update(extra)
    return detail


@router.patch(
    "/{competition_id}/final-result",
    summary="Set the final judge coordinate",
    description="Overwrite the competition's final judged (x, y); both values must be within [0, 1].",
)
async def patch_final_result(
    competition_id: str,
    body: FinalResultBody,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        competition = await set_final_judge_coordinate(
            session, competition_id, body.finalJudgeX, body.finalJudgeY
        )
    except CompetitionNotFoundError as e:
        raise HTTPException(status_code=404, detail=_error_detail(e)) from e
    except InvalidCoordinateError as e:
        raise HTTPException(status_code=400, detail=_error_detail(e)) from e
    return {
        "competition": {
            "id": competition.id,
            "title": competition.title,
            "finalJudgeX": competition.final_judge_x,
            "finalJudgeY": competition.final_judge_y,
        }
    }


@router.post(
    "/{competition_id}/compute-winner",
    summary="Compute and store winners",
    description="Rank every ticket's closest marker against the final judge coordinate and upsert the top winners.",
)
async def post_compute_winner(
    competition_id: str,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    - **404** unknown competition.
    - **409** final judge coordinate not set (nothing written).
    - **503** result computed but not stored; the computed result is in `detail.result`.
    """
    service = WinnerService(session, limit=settings.winners_limit)
    try:
        result = await service.compute_and_store(competition_id)
    except CompetitionNotFoundError as e:
        raise HTTPException(status_code=404, detail=_error_detail(e)) from e
    except CoordinateNotSetError as e:
        raise HTTPException(status_code=409, detail=_error_detail(e)) from e
    except ResultStorageError as e:
        result_payload = e.result.to_dict() if e.result is not None else None
        raise HTTPException(status_code=503, detail=_error_detail(e, result=result_payload)) from e
    return result.to_dict()


@router.get(
    "/{competition_id}/results",
    summary="Read stored winners",
    description="Return the stored result; status is 'not_computed' when winners were never computed.",
)
async def get_results(
    competition_id: str,
    session: AsyncSession = Depends(get_db_session),
):
    competition = await CompetitionRepository(session).get_by_id(competition_id)
    if competition is None:
        e = CompetitionNotFoundError(competition_id)
        raise HTTPException(status_code=404, detail=_error_detail(e))

    result = await WinnerService(session).get_result(competition_id)
    coordinate_set = competition.final_judge_x is not None and competition.final_judge_y is not None
    if result is None:
        return {"status": "not_computed", "coordinateSet": coordinate_set, "result": None}
    return {"status": "computed", "coordinateSet": coordinate_set, "result": result.to_dict()}
