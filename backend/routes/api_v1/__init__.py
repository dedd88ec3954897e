"""API v1: final judge coordinate, winner computation and results."""

from fastapi import APIRouter

from .competitions import router as competitions_router

router = APIRouter(prefix="/api/v1", tags=["api_v1"])
router.include_router(competitions_router)

api_v1_router = router
