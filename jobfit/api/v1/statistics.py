from fastapi import APIRouter, Depends

from jobfit.analytics import db as statistics_db
from jobfit.core.security import require_api_key
from jobfit.schemas.api import StatisticsResetResponse, StatisticsResponse

router = APIRouter()


@router.get("/statistics", response_model=StatisticsResponse)
def statistics(_: None = Depends(require_api_key)):
    return StatisticsResponse(enabled=statistics_db.settings.statistics_enabled, **statistics_db.get_statistics())


@router.post("/statistics/reset", response_model=StatisticsResetResponse)
def reset_statistics(_: None = Depends(require_api_key)):
    return StatisticsResetResponse(deleted=statistics_db.reset_statistics())
