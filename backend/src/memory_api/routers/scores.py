# backend/src/memory_api/routers/scores.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.scores import (
    DailyScore,
    HeatmapResult,
    MonthlySummary,
    RecentDays,
    RecordSessionRequest,
    RecordSessionResponse,
)
from ..models.users import UserRecord
from ..services.aggregator import ScoreAggregator
from ..services.errors import InputValidationError
from ..services.recorder import SessionRecorder
from .deps import INTERNAL_ERROR, get_aggregator, get_current_user, get_recorder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scores", tags=["scores"])


@router.post("", response_model=RecordSessionResponse)
async def record_session(
    payload: RecordSessionRequest,
    user: UserRecord = Depends(get_current_user),
    recorder: SessionRecorder = Depends(get_recorder),
):
    """Keep the session score if it beats the best score of that day."""
    try:
        result = await recorder.record_session(user.user_id, payload.score, payload.date)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Score save error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return RecordSessionResponse(updated=result.updated)


@router.get("/daily/{day}", response_model=Optional[DailyScore])
async def get_daily_score(
    day: str,
    user: UserRecord = Depends(get_current_user),
    aggregator: ScoreAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.get_daily_score(user.user_id, day)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Daily score fetch error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/monthly/{month}", response_model=MonthlySummary)
async def get_monthly_summary(
    month: str,
    user: UserRecord = Depends(get_current_user),
    aggregator: ScoreAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.get_monthly_summary(user.user_id, month)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Monthly summary error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/heatmap", response_model=HeatmapResult)
async def get_heatmap(
    from_day: Optional[str] = Query(default=None, alias="from", description="YYYY-MM-DD inclusive"),
    to_day: Optional[str] = Query(default=None, alias="to", description="YYYY-MM-DD inclusive"),
    user: UserRecord = Depends(get_current_user),
    aggregator: ScoreAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.get_heatmap(user.user_id, from_day, to_day)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Heatmap fetch error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/recent", response_model=RecentDays)
async def get_recent_days(
    end: Optional[str] = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    days: int = Query(default=7),
    user: UserRecord = Depends(get_current_user),
    aggregator: ScoreAggregator = Depends(get_aggregator),
):
    try:
        return RecentDays(days=await aggregator.get_recent_days(user.user_id, end, days))
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Recent days fetch error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
