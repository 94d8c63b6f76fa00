"""Statistics and progress endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from task_planner.api.deps import get_statistics_service
from task_planner.schemas.statistics import DailyProgress, StatisticsRead
from task_planner.services.statistics import PROGRESS_DAYS, StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])
STATISTICS_DEP = Depends(get_statistics_service)


@router.get("", response_model=StatisticsRead)
async def get_statistics(service: StatisticsService = STATISTICS_DEP) -> StatisticsRead:
    """Counts, completion rate, per-category breakdown, and date-window totals."""
    return service.get_all()


@router.get("/progress", response_model=list[DailyProgress])
async def get_progress(
    service: StatisticsService = STATISTICS_DEP,
    days: int = Query(default=PROGRESS_DAYS, ge=1, le=366),
) -> list[DailyProgress]:
    """Daily created/completed counts for the last `days` days, oldest first."""
    return service.progress(days)
