"""
Exercises router.

This router provides endpoints for scheduled exercise records:
- Exercises for a day, or all of the user's exercises
- 30-day activity summary
- Batch status updates from a workout session
- Clearing all of the user's exercise records
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import (
    get_activity_summary_service,
    get_current_user,
    get_exercise_repo,
    get_status_reconciler,
)
from application.exceptions import PersistenceError
from application.ports import ExerciseRepository
from models.exercise import (
    DailyActivity,
    ExerciseRecord,
    StatusUpdateReport,
    StatusUpdateRequest,
)
from services.activity_summary import ActivitySummaryService
from services.status_reconciler import StatusReconciler

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)

UNAVAILABLE = "Exercises are unavailable right now"


@router.get("", response_model=List[ExerciseRecord])
def list_exercises(
    day: Optional[date] = Query(None, alias="date", description="Scheduled day (YYYY-MM-DD)"),
    user_id: str = Depends(get_current_user),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """List the user's exercises, for one day when date is given."""
    try:
        rows = exercise_repo.get_by_user(user_id, start=day, end=day)
    except PersistenceError:
        raise HTTPException(status_code=503, detail=UNAVAILABLE)
    return [ExerciseRecord.model_validate(row) for row in rows]


@router.get("/summary", response_model=List[DailyActivity])
def get_activity_summary(
    user_id: str = Depends(get_current_user),
    summary_service: ActivitySummaryService = Depends(get_activity_summary_service),
):
    """Calories and completion per day over the last 30 days."""
    try:
        return summary_service.daily_activity(user_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail=UNAVAILABLE)


@router.post("/status", response_model=StatusUpdateReport)
async def update_exercise_status(
    request: StatusUpdateRequest,
    user_id: str = Depends(get_current_user),
    reconciler: StatusReconciler = Depends(get_status_reconciler),
):
    """
    Apply completion counters reported by the tracker.

    Always returns a report; callers must check both applied and failed.
    """
    report = await reconciler.apply(user_id, request.deltas)
    logger.info(
        f"Status update for user {user_id}: "
        f"{len(report.applied)} applied, {len(report.failed)} failed"
    )
    return report


@router.delete("")
def clear_exercises(
    user_id: str = Depends(get_current_user),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """Delete all of the user's exercise records."""
    try:
        deleted = exercise_repo.delete_by_user(user_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail=UNAVAILABLE)
    logger.info(f"Cleared {deleted} exercises for user {user_id}")
    return {"deleted": deleted}
