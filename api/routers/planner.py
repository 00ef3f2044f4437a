"""
Planner router.

This router provides endpoints for weekly planners:
- Generate a planner from profile, strength baseline and preferences
- List planners, get the current one with exercises, get its advice
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.deps import (
    get_current_user,
    get_exercise_repo,
    get_plan_generator,
    get_planner_repo,
)
from application.exceptions import GenerationFailure, PersistenceError, PlanValidationError
from application.ports import ExerciseRepository, PlannerRepository
from models.planner import (
    GeneratePlanRequest,
    GeneratePlanResponse,
    PlannerDetail,
    PlannerRecord,
    PlannerReport,
)
from services.plan_generator import PlanGenerator
from services.planner_view import expand_planner, referenced_ids

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/planner",
    tags=["Planner"],
)

TRY_AGAIN = "We couldn't create your plan right now. Please try again."


@router.post("/generate", response_model=GeneratePlanResponse)
async def generate_planner(
    request: GeneratePlanRequest,
    user_id: str = Depends(get_current_user),
    generator: PlanGenerator = Depends(get_plan_generator),
):
    """
    Generate a weekly planner using AI.

    Returns the active planner unchanged (created=false) unless
    replace=true. Failures never expose model output.

    Raises:
        HTTPException 502: If the AI service failed or returned an invalid plan
        HTTPException 503: If the plan could not be saved
    """
    logger.info(
        f"Generate planner request: level={request.profile.experience_level.value}, "
        f"days_per_week={request.preferences.days_per_week}, replace={request.replace}"
    )

    try:
        result = await generator.generate(
            user_id=user_id,
            profile=request.profile,
            strength=request.strength,
            preferences=request.preferences,
            start_date=request.start_date,
            replace=request.replace,
        )
    except GenerationFailure as e:
        logger.error(f"Planner generation failed: {e}")
        raise HTTPException(status_code=502, detail=TRY_AGAIN)
    except PlanValidationError as e:
        logger.error(f"Planner output rejected: {e.reason}")
        raise HTTPException(status_code=502, detail=TRY_AGAIN)
    except PersistenceError as e:
        logger.error(f"Planner could not be saved: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)

    return GeneratePlanResponse(
        planner=result.planner,
        created=result.created,
        suggestions=result.suggestions,
    )


@router.get("", response_model=List[PlannerRecord])
def list_planners(
    user_id: str = Depends(get_current_user),
    planner_repo: PlannerRepository = Depends(get_planner_repo),
):
    """List the user's planners, newest first."""
    try:
        rows = planner_repo.get_by_user(user_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Planners are unavailable right now")
    return [PlannerRecord.model_validate(row) for row in rows]


def _active_planner(planner_repo: PlannerRepository, user_id: str) -> PlannerRecord:
    try:
        active = planner_repo.get_active(user_id, datetime.now(timezone.utc))
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Planners are unavailable right now")
    if not active:
        raise HTTPException(status_code=404, detail="No active planner")
    return PlannerRecord.model_validate(active[0])


@router.get("/current", response_model=PlannerDetail)
def get_current_planner(
    user_id: str = Depends(get_current_user),
    planner_repo: PlannerRepository = Depends(get_planner_repo),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """Get the active planner with each day's exercises."""
    planner = _active_planner(planner_repo, user_id)
    try:
        rows = exercise_repo.get_by_ids(referenced_ids(planner))
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Exercises are unavailable right now")
    return expand_planner(planner, [r for r in rows if r.get("user_id") == user_id])


@router.get("/report", response_model=PlannerReport)
def get_planner_report(
    user_id: str = Depends(get_current_user),
    planner_repo: PlannerRepository = Depends(get_planner_repo),
):
    """Get the advice lists of the active planner."""
    planner = _active_planner(planner_repo, user_id)
    return PlannerReport(
        nutrition=planner.nutrition,
        recommendations=planner.recommendations,
        goals=planner.goals,
        prediction=planner.prediction,
    )
