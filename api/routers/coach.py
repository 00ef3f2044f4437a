"""
Coach router.

This router provides AI coaching endpoints:
- Chat with the coach
- Regenerate planner advice from recent history
- Readjust a day's exercises after a check-in
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_coach_service, get_current_user
from application.exceptions import (
    GenerationFailure,
    NotFoundError,
    PersistenceError,
    PlanValidationError,
)
from models.coach import AdjustDayResponse, ChatRequest, ChatResponse, DayCheckIn
from models.planner import PlannerReport
from services.coach_service import CoachService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/coach",
    tags=["Coach"],
)

TRY_AGAIN = "The coach is unavailable right now. Please try again."


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    user_id: str = Depends(get_current_user),
    coach: CoachService = Depends(get_coach_service),
):
    """Send a message to the coach."""
    try:
        reply = await coach.chat(request.message)
    except GenerationFailure as e:
        logger.error(f"Chat failed for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail=TRY_AGAIN)
    return ChatResponse(reply=reply)


@router.post("/history-prediction", response_model=PlannerReport)
async def history_prediction(
    user_id: str = Depends(get_current_user),
    coach: CoachService = Depends(get_coach_service),
):
    """Replace the active planner's advice with advice based on the last 14 days."""
    try:
        return await coach.history_prediction(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (GenerationFailure, PlanValidationError) as e:
        logger.error(f"History prediction failed for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail=TRY_AGAIN)
    except PersistenceError as e:
        logger.error(f"History prediction could not be saved: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)


@router.post("/adjust-day", response_model=AdjustDayResponse)
async def adjust_day(
    check_in: DayCheckIn,
    user_id: str = Depends(get_current_user),
    coach: CoachService = Depends(get_coach_service),
):
    """Substitute the day's not-yet-started exercises based on a check-in."""
    try:
        return await coach.adjust_day(user_id, check_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (GenerationFailure, PlanValidationError) as e:
        logger.error(f"Day adjustment failed for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail=TRY_AGAIN)
    except PersistenceError as e:
        logger.error(f"Day adjustment could not be saved: {e}")
        raise HTTPException(status_code=503, detail=TRY_AGAIN)
