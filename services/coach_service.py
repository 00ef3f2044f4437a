"""
Coach service: chat, history-based advice and daily readjustment.

All three features call the completion client once and validate the
output before anything is written.
"""

import asyncio
import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from application.exceptions import NotFoundError
from application.ports import CompletionClient, ExerciseRepository, PlannerRepository
from core.constants import HISTORY_PREDICTION_DAYS
from models.coach import AdjustDayResponse, DayCheckIn
from models.exercise import ExerciseRecord, ExerciseState
from models.planner import PlannerReport
from services.llm.prompts import (
    build_adjustment_prompt,
    build_chat_prompt,
    build_history_prompt,
)
from services.plan_parser import parse_advice, parse_substitutes

logger = logging.getLogger(__name__)


def history_entries(exercises: List[Dict]) -> List[Dict]:
    """Group exercise rows into per-day history entries for the advice prompt."""
    by_day: "OrderedDict[str, List[Dict]]" = OrderedDict()
    for row in sorted(exercises, key=lambda r: str(r["date"])):
        status = row.get("status") or {}
        by_day.setdefault(str(row["date"]), []).append({
            "name": row.get("name"),
            "type": row.get("type"),
            "bodyPart": row.get("body_part"),
            "equipment": row.get("equipment"),
            "totalSets": status.get("total_sets", 0),
            "completedSets": status.get("completed_sets", 0),
            "totalReps": status.get("total_reps", 0),
            "completedReps": status.get("completed_reps", 0),
        })
    return [{"date": day, "exercises": items} for day, items in by_day.items()]


class CoachService:
    """Completion-backed coaching features."""

    def __init__(
        self,
        completion_client: CompletionClient,
        exercise_repo: ExerciseRepository,
        planner_repo: PlannerRepository,
        chat_max_tokens: int = 1000,
        advice_max_tokens: int = 2000,
        plan_max_tokens: int = 8000,
        temperature: float = 0.7,
    ):
        self._completion_client = completion_client
        self._exercise_repo = exercise_repo
        self._planner_repo = planner_repo
        self._chat_max_tokens = chat_max_tokens
        self._advice_max_tokens = advice_max_tokens
        self._plan_max_tokens = plan_max_tokens
        self._temperature = temperature

    async def chat(self, message: str) -> str:
        """
        Forward a user message to the model.

        Raises:
            GenerationFailure: If the model could not be reached
        """
        reply = await self._completion_client.complete(
            build_chat_prompt(message),
            max_tokens=self._chat_max_tokens,
            temperature=self._temperature,
        )
        return reply.strip()

    async def history_prediction(
        self, user_id: str, today: Optional[date] = None
    ) -> PlannerReport:
        """
        Regenerate the advice of the active planner from recent history.

        Looks at the last 14 days including today.

        Raises:
            NotFoundError: If the user has no active planner
            GenerationFailure: If the model could not be reached
            AdviceValidationError: If the model output was malformed
        """
        now = datetime.now(timezone.utc)
        today = today or now.date()

        active = await self._run_sync(self._planner_repo.get_active, user_id, now)
        if not active:
            raise NotFoundError("No active planner")
        planner_id = active[0]["id"]

        start = today - timedelta(days=HISTORY_PREDICTION_DAYS - 1)
        rows = await self._run_sync(self._exercise_repo.get_by_user, user_id, start, today)
        history = history_entries(rows)
        logger.info(
            f"History prediction for user {user_id}: {len(rows)} exercises "
            f"over {len(history)} days"
        )

        raw = await self._completion_client.complete(
            build_history_prompt(history),
            max_tokens=self._advice_max_tokens,
            temperature=self._temperature,
        )
        advice = parse_advice(raw)

        updated = await self._run_sync(
            self._planner_repo.update, planner_id, advice.model_dump()
        )
        if updated is None:
            raise NotFoundError("No active planner")
        return PlannerReport(**advice.model_dump())

    async def adjust_day(
        self,
        user_id: str,
        check_in: DayCheckIn,
        today: Optional[date] = None,
    ) -> AdjustDayResponse:
        """
        Substitute a day's scheduled exercises after a check-in.

        Only exercises not yet started are replaced; their status is
        recomputed from the new sets and reps.

        Raises:
            ValueError: If the date is in the past
            NotFoundError: If nothing is scheduled that day
            GenerationFailure: If the model could not be reached
            PlanValidationError: If the model output was malformed
        """
        today = today or datetime.now(timezone.utc).date()
        if check_in.date < today:
            raise ValueError("Past exercises cannot be adjusted")

        rows = await self._run_sync(
            self._exercise_repo.get_by_user, user_id, check_in.date, check_in.date
        )
        records = [ExerciseRecord.model_validate(r) for r in rows]
        versions = {r["id"]: r.get("updated_at") for r in rows}
        if not records:
            raise NotFoundError(f"No exercises scheduled on {check_in.date.isoformat()}")

        scheduled = [r for r in records if r.state == ExerciseState.SCHEDULED]
        if not scheduled:
            return AdjustDayResponse(substituted=[], exercises=records)

        prompt = build_adjustment_prompt(
            [
                {
                    "id": r.id,
                    "name": r.name,
                    "type": r.type,
                    "bodyPart": r.body_part,
                    "equipment": r.equipment,
                    "level": r.level,
                    "avgSets": r.avg_sets,
                    "avgReps": r.avg_reps,
                }
                for r in scheduled
            ],
            energy=check_in.energy_today.value,
            pre_workout_taken=check_in.pre_workout_taken,
            sore_body_parts=check_in.sore_body_parts,
        )
        raw = await self._completion_client.complete(
            prompt,
            max_tokens=self._plan_max_tokens,
            temperature=self._temperature,
        )
        substitutes = parse_substitutes(raw)

        substituted = []
        for record in scheduled:
            draft = substitutes.get(record.id)
            if draft is None:
                continue
            data = draft.model_dump(mode="json")
            # A record updated since it was read keeps its progress
            updated = await self._run_sync(
                self._exercise_repo.update_fields, record.id, data, versions[record.id]
            )
            if updated is None:
                logger.info(f"Exercise {record.id} changed during adjustment; kept as is")
                continue
            substituted.append(record.id)

        logger.info(
            f"Adjusted {len(substituted)}/{len(scheduled)} exercises for user {user_id} "
            f"on {check_in.date.isoformat()}"
        )
        rows = await self._run_sync(
            self._exercise_repo.get_by_user, user_id, check_in.date, check_in.date
        )
        return AdjustDayResponse(
            substituted=substituted,
            exercises=[ExerciseRecord.model_validate(r) for r in rows],
        )

    async def _run_sync(self, func, *args):
        return await asyncio.get_running_loop().run_in_executor(None, func, *args)
