"""
Plan persistence reconciler.

Expands a validated GeneratedPlan into exercise records and one planner
record. Writes are all-or-nothing: every record is staged in memory with
a pre-assigned id, exercises are written in one bulk insert, then the
planner is written. Any failure after the first write triggers a
compensating delete of every staged exercise id before PersistenceError
is raised, so no planner ever references missing exercises.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from application.exceptions import PersistenceError
from application.ports import ExerciseRepository, PlannerRepository
from models.plan import ExerciseDraft, GeneratedPlan
from models.planner import PlannerRecord

logger = logging.getLogger(__name__)


@dataclass
class StagedPlan:
    """Rows for one plan, built in memory before any write."""

    planner_row: Dict
    exercise_rows: List[Dict]

    @property
    def exercise_ids(self) -> List[str]:
        return [row["id"] for row in self.exercise_rows]


def exercise_row(draft: ExerciseDraft, user_id: str, day: str, now: str) -> Dict:
    """Storage row for one planned exercise."""
    return {
        "id": str(uuid4()),
        "user_id": user_id,
        "date": day,
        "name": draft.name,
        "description": draft.description,
        "type": draft.type,
        "body_part": draft.body_part,
        "equipment": draft.equipment,
        "level": draft.level,
        "avg_sets": draft.avg_sets,
        "avg_reps": draft.avg_reps,
        "calorie_burn_per_rep": draft.calorie_burn_per_rep,
        "rating": draft.rating,
        "rating_desc": draft.rating_desc,
        "status": draft.status.model_dump(mode="json"),
        "created_at": now,
        "updated_at": now,
    }


class PlanPersistenceReconciler:
    """
    Writes a generated plan as exercise records plus a planner record.

    Side effect of a successful call: exactly one planner and one
    exercise record per planned exercise.
    """

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        planner_repo: PlannerRepository,
        ttl_days: int = 7,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize the reconciler.

        Args:
            exercise_repo: Repository for exercise records
            planner_repo: Repository for planner records
            ttl_days: Days until the planner expires
            executor: Thread pool for the synchronous storage client
                      (defaults to the event loop executor)
        """
        self._exercise_repo = exercise_repo
        self._planner_repo = planner_repo
        self._ttl = timedelta(days=ttl_days)
        self._executor = executor

    def stage(self, plan: GeneratedPlan, user_id: str, now: datetime) -> StagedPlan:
        """Build every row of the plan without touching storage."""
        timestamp = now.isoformat()
        exercise_rows: List[Dict] = []
        planner_days = []

        for day in plan.days:
            day_str = day.date.isoformat()
            rows = [exercise_row(d, user_id, day_str, timestamp) for d in day.exercises]
            exercise_rows.extend(rows)
            planner_days.append({"date": day_str, "exercises": [r["id"] for r in rows]})

        planner_row = {
            "id": str(uuid4()),
            "user_id": user_id,
            "days": planner_days,
            "nutrition": list(plan.nutrition),
            "recommendations": list(plan.recommendations),
            "goals": list(plan.goals),
            "prediction": list(plan.prediction),
            "created_at": timestamp,
            "expires_at": (now + self._ttl).isoformat(),
        }
        return StagedPlan(planner_row=planner_row, exercise_rows=exercise_rows)

    def write(self, staged: StagedPlan) -> Dict:
        """
        Write staged rows, compensating on failure.

        Returns:
            Created planner dictionary

        Raises:
            PersistenceError: If any write fails
        """
        try:
            if staged.exercise_rows:
                self._exercise_repo.create_many(staged.exercise_rows)
            return self._planner_repo.create(staged.planner_row)
        except Exception as e:
            logger.warning(
                f"Plan write failed for planner {staged.planner_row['id']}, "
                f"rolling back {len(staged.exercise_rows)} exercises: {e}"
            )
            self._compensate(staged)
            raise PersistenceError("Failed to save the generated plan") from e

    def _compensate(self, staged: StagedPlan) -> None:
        ids = staged.exercise_ids
        if not ids:
            return
        try:
            deleted = self._exercise_repo.delete_many(ids)
            logger.info(f"Rolled back {deleted} exercise records")
        except Exception as e:
            logger.error(f"Rollback failed, orphaned exercise ids: {ids}: {e}")

    async def persist(
        self,
        plan: GeneratedPlan,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> PlannerRecord:
        """
        Persist a validated plan for a user.

        Args:
            plan: Validated plan
            user_id: Owner of the new records
            now: Creation time (defaults to the current UTC time)

        Returns:
            The created planner

        Raises:
            PersistenceError: If the plan could not be fully written
        """
        now = now or datetime.now(timezone.utc)
        staged = self.stage(plan, user_id, now)
        logger.info(
            f"Persisting planner {staged.planner_row['id']} for user {user_id} "
            f"with {len(staged.exercise_rows)} exercises"
        )
        created = await asyncio.get_running_loop().run_in_executor(
            self._executor, self.write, staged
        )
        return PlannerRecord.model_validate(created)
