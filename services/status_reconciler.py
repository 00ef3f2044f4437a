"""
Daily status reconciler.

Merges client-reported completion counters into stored exercise status.
Each record is updated independently with an optimistic read-modify-write
on "updated_at"; a failing record is reported, never fatal to the batch.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from application.exceptions import PersistenceError, StatusUpdateError
from application.ports import ExerciseRepository
from models.exercise import (
    FailedUpdate,
    StatusDelta,
    StatusFailureReason,
    StatusUpdateReport,
)
from models.plan import StatusBlock, compute_complete_percent

logger = logging.getLogger(__name__)

MAX_CONFLICT_RETRIES = 3


def merge_status(status: StatusBlock, delta: StatusDelta, now: datetime) -> StatusBlock:
    """
    Apply a delta to a status block.

    Delta counters are absolute values; missing fields keep the stored
    value. A completed status is terminal and returned unchanged.
    """
    if status.completed_by_user:
        return status

    completed_sets = (
        delta.completed_sets if delta.completed_sets is not None else status.completed_sets
    )
    completed_reps = (
        delta.completed_reps if delta.completed_reps is not None else status.completed_reps
    )
    completed = bool(delta.completed_by_user)

    return status.model_copy(update={
        "completed_sets": completed_sets,
        "completed_reps": completed_reps,
        "completed_by_user": completed,
        "complete_percent": compute_complete_percent(completed_reps, status.total_reps),
        "completed_at": status.completed_at or (now if completed else None),
    })


class StatusReconciler:
    """Applies batches of status deltas with a partial-success report."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        max_conflict_retries: int = MAX_CONFLICT_RETRIES,
    ):
        """
        Initialize the reconciler.

        Args:
            exercise_repo: Repository for exercise records
            max_conflict_retries: Re-reads after a lost optimistic update
        """
        self._exercise_repo = exercise_repo
        self._max_conflict_retries = max_conflict_retries

    def apply_one(self, user_id: str, delta: StatusDelta) -> Dict:
        """
        Apply one delta to the user's exercise record.

        Returns:
            The stored exercise dictionary after the update

        Raises:
            StatusUpdateError: NotFound, InvalidRecord, Conflict after retries,
                or StorageError
        """
        exercise_id = delta.exercise_id
        for attempt in range(self._max_conflict_retries + 1):
            try:
                record = self._exercise_repo.get_by_id(exercise_id)
            except PersistenceError as e:
                logger.warning(f"Failed to read exercise {exercise_id}: {e}")
                raise StatusUpdateError(
                    exercise_id, StatusFailureReason.STORAGE, retryable=True
                ) from e

            # Other users' records are indistinguishable from missing ones
            if record is None or record.get("user_id") != user_id:
                raise StatusUpdateError(exercise_id, StatusFailureReason.NOT_FOUND)

            try:
                status = StatusBlock.model_validate(record.get("status") or {})
            except ValidationError as e:
                logger.warning(f"Stored status of exercise {exercise_id} is invalid: {e}")
                raise StatusUpdateError(exercise_id, StatusFailureReason.INVALID_RECORD) from e

            merged = merge_status(status, delta, datetime.now(timezone.utc))
            if merged == status:
                return record

            try:
                updated = self._exercise_repo.update_status(
                    exercise_id,
                    merged.model_dump(mode="json"),
                    expected_updated_at=record.get("updated_at"),
                )
            except PersistenceError as e:
                logger.warning(f"Failed to update exercise {exercise_id}: {e}")
                raise StatusUpdateError(
                    exercise_id, StatusFailureReason.STORAGE, retryable=True
                ) from e

            if updated is not None:
                return updated
            logger.info(f"Concurrent update on exercise {exercise_id} (attempt {attempt + 1})")

        raise StatusUpdateError(exercise_id, StatusFailureReason.CONFLICT, retryable=True)

    async def apply(self, user_id: str, deltas: List[StatusDelta]) -> StatusUpdateReport:
        """
        Apply a batch of deltas concurrently.

        Args:
            user_id: Owner of the exercises
            deltas: Client-reported counters

        Returns:
            Report of applied ids and failed ids with reasons
        """
        outcomes = await asyncio.gather(*(self._apply(user_id, d) for d in deltas))

        report = StatusUpdateReport()
        for exercise_id, error in outcomes:
            if error is None:
                report.applied.append(exercise_id)
            else:
                report.failed.append(FailedUpdate(
                    id=exercise_id,
                    reason=StatusFailureReason(error.reason),
                    retryable=error.retryable,
                ))

        if report.failed:
            logger.warning(
                f"Status batch for user {user_id}: {len(report.applied)} applied, "
                f"{len(report.failed)} failed"
            )
        return report

    async def _apply(
        self, user_id: str, delta: StatusDelta
    ) -> Tuple[str, Optional[StatusUpdateError]]:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.apply_one, user_id, delta)
        except StatusUpdateError as e:
            return delta.exercise_id, e
        except Exception:
            logger.exception(f"Unexpected error updating exercise {delta.exercise_id}")
            return delta.exercise_id, StatusUpdateError(
                delta.exercise_id, StatusFailureReason.STORAGE, retryable=True
            )
        return delta.exercise_id, None
