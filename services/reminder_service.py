"""
Reminder and cleanup jobs run from the CLI by an external scheduler.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from application.exceptions import PersistenceError
from application.ports import ExerciseRepository, NotificationRepository, Notifier, PlannerRepository

logger = logging.getLogger(__name__)

INCOMPLETE_WORKOUT_MESSAGE = (
    "You still have some workouts to complete today. Let's crush it!"
)


class ReminderService:
    """Notifies users who have not finished today's exercises."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        notification_repo: NotificationRepository,
        notifier: Notifier,
    ):
        self._exercise_repo = exercise_repo
        self._notification_repo = notification_repo
        self._notifier = notifier

    async def send_incomplete_reminders(self, today: Optional[date] = None) -> int:
        """
        Record and push a reminder to every user with unfinished exercises today.

        A failure for one user is logged and does not stop the others.

        Returns:
            Number of users reminded
        """
        today = today or datetime.now(timezone.utc).date()
        user_ids = self._exercise_repo.get_user_ids_with_incomplete(today)
        logger.info(f"{len(user_ids)} user(s) with incomplete workouts on {today}")

        reminded = 0
        for user_id in user_ids:
            try:
                self._notification_repo.create({
                    "user_id": user_id,
                    "message": INCOMPLETE_WORKOUT_MESSAGE,
                    "date": today.isoformat(),
                    "seen": False,
                })
            except PersistenceError as e:
                logger.warning(f"Failed to record reminder for user {user_id}: {e}")
                continue
            await self._notifier.notify(user_id, INCOMPLETE_WORKOUT_MESSAGE)
            reminded += 1

        logger.info(f"Daily workout reminder sent to {reminded} user(s)")
        return reminded


def purge_expired_planners(
    planner_repo: PlannerRepository, now: Optional[datetime] = None
) -> int:
    """
    Delete planners whose expiry has passed.

    Exercise records are left in place: they back the activity history.
    """
    now = now or datetime.now(timezone.utc)
    deleted = planner_repo.delete_expired(now)
    logger.info(f"Purged {deleted} expired planner(s)")
    return deleted
