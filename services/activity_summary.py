"""
Per-day activity summary over a trailing window.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from application.ports import ExerciseRepository
from core.constants import ACTIVITY_SUMMARY_DAYS
from models.exercise import DailyActivity


def summarize(rows: List[Dict]) -> List[DailyActivity]:
    """
    Aggregate exercise rows by calendar day, oldest first.

    Calories are calorie_burn_per_rep x total_reps per exercise; the
    completion percent is completed over total reps for the day.
    """
    calories: Dict[str, float] = defaultdict(float)
    total_reps: Dict[str, int] = defaultdict(int)
    completed_reps: Dict[str, int] = defaultdict(int)

    for row in rows:
        day = str(row["date"])
        status = row.get("status") or {}
        total = status.get("total_reps", 0) or 0
        calories[day] += (row.get("calorie_burn_per_rep") or 0) * total
        total_reps[day] += total
        completed_reps[day] += status.get("completed_reps", 0) or 0

    summary = []
    for day in sorted(calories):
        total = total_reps[day]
        percent = round(100.0 * completed_reps[day] / total, 2) if total else 0.0
        summary.append(DailyActivity(
            date=date.fromisoformat(day[:10]),
            total_calories_burnt=round(calories[day], 2),
            completion_percent=percent,
        ))
    return summary


class ActivitySummaryService:
    """Reads a user's recent exercises and summarizes them per day."""

    def __init__(self, exercise_repo: ExerciseRepository):
        self._exercise_repo = exercise_repo

    def daily_activity(
        self,
        user_id: str,
        today: Optional[date] = None,
        days: int = ACTIVITY_SUMMARY_DAYS,
    ) -> List[DailyActivity]:
        """
        Summarize the last `days` days including today.

        Args:
            user_id: The user's ID
            today: End of the window (default: today)
            days: Window length

        Returns:
            One entry per day that has exercises, oldest first
        """
        today = today or datetime.now(timezone.utc).date()
        start = today - timedelta(days=days - 1)
        rows = self._exercise_repo.get_by_user(user_id, start=start, end=today)
        return summarize(rows)
