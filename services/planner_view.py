"""
Read-side helpers that resolve planner day references into exercises.
"""

from typing import Dict, List

from models.exercise import ExerciseRecord
from models.planner import PlannerDayDetail, PlannerDetail, PlannerRecord


def expand_planner(planner: PlannerRecord, exercise_rows: List[Dict]) -> PlannerDetail:
    """
    Attach exercise records to each planner day, in planner order.

    References to exercises that no longer exist are dropped.
    """
    by_id = {row["id"]: ExerciseRecord.model_validate(row) for row in exercise_rows}
    days = []
    for day in planner.days:
        exercises = [by_id[i] for i in day.exercises if i in by_id]
        days.append(PlannerDayDetail(
            date=day.date,
            rest_day=not day.exercises,
            exercises=exercises,
        ))
    return PlannerDetail(
        id=planner.id,
        created_at=planner.created_at,
        expires_at=planner.expires_at,
        days=days,
        nutrition=planner.nutrition,
        recommendations=planner.recommendations,
        goals=planner.goals,
        prediction=planner.prediction,
    )


def referenced_ids(planner: PlannerRecord) -> List[str]:
    return [i for day in planner.days for i in day.exercises]
