"""
Builders for model output payloads used across tests.
"""

import json
from datetime import date, timedelta
from typing import Dict, List, Optional

from services.llm.prompts import training_day_offsets

ADVICE = {
    "nutrition": [f"Nutrition tip {i}" for i in range(1, 6)],
    "recommendations": [f"Recommendation {i}" for i in range(1, 6)],
    "goals": [f"Goal {i}" for i in range(1, 6)],
    "prediction": [f"Prediction {i}" for i in range(1, 6)],
}


def exercise_payload(
    name: str = "Pushup",
    avg_sets: int = 2,
    avg_reps: int = 10,
    **overrides,
) -> Dict:
    exercise = {
        "name": name,
        "description": f"{name} description",
        "type": "strength",
        "bodyPart": "chest",
        "equipment": "bodyweight",
        "level": "beginner",
        "avgSets": avg_sets,
        "avgReps": avg_reps,
        "calorieBurnPerRep": 0.3,
        "rating": 4.5,
        "ratingDesc": "Great starter move",
        "status": {
            "completedByUser": False,
            "completePercent": 0,
            "totalSets": avg_sets,
            "completedSets": 0,
            "totalReps": avg_sets * avg_reps,
            "completedReps": 0,
        },
    }
    exercise.update(overrides)
    return exercise


def plan_payload(
    start_date: date,
    days_per_week: int,
    exercises_per_day: int = 3,
    avg_sets: int = 2,
    training_offsets: Optional[List[int]] = None,
) -> Dict:
    """A well-formed plan with training days spread across the week."""
    offsets = training_offsets if training_offsets is not None else training_day_offsets(days_per_week)
    days = []
    for i in range(7):
        exercises = []
        if i in offsets:
            exercises = [
                exercise_payload(f"Exercise {i}-{j}", avg_sets=avg_sets, avg_reps=10)
                for j in range(exercises_per_day)
            ]
        days.append({
            "date": (start_date + timedelta(days=i)).isoformat(),
            "exercises": exercises,
        })
    return {"days": days, **ADVICE}


def plan_json(start_date: date, days_per_week: int, **kwargs) -> str:
    return json.dumps(plan_payload(start_date, days_per_week, **kwargs))


def advice_json() -> str:
    return json.dumps(ADVICE)
