"""
Transient plan models.

A GeneratedPlan only exists between parsing the model output and
expanding it into exercise and planner records. The StatusBlock is
shared with persisted exercises.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import ADVICE_ITEMS


def compute_complete_percent(completed_reps: int, total_reps: int) -> float:
    """
    Percentage of reps done, clamped to [0, 100].

    Defined as 0 when no reps are planned.
    """
    if total_reps <= 0:
        return 0.0
    percent = 100.0 * completed_reps / total_reps
    return round(min(100.0, max(0.0, percent)), 2)


class StatusBlock(BaseModel):
    """Sets/reps completion sub-structure of an exercise."""

    completed_by_user: bool = False
    complete_percent: float = Field(default=0.0, ge=0, le=100)
    total_sets: int = Field(default=0, ge=0)
    completed_sets: int = Field(default=0, ge=0)
    total_reps: int = Field(default=0, ge=0)
    completed_reps: int = Field(default=0, ge=0)
    completed_at: Optional[datetime] = None

    @classmethod
    def fresh(cls, avg_sets: int, avg_reps: int) -> "StatusBlock":
        """Initial status for a newly planned exercise."""
        return cls(
            total_sets=avg_sets,
            total_reps=avg_sets * avg_reps,
        )


class ExerciseDraft(BaseModel):
    """One planned exercise before persistence."""

    name: str
    description: str = ""
    type: Optional[str] = None
    body_part: Optional[str] = None
    equipment: Optional[str] = None
    level: Optional[str] = None
    avg_sets: int = Field(gt=0)
    avg_reps: int = Field(gt=0)
    calorie_burn_per_rep: float = Field(default=0.0, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    rating_desc: Optional[str] = None
    status: StatusBlock


class PlanDay(BaseModel):
    """A calendar day in the plan; rest days carry no exercises."""

    date: date
    exercises: List[ExerciseDraft] = Field(default_factory=list)

    @property
    def is_rest_day(self) -> bool:
        return not self.exercises


class GeneratedPlan(BaseModel):
    """Validated in-memory representation of model output."""

    days: List[PlanDay] = Field(min_length=7, max_length=7)
    nutrition: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    recommendations: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    goals: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    prediction: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)

    @property
    def training_days(self) -> List[PlanDay]:
        return [d for d in self.days if not d.is_rest_day]

    @property
    def exercise_count(self) -> int:
        return sum(len(d.exercises) for d in self.days)


class AdviceSet(BaseModel):
    """The four advice lists attached to a planner."""

    nutrition: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    recommendations: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    goals: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
    prediction: List[str] = Field(min_length=ADVICE_ITEMS, max_length=ADVICE_ITEMS)
