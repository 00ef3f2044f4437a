"""
Persisted exercise models and status update contracts.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from models.plan import StatusBlock


class ExerciseState(str, Enum):
    """Lifecycle of a scheduled exercise."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def derive_state(status: StatusBlock) -> ExerciseState:
    """Derive the lifecycle state from a status block."""
    if status.completed_by_user:
        return ExerciseState.COMPLETED
    if status.completed_sets > 0 or status.completed_reps > 0:
        return ExerciseState.IN_PROGRESS
    return ExerciseState.SCHEDULED


class ExerciseRecord(BaseModel):
    """One concrete scheduled exercise owned by a user."""

    id: str
    user_id: str
    date: date
    name: str
    description: str = ""
    type: Optional[str] = None
    body_part: Optional[str] = None
    equipment: Optional[str] = None
    level: Optional[str] = None
    avg_sets: int
    avg_reps: int
    calorie_burn_per_rep: float = 0.0
    rating: Optional[float] = None
    rating_desc: Optional[str] = None
    status: StatusBlock
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def state(self) -> ExerciseState:
        return derive_state(self.status)


class StatusDelta(BaseModel):
    """Client-reported counters for one exercise."""

    exercise_id: str
    completed_sets: Optional[int] = Field(None, ge=0)
    completed_reps: Optional[int] = Field(None, ge=0)
    completed_by_user: Optional[bool] = None


class StatusUpdateRequest(BaseModel):
    """Batch of status deltas from a workout session."""

    deltas: List[StatusDelta] = Field(min_length=1, max_length=100)


class StatusFailureReason(str, Enum):
    """Why a single status update was not applied."""

    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    STORAGE = "StorageError"
    INVALID_RECORD = "InvalidRecord"


class FailedUpdate(BaseModel):
    """A delta that could not be applied."""

    id: str
    reason: StatusFailureReason
    retryable: bool = False


class StatusUpdateReport(BaseModel):
    """Partial-success report of a status batch."""

    applied: List[str] = Field(default_factory=list)
    failed: List[FailedUpdate] = Field(default_factory=list)


class DailyActivity(BaseModel):
    """Calories and completion for one calendar day."""

    date: date
    total_calories_burnt: float
    completion_percent: float
