"""
Pydantic models for the planner API.

Exports the profile inputs, transient plan models, persisted records and
API request/response contracts.
"""

from models.exercise import (
    ExerciseRecord,
    ExerciseState,
    FailedUpdate,
    StatusDelta,
    StatusFailureReason,
    StatusUpdateReport,
)
from models.plan import ExerciseDraft, GeneratedPlan, PlanDay, StatusBlock
from models.planner import PlannerDay, PlannerRecord
from models.profile import ExperienceLevel, PreferenceSet, ProfileSnapshot, StrengthBaseline

__all__ = [
    "ExerciseDraft",
    "ExerciseRecord",
    "ExerciseState",
    "ExperienceLevel",
    "FailedUpdate",
    "GeneratedPlan",
    "PlanDay",
    "PlannerDay",
    "PlannerRecord",
    "PreferenceSet",
    "ProfileSnapshot",
    "StatusBlock",
    "StatusDelta",
    "StatusFailureReason",
    "StatusUpdateReport",
    "StrengthBaseline",
]
