"""
Planner models and the plan generation API contract.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.exercise import ExerciseRecord
from models.profile import PreferenceSet, ProfileSnapshot, StrengthBaseline


class PlannerDay(BaseModel):
    """A day of the planner pointing at exercise records by id."""

    date: date
    exercises: List[str] = Field(default_factory=list)


class PlannerRecord(BaseModel):
    """The 7-day container with advice text, time-limited."""

    id: str
    user_id: str
    days: List[PlannerDay]
    nutrition: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    goals: List[str] = Field(default_factory=list)
    prediction: List[str] = Field(default_factory=list)
    created_at: datetime
    expires_at: datetime


class PlannerDayDetail(BaseModel):
    """A planner day with its exercises expanded."""

    date: date
    rest_day: bool
    exercises: List[ExerciseRecord] = Field(default_factory=list)


class PlannerDetail(BaseModel):
    """Planner with exercises resolved, as served to the tracker UI."""

    id: str
    created_at: datetime
    expires_at: datetime
    days: List[PlannerDayDetail]
    nutrition: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    goals: List[str] = Field(default_factory=list)
    prediction: List[str] = Field(default_factory=list)


class PlannerReport(BaseModel):
    """Advice lists of the most recent planner."""

    nutrition: List[str]
    recommendations: List[str]
    goals: List[str]
    prediction: List[str]


class GeneratePlanRequest(BaseModel):
    """Request body for weekly plan generation."""

    profile: ProfileSnapshot
    strength: StrengthBaseline = Field(default_factory=StrengthBaseline)
    preferences: PreferenceSet
    start_date: Optional[date] = Field(
        None, description="First day of the plan (defaults to today)"
    )
    replace: bool = Field(
        False, description="Replace the active planner instead of returning it"
    )


class GeneratePlanResponse(BaseModel):
    """Result of plan generation."""

    planner: PlannerRecord
    created: bool = Field(description="False when an active planner was returned as-is")
    suggestions: List[str] = Field(default_factory=list)
