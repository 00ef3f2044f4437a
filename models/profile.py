"""
Profile input models for plan generation.

A profile snapshot, a strength baseline and a preference set together
describe the user the weekly plan is generated for. They are replaced
wholesale on every profile update and are read-only inputs to the
prompt builder.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.sanitization import sanitize_optional, sanitize_user_input


class Gender(str, Enum):
    """Self-reported gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ExperienceLevel(str, Enum):
    """User training experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProfileSnapshot(BaseModel):
    """Body metrics and experience of the user."""

    name: str = Field(default="", max_length=100)
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=10, le=100)
    body_type: Optional[str] = Field(None, description="e.g. ectomorph, mesomorph")
    weight_kg: Optional[float] = Field(None, gt=0, le=400)
    height_cm: Optional[float] = Field(None, gt=0, le=260)
    body_fat_pct: Optional[float] = Field(None, ge=0, le=70)
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER

    @field_validator("name", "body_type", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> Any:
        """Strip control characters from free text that ends up in the prompt."""
        if isinstance(v, str):
            return sanitize_user_input(v, max_length=100)
        return v


class StrengthBaseline(BaseModel):
    """Maximum efforts used to bias set/rep targets."""

    max_pushups: Optional[int] = Field(None, ge=0)
    max_pullups: Optional[int] = Field(None, ge=0)
    max_squats: Optional[int] = Field(None, ge=0)
    max_bench_kg: Optional[float] = Field(None, ge=0)
    max_squat_kg: Optional[float] = Field(None, ge=0)
    max_deadlift_kg: Optional[float] = Field(None, ge=0)


class PreferenceSet(BaseModel):
    """Stated training preferences."""

    goal: str = Field(default="general fitness", description="e.g. muscular, fat loss")
    days_per_week: int = Field(ge=1, le=7, description="Training days in the 7-day plan")
    plan_style: Optional[str] = Field(None, description="e.g. push-pull-legs, full body")
    session_duration_minutes: Optional[int] = Field(None, ge=10, le=240)
    equipment: List[str] = Field(default_factory=list)
    limitations: Optional[str] = Field(None, description="Injuries or constraints, free text")
    available_time: Optional[str] = Field(None, description="e.g. mornings, after 6pm")

    @field_validator("goal", mode="before")
    @classmethod
    def clean_goal(cls, v: Any) -> Any:
        if isinstance(v, str):
            return sanitize_user_input(v) or "general fitness"
        return v

    @field_validator("plan_style", "limitations", "available_time", mode="before")
    @classmethod
    def clean_optional_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return sanitize_optional(v)
        return v

    @field_validator("equipment", mode="before")
    @classmethod
    def clean_equipment(cls, v: Any) -> List[str]:
        """Sanitize each equipment entry and drop empties."""
        if not v or not isinstance(v, list):
            return []
        cleaned = []
        for item in v:
            if not isinstance(item, str):
                continue
            clean = sanitize_user_input(item, max_length=50)
            if clean:
                cleaned.append(clean)
        return cleaned
