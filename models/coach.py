"""
Request/response models for coach features (chat, history advice, day adjustment).
"""

from datetime import date
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from core.constants import MAX_CHAT_MESSAGE_LENGTH
from core.sanitization import sanitize_user_input
from models.exercise import ExerciseRecord


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4 * MAX_CHAT_MESSAGE_LENGTH)


class ChatResponse(BaseModel):
    reply: str


class EnergyLevel(str, Enum):
    """Self-reported energy for the day."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DayCheckIn(BaseModel):
    """Pre-workout check-in used to readjust a day's exercises."""

    date: date
    energy_today: EnergyLevel
    pre_workout_taken: bool
    sore_body_parts: List[str] = Field(default_factory=list, max_length=10)

    @field_validator("sore_body_parts", mode="before")
    @classmethod
    def clean_body_parts(cls, v: Any) -> List[str]:
        """Accept a list or a comma separated string."""
        if not v:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            return []
        parts = []
        for part in v:
            if not isinstance(part, str):
                continue
            clean = sanitize_user_input(part, max_length=40)
            if clean:
                parts.append(clean)
        return parts


class AdjustDayResponse(BaseModel):
    """Exercises after readjustment."""

    substituted: List[str] = Field(default_factory=list)
    exercises: List[ExerciseRecord] = Field(default_factory=list)
