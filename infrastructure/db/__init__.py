"""
Database infrastructure package.

Supabase implementations of the repository ports.
"""

from infrastructure.db.exercise_repository import SupabaseExerciseRepository
from infrastructure.db.notification_repository import SupabaseNotificationRepository
from infrastructure.db.planner_repository import SupabasePlannerRepository

__all__ = [
    "SupabaseExerciseRepository",
    "SupabaseNotificationRepository",
    "SupabasePlannerRepository",
]
