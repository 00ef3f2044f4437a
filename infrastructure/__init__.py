"""
Infrastructure layer package for the planner API.

This package contains concrete implementations of the port interfaces.
"""

from infrastructure.db import (
    SupabaseExerciseRepository,
    SupabaseNotificationRepository,
    SupabasePlannerRepository,
)
from infrastructure.push_client import LoggingNotifier, PushGatewayNotifier

__all__ = [
    "SupabaseExerciseRepository",
    "SupabaseNotificationRepository",
    "SupabasePlannerRepository",
    "LoggingNotifier",
    "PushGatewayNotifier",
]
