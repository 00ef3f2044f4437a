"""
Port interfaces (Protocols) for the planner API.

This package defines the interface contracts that the infrastructure
layer must implement. Using Protocols enables:
- Clean separation of concerns
- Easy testing with in-memory fakes
- Dependency inversion (depend on abstractions, not concretions)
"""

from application.ports.completion_client import CompletionClient
from application.ports.exercise_repository import ExerciseRepository
from application.ports.notification_repository import NotificationRepository
from application.ports.notifier import Notifier
from application.ports.planner_repository import PlannerRepository

__all__ = [
    "CompletionClient",
    "ExerciseRepository",
    "NotificationRepository",
    "Notifier",
    "PlannerRepository",
]
