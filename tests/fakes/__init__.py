"""
Fake implementations for testing.

This package provides in-memory fake implementations of repository
interfaces, the completion client and the push notifier for fast,
isolated testing without database or network dependencies.
"""

from tests.fakes.completion_client import FailingCompletionClient, FakeCompletionClient
from tests.fakes.exercise_repository import FakeExerciseRepository
from tests.fakes.notification_repository import FakeNotificationRepository
from tests.fakes.notifier import FakeNotifier
from tests.fakes.planner_repository import FakePlannerRepository

__all__ = [
    "FailingCompletionClient",
    "FakeCompletionClient",
    "FakeExerciseRepository",
    "FakeNotificationRepository",
    "FakeNotifier",
    "FakePlannerRepository",
]
