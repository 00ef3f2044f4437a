"""
Pytest fixtures for planner API tests.
"""

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient

# Ensure the repository root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from api.deps import (
    get_completion_client,
    get_current_user,
    get_exercise_repo,
    get_notification_repo,
    get_planner_repo,
    get_settings,
)
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    FakeCompletionClient,
    FakeExerciseRepository,
    FakeNotificationRepository,
    FakeNotifier,
    FakePlannerRepository,
)
from tests.fakes.records import OTHER_USER_ID, TEST_USER_ID  # noqa: F401


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_exercise_repo() -> FakeExerciseRepository:
    return FakeExerciseRepository()


@pytest.fixture
def fake_planner_repo() -> FakePlannerRepository:
    return FakePlannerRepository()


@pytest.fixture
def fake_notification_repo() -> FakeNotificationRepository:
    return FakeNotificationRepository()


@pytest.fixture
def fake_completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(
        environment="test",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
        openai_api_key="test-openai-key",
        jwt_secret="test-jwt-secret",
        generation_max_attempts=1,
        _env_file=None,
    )


@pytest.fixture(scope="session")
def app(test_settings):
    """Create test application instance."""
    return create_app(settings=test_settings)


@pytest.fixture
def client(
    app,
    test_settings,
    fake_exercise_repo,
    fake_planner_repo,
    fake_notification_repo,
    fake_completion_client,
) -> Generator[TestClient, None, None]:
    """
    Per-test FastAPI TestClient wired to in-memory fakes.
    Properly cleans up dependency overrides after each test.
    """
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_exercise_repo] = lambda: fake_exercise_repo
    app.dependency_overrides[get_planner_repo] = lambda: fake_planner_repo
    app.dependency_overrides[get_notification_repo] = lambda: fake_notification_repo
    app.dependency_overrides[get_completion_client] = lambda: fake_completion_client
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Mock Environment Variables
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set mock environment variables for tests."""
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-supabase-key")
    monkeypatch.setenv("ENVIRONMENT", "test")


# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def today() -> date:
    return datetime.now(timezone.utc).date()


@pytest.fixture
def sample_generation_request(today) -> Dict[str, Any]:
    """Valid payload for planner generation."""
    return {
        "profile": {
            "name": "John Doe",
            "gender": "male",
            "age": 25,
            "weight_kg": 72,
            "height_cm": 178,
            "body_fat_pct": 20,
            "experience_level": "beginner",
        },
        "strength": {"max_pushups": 20, "max_pullups": 3, "max_squats": 30},
        "preferences": {
            "goal": "muscular",
            "days_per_week": 3,
            "plan_style": "full body",
            "equipment": ["dumbbells"],
        },
        "start_date": today.isoformat(),
    }
