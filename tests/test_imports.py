"""Verify all modules can be imported without errors."""
import pytest

# All tests in this module are pure import checks - mark as unit tests
pytestmark = pytest.mark.unit


def test_backend_module_imports():
    """Import backend modules to catch bad import paths."""
    import backend.auth
    import backend.cli
    import backend.main
    import backend.settings


def test_service_imports():
    """Import service modules."""
    import services.activity_summary
    import services.coach_service
    import services.llm.client
    import services.llm.prompts
    import services.plan_generator
    import services.plan_parser
    import services.plan_persistence
    import services.planner_view
    import services.reminder_service
    import services.status_reconciler


def test_model_imports():
    """Import model modules."""
    import models.coach
    import models.exercise
    import models.notification
    import models.plan
    import models.planner
    import models.profile


def test_router_imports():
    """Import API router modules."""
    import api.routers.coach
    import api.routers.exercises
    import api.routers.health
    import api.routers.notifications
    import api.routers.planner


def test_infrastructure_imports():
    """Import infrastructure modules."""
    import infrastructure.db.exercise_repository
    import infrastructure.db.notification_repository
    import infrastructure.db.planner_repository
    import infrastructure.push_client


def test_app_starts():
    """Verify FastAPI app can be instantiated."""
    from backend.main import app
    assert app is not None
    assert hasattr(app, 'routes')
