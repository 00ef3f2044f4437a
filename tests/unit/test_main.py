"""
Unit tests for backend/main.py
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.main import _configure_cors, _init_sentry, _log_configuration, create_app
from backend.settings import Settings


@pytest.mark.unit
class TestCreateApp:
    """Test the create_app() factory function."""

    def test_create_app_returns_fastapi_instance(self):
        """create_app() should return a FastAPI application instance."""
        settings = Settings(environment="test", _env_file=None)
        app = create_app(settings=settings)
        assert isinstance(app, FastAPI)

    def test_create_app_uses_default_settings_when_none_provided(self):
        """create_app() should use get_settings() when no settings provided."""
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = Settings(environment="test", _env_file=None)

            app = create_app(settings=None)

            mock_get_settings.assert_called_once()
            assert isinstance(app, FastAPI)

    def test_create_app_configures_app_metadata(self):
        """create_app() should configure app title and version."""
        app = create_app(settings=Settings(environment="test", _env_file=None))

        assert app.title == "FitNation Planner API"
        assert app.version == "1.0.0"

    def test_create_app_registers_routes(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        paths = {route.path for route in app.routes}

        for path in (
            "/health",
            "/planner/generate",
            "/planner/current",
            "/planner/report",
            "/exercises",
            "/exercises/status",
            "/exercises/summary",
            "/coach/chat",
            "/coach/history-prediction",
            "/coach/adjust-day",
            "/notifications",
        ):
            assert path in paths


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        """Sentry should not be initialized when DSN is not set."""
        settings = Settings(sentry_dsn=None, _env_file=None)

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        """Sentry should be initialized when DSN is provided."""
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            _env_file=None,
        )

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.1,
                profiles_sample_rate=0.1,
            )


@pytest.mark.unit
class TestConfigureCors:
    """Test CORS configuration."""

    def test_configure_cors_adds_middleware(self):
        """_configure_cors should add CORS middleware to the app."""
        app = FastAPI()
        initial_middleware_count = len(app.user_middleware)

        _configure_cors(app)

        assert len(app.user_middleware) == initial_middleware_count + 1


@pytest.mark.unit
class TestLogConfiguration:
    """Test startup configuration logging."""

    def test_warns_when_openai_key_missing(self, caplog, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        settings = Settings(openai_api_key=None, _env_file=None)

        with caplog.at_level("WARNING"):
            _log_configuration(settings)

        assert "OPENAI_API_KEY is not set" in caplog.text

    def test_logs_push_gateway_absence(self, caplog):
        settings = Settings(openai_api_key="sk-test", push_gateway_url=None, _env_file=None)

        with caplog.at_level("INFO"):
            _log_configuration(settings)

        assert "PUSH_GATEWAY_URL is not set" in caplog.text
        assert "OPENAI_API_KEY" not in caplog.text


@pytest.mark.integration
class TestAppIntegration:
    """Integration tests for the created app."""

    def test_health_endpoint(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        client = TestClient(app)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "planner-api"}

    def test_cors_allows_requests(self):
        """CORS should allow cross-origin requests."""
        app = create_app(settings=Settings(environment="test", _env_file=None))
        client = TestClient(app)

        response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_protected_route_requires_auth(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        client = TestClient(app)

        response = client.get("/planner/current")

        assert response.status_code == 401
