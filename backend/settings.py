"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.supabase_url)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the Supabase key."""
        return self.supabase_service_role_key

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    jwt_secret: Optional[str] = Field(
        default=None,
        description="Secret used to verify access tokens",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="Signing algorithm of access tokens",
    )

    # -------------------------------------------------------------------------
    # AI Services
    # -------------------------------------------------------------------------
    openai_api_key: Optional[str] = Field(
        default=None,
        description="API key for the text-completion service",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="OpenAI-compatible endpoint (defaults to api.openai.com)",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for plans, advice and chat",
    )
    llm_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=300,
        description="Upper bound on a single completion request",
    )
    plan_max_tokens: int = Field(
        default=8000,
        ge=1000,
        le=16000,
        description="Completion size limit for weekly plans",
    )
    plan_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Sampling randomness for plans (low-to-moderate)",
    )
    chat_max_tokens: int = Field(
        default=1000,
        ge=100,
        le=4000,
        description="Completion size limit for chat replies",
    )
    generation_max_attempts: int = Field(
        default=2,
        ge=1,
        le=3,
        description="Attempts at the completion call per plan generation",
    )

    # -------------------------------------------------------------------------
    # Planner
    # -------------------------------------------------------------------------
    planner_ttl_days: int = Field(
        default=7,
        ge=1,
        le=31,
        description="Days until a generated planner expires",
    )

    # -------------------------------------------------------------------------
    # Push Notifications
    # -------------------------------------------------------------------------
    push_gateway_url: Optional[str] = Field(
        default=None,
        description="HTTP endpoint of the push notification gateway",
    )
    push_gateway_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the push notification gateway",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
