"""
FastAPI Dependency Providers for the FitNation Planner API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Service providers wire repositories and the completion client
- Auth providers extract user from headers

Usage in routers:
    from api.deps import get_exercise_repo, get_current_user
    from application.ports import ExerciseRepository

    @router.get("/exercises")
    def list_exercises(
        user_id: str = Depends(get_current_user),
        exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    ):
        return exercise_repo.get_by_user(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_exercise_repo] = lambda: FakeExerciseRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

from application.ports import (
    CompletionClient,
    ExerciseRepository,
    NotificationRepository,
    Notifier,
    PlannerRepository,
)
from backend.auth import get_current_user
from backend.settings import Settings, get_settings as _get_settings
from infrastructure.db import (
    SupabaseExerciseRepository,
    SupabaseNotificationRepository,
    SupabasePlannerRepository,
)
from infrastructure.push_client import LoggingNotifier, PushGatewayNotifier
from services.activity_summary import ActivitySummaryService
from services.coach_service import CoachService
from services.llm.client import OpenAICompletionClient
from services.plan_generator import PlanGenerator
from services.status_reconciler import StatusReconciler

__all__ = [
    "get_settings",
    "get_supabase_client",
    "get_supabase_client_required",
    "get_exercise_repo",
    "get_planner_repo",
    "get_notification_repo",
    "get_completion_client",
    "get_notifier",
    "get_plan_generator",
    "get_status_reconciler",
    "get_coach_service",
    "get_activity_summary_service",
    "get_current_user",
]


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_exercise_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseRepository:
    """
    Get ExerciseRepository implementation.

    The return type is the Protocol to enable easy mocking.
    """
    return SupabaseExerciseRepository(client)


def get_planner_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PlannerRepository:
    """
    Get PlannerRepository implementation.

    The return type is the Protocol to enable easy mocking.
    """
    return SupabasePlannerRepository(client)


def get_notification_repo(
    client: Client = Depends(get_supabase_client_required),
) -> NotificationRepository:
    """Get NotificationRepository implementation."""
    return SupabaseNotificationRepository(client)


# =============================================================================
# External Service Providers
# =============================================================================


@lru_cache
def _completion_client(
    api_key: str, model: str, base_url: Optional[str], timeout: float
) -> OpenAICompletionClient:
    return OpenAICompletionClient(
        api_key=api_key,
        model=model,
        base_url=base_url,
        timeout_seconds=timeout,
    )


def get_completion_client(
    settings: Settings = Depends(get_settings),
) -> CompletionClient:
    """
    Get the text-completion client.

    Raises:
        HTTPException: 503 if no API key is configured
    """
    if not settings.openai_api_key:
        raise HTTPException(
            status_code=503,
            detail="AI service not available. OPENAI_API_KEY not configured.",
        )
    return _completion_client(
        settings.openai_api_key,
        settings.llm_model,
        settings.openai_base_url,
        settings.llm_timeout_seconds,
    )


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    """Get the push notifier; logs only when no gateway is configured."""
    if not settings.push_gateway_url:
        return LoggingNotifier()
    return PushGatewayNotifier(
        base_url=settings.push_gateway_url,
        token=settings.push_gateway_token,
    )


# =============================================================================
# Service Providers
# =============================================================================


def get_plan_generator(
    settings: Settings = Depends(get_settings),
    completion_client: CompletionClient = Depends(get_completion_client),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    planner_repo: PlannerRepository = Depends(get_planner_repo),
) -> PlanGenerator:
    """Create a PlanGenerator wired with repositories and the completion client."""
    return PlanGenerator(
        completion_client=completion_client,
        exercise_repo=exercise_repo,
        planner_repo=planner_repo,
        max_attempts=settings.generation_max_attempts,
        max_tokens=settings.plan_max_tokens,
        temperature=settings.plan_temperature,
        ttl_days=settings.planner_ttl_days,
    )


def get_status_reconciler(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
) -> StatusReconciler:
    return StatusReconciler(exercise_repo)


def get_coach_service(
    settings: Settings = Depends(get_settings),
    completion_client: CompletionClient = Depends(get_completion_client),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    planner_repo: PlannerRepository = Depends(get_planner_repo),
) -> CoachService:
    return CoachService(
        completion_client=completion_client,
        exercise_repo=exercise_repo,
        planner_repo=planner_repo,
        chat_max_tokens=settings.chat_max_tokens,
        plan_max_tokens=settings.plan_max_tokens,
        temperature=settings.plan_temperature,
    )


def get_activity_summary_service(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
) -> ActivitySummaryService:
    return ActivitySummaryService(exercise_repo)
