"""
API package for the FitNation Planner API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_exercise_repo,
    get_planner_repo,
    get_notification_repo,
    get_completion_client,
    get_notifier,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_exercise_repo",
    "get_planner_repo",
    "get_notification_repo",
    # External services
    "get_completion_client",
    "get_notifier",
    # Authentication
    "get_current_user",
]
