"""
Router package for the FitNation Planner API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- planner: Weekly planner generation and reads
- exercises: Exercise records, status updates and activity summary
- coach: Chat, history advice and day readjustment
- notifications: In-app notifications
"""

from api.routers.coach import router as coach_router
from api.routers.exercises import router as exercises_router
from api.routers.health import router as health_router
from api.routers.notifications import router as notifications_router
from api.routers.planner import router as planner_router

__all__ = [
    "coach_router",
    "exercises_router",
    "health_router",
    "notifications_router",
    "planner_router",
]
