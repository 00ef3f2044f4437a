"""
Services package for the planner API.

Contains business logic services for:
- Plan generation (prompt, completion, validation, persistence)
- Plan output parsing and validation
- Daily status reconciliation
- Coach features (chat, history advice, day readjustment)
- Activity summaries
- Reminder and cleanup jobs
"""

from services.activity_summary import ActivitySummaryService, summarize
from services.coach_service import CoachService
from services.plan_generator import PlanGenerationResult, PlanGenerator, UserLockRegistry
from services.plan_parser import (
    ParsedPlan,
    ValidationIssue,
    ValidationSeverity,
    parse_advice,
    parse_plan,
    parse_substitutes,
    strip_fences,
)
from services.plan_persistence import PlanPersistenceReconciler, StagedPlan
from services.reminder_service import ReminderService, purge_expired_planners
from services.status_reconciler import StatusReconciler, merge_status

__all__ = [
    # Activity
    "ActivitySummaryService",
    "summarize",
    # Coach
    "CoachService",
    # Plan Generation
    "PlanGenerationResult",
    "PlanGenerator",
    "UserLockRegistry",
    # Parsing
    "ParsedPlan",
    "ValidationIssue",
    "ValidationSeverity",
    "parse_advice",
    "parse_plan",
    "parse_substitutes",
    "strip_fences",
    # Persistence
    "PlanPersistenceReconciler",
    "StagedPlan",
    # Jobs
    "ReminderService",
    "purge_expired_planners",
    # Status
    "StatusReconciler",
    "merge_status",
]
