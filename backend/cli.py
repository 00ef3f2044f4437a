"""
Scheduled jobs for an external cron.

Usage:
    python -m backend.cli remind     # push reminders for unfinished workouts
    python -m backend.cli purge      # delete expired planners
"""
import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Optional

from supabase import create_client

from application.exceptions import PersistenceError
from backend.settings import get_settings
from infrastructure.db import (
    SupabaseExerciseRepository,
    SupabaseNotificationRepository,
    SupabasePlannerRepository,
)
from infrastructure.push_client import LoggingNotifier, PushGatewayNotifier
from services.reminder_service import ReminderService, purge_expired_planners

logger = logging.getLogger(__name__)


def _client():
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        print("Error: SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set", file=sys.stderr)
        sys.exit(1)
    return create_client(settings.supabase_url, settings.supabase_key)


def run_remind(day: Optional[date] = None) -> int:
    settings = get_settings()
    client = _client()
    notifier = (
        PushGatewayNotifier(settings.push_gateway_url, token=settings.push_gateway_token)
        if settings.push_gateway_url
        else LoggingNotifier()
    )
    service = ReminderService(
        SupabaseExerciseRepository(client),
        SupabaseNotificationRepository(client),
        notifier,
    )
    return asyncio.run(service.send_incomplete_reminders(day))


def run_purge() -> int:
    return purge_expired_planners(SupabasePlannerRepository(_client()))


def main(argv=None):
    parser = argparse.ArgumentParser(description="FitNation planner scheduled jobs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    remind = subparsers.add_parser("remind", help="Remind users with unfinished workouts")
    remind.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to check (YYYY-MM-DD, default: today in UTC)",
    )
    subparsers.add_parser("purge", help="Delete expired planners")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    try:
        if args.command == "remind":
            count = run_remind(args.date)
            print(f"Reminded {count} user(s)")
        else:
            count = run_purge()
            print(f"Purged {count} planner(s)")
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
