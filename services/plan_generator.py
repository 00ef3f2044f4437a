"""
Weekly plan generator service.

Orchestrates the plan pipeline for one user:
1. Precondition - Return the active planner unless replacing it
2. Prompt - Render profile, strength and preferences into instructions
3. Completion - Call the model with capped retries on GenerationFailure
4. Validation - Parse and validate the output; nothing is written on failure
5. Persistence - Stage and write all records, compensating on failure
6. Replacement - Expire the previous planners once the new one is stored

Generation is serialized per user so concurrent requests cannot create
two planners for the same week.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import AsyncIterator, Dict, List, Optional

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from application.exceptions import GenerationFailure, PersistenceError
from application.ports import CompletionClient, ExerciseRepository, PlannerRepository
from models.planner import PlannerRecord
from models.profile import PreferenceSet, ProfileSnapshot, StrengthBaseline
from services.llm.prompts import build_plan_prompt
from services.plan_parser import parse_plan
from services.plan_persistence import PlanPersistenceReconciler

logger = logging.getLogger(__name__)

DEFAULT_MIN_WAIT_SECONDS = 1
DEFAULT_MAX_WAIT_SECONDS = 8


class UserLockRegistry:
    """In-process mutex per user id; entries are dropped once unused."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._holders[user_id] = self._holders.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[user_id] -= 1
            if self._holders[user_id] == 0:
                del self._holders[user_id]
                del self._locks[user_id]

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._locks


# Shared by every generator in the process
generation_locks = UserLockRegistry()


@dataclass
class PlanGenerationResult:
    """Outcome of a generate call."""

    planner: PlannerRecord
    created: bool
    suggestions: List[str] = field(default_factory=list)


class PlanGenerator:
    """
    Service for generating weekly workout planners.

    The completion client is injected so tests can substitute a stub.
    """

    def __init__(
        self,
        completion_client: CompletionClient,
        exercise_repo: ExerciseRepository,
        planner_repo: PlannerRepository,
        max_attempts: int = 2,
        max_tokens: int = 8000,
        temperature: float = 0.7,
        ttl_days: int = 7,
        retry_wait: Optional[wait_base] = None,
        locks: Optional[UserLockRegistry] = None,
    ):
        """
        Initialize the plan generator.

        Args:
            completion_client: Text-completion service
            exercise_repo: Repository for exercise records
            planner_repo: Repository for planner records
            max_attempts: Cap on completion attempts per generation
            max_tokens: Completion size limit
            temperature: Sampling randomness
            ttl_days: Days until a planner expires
            retry_wait: Backoff between attempts (default: exponential 1-8s)
            locks: Per-user lock registry (default: process-wide)
        """
        self._completion_client = completion_client
        self._planner_repo = planner_repo
        self._max_attempts = max_attempts
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._retry_wait = retry_wait or wait_exponential(
            multiplier=1, min=DEFAULT_MIN_WAIT_SECONDS, max=DEFAULT_MAX_WAIT_SECONDS
        )
        self._locks = locks or generation_locks
        self._persistence = PlanPersistenceReconciler(
            exercise_repo, planner_repo, ttl_days=ttl_days
        )

    async def generate(
        self,
        user_id: str,
        profile: ProfileSnapshot,
        strength: StrengthBaseline,
        preferences: PreferenceSet,
        start_date: Optional[date] = None,
        replace: bool = False,
    ) -> PlanGenerationResult:
        """
        Generate and persist a weekly planner for a user.

        Args:
            user_id: The user's ID
            profile: Body metrics and experience level
            strength: Strength baseline
            preferences: Training preferences
            start_date: First day of the plan (default: today, UTC)
            replace: Replace the active planner instead of returning it

        Returns:
            PlanGenerationResult; created is False when an active planner
            was returned unchanged

        Raises:
            GenerationFailure: If the model could not be reached
            PlanValidationError: If the model output was malformed
            PersistenceError: If storage failed (after rollback)
        """
        async with self._locks.hold(user_id):
            now = datetime.now(timezone.utc)
            active = await self._run_sync(self._planner_repo.get_active, user_id, now)
            if active and not replace:
                logger.info(f"Active planner {active[0]['id']} exists for user {user_id}")
                return PlanGenerationResult(
                    planner=PlannerRecord.model_validate(active[0]),
                    created=False,
                )

            start_date = start_date or now.date()
            logger.info(
                f"Generating planner for user {user_id}: "
                f"level={profile.experience_level.value}, "
                f"days_per_week={preferences.days_per_week}, start={start_date}"
            )

            prompt = build_plan_prompt(profile, strength, preferences, start_date)
            raw = await self._complete_with_retry(prompt)

            parsed = parse_plan(
                raw,
                days_per_week=preferences.days_per_week,
                start_date=start_date,
                experience_level=profile.experience_level,
            )

            # Shielded so a client disconnect cannot interrupt a write midway
            planner = await asyncio.shield(
                self._persistence.persist(parsed.plan, user_id)
            )

            if active:
                await self._expire([p["id"] for p in active])

            logger.info(
                f"Created planner {planner.id} for user {user_id} "
                f"({parsed.plan.exercise_count} exercises, {len(parsed.warnings)} warnings)"
            )
            return PlanGenerationResult(
                planner=planner,
                created=True,
                suggestions=parsed.warnings,
            )

    async def _complete_with_retry(self, prompt: str) -> str:
        """Call the model, retrying GenerationFailure up to max_attempts."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(GenerationFailure),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._completion_client.complete(
                    prompt,
                    max_tokens=self._max_tokens,
                    temperature=self._temperature,
                )
        raise GenerationFailure("Completion retries exhausted")

    async def _expire(self, planner_ids: List[str]) -> None:
        """Expire replaced planners; the new planner is already stored."""
        now = datetime.now(timezone.utc)
        try:
            count = await self._run_sync(self._planner_repo.expire, planner_ids, now)
        except PersistenceError as e:
            # Reads pick the newest active planner, so the new one still wins
            logger.warning(f"Failed to expire replaced planners {planner_ids}: {e}")
            return
        logger.info(f"Expired {count} replaced planner(s)")

    async def _run_sync(self, func, *args):
        return await asyncio.get_running_loop().run_in_executor(None, func, *args)
