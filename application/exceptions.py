"""
Application-layer exceptions.

These exceptions are used across application, service and infrastructure
layers. Routers translate them into HTTP responses.
"""

from typing import List, Optional


class GenerationFailure(Exception):
    """The text-completion service failed to produce output.

    Covers network errors, timeouts, non-2xx responses and empty
    completions. Retryable by the caller with backoff.
    """

    pass


class PlanValidationError(Exception):
    """Model output failed structural validation.

    Not retryable with the same prompt: a verbatim retry is likely to
    reproduce the same malformed shape.
    """

    def __init__(self, reason: str, issues: Optional[List[str]] = None):
        super().__init__(reason)
        self.reason = reason
        self.issues = issues or [reason]


class AdviceValidationError(PlanValidationError):
    """Advice-only model output (nutrition, goals, ...) failed validation."""

    pass


class PersistenceError(Exception):
    """Storage failure while reading or writing records.

    Raised by repositories for any database/RPC error, and by the plan
    persistence reconciler after compensating cleanup has been attempted.
    """

    pass


class NotFoundError(Exception):
    """A requested record does not exist or is not owned by the caller."""

    pass


class StatusUpdateError(Exception):
    """A single status delta could not be applied.

    Collected per record by the status reconciler rather than aborting
    the batch.
    """

    def __init__(self, exercise_id: str, reason: str, retryable: bool = False):
        super().__init__(f"{reason}: {exercise_id}")
        self.exercise_id = exercise_id
        self.reason = reason
        self.retryable = retryable
