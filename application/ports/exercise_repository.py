"""
Exercise repository port (interface).

This Protocol defines the contract for exercise record persistence.
Infrastructure implementations (e.g., Supabase) must satisfy this interface.
"""

from datetime import date
from typing import Dict, List, Optional, Protocol


class ExerciseRepository(Protocol):
    """
    Repository interface for scheduled exercise records.

    All methods work with dictionaries for flexibility.
    The infrastructure layer handles serialization to/from domain models.
    Implementations raise PersistenceError on storage failures.
    """

    def get_by_id(self, exercise_id: str) -> Optional[Dict]:
        """
        Get an exercise record by its ID.

        Args:
            exercise_id: The exercise record's UUID as string

        Returns:
            Exercise dictionary if found, None otherwise
        """
        ...

    def get_by_ids(self, exercise_ids: List[str]) -> List[Dict]:
        """
        Get several exercise records at once.

        Args:
            exercise_ids: Exercise record UUIDs

        Returns:
            Exercise dictionaries that exist (missing ids are skipped)
        """
        ...

    def get_by_user(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Dict]:
        """
        Get a user's exercises, optionally limited to an inclusive date range.

        Args:
            user_id: The user's ID
            start: First scheduled date to include
            end: Last scheduled date to include

        Returns:
            Exercise dictionaries ordered by date
        """
        ...

    def create_many(self, rows: List[Dict]) -> List[Dict]:
        """
        Insert exercise records in one write.

        Rows carry pre-assigned ids so callers can compensate on failure.

        Args:
            rows: Exercise dictionaries including "id"

        Returns:
            Created exercise dictionaries
        """
        ...

    def update_status(
        self,
        exercise_id: str,
        status: Dict,
        expected_updated_at: Optional[str] = None,
    ) -> Optional[Dict]:
        """
        Write a new status block, conditional on the record being unchanged.

        Args:
            exercise_id: The exercise record's UUID as string
            status: Full status dictionary to store
            expected_updated_at: Precondition on the stored "updated_at";
                                 None writes unconditionally

        Returns:
            Updated exercise dictionary, or None if the precondition failed
            or the record no longer exists
        """
        ...

    def update_fields(
        self,
        exercise_id: str,
        data: Dict,
        expected_updated_at: Optional[str] = None,
    ) -> Optional[Dict]:
        """
        Update descriptive fields (name, sets, reps, status, ...) of a record.

        Args:
            exercise_id: The exercise record's UUID as string
            data: Columns to overwrite
            expected_updated_at: Only update if the stored version matches

        Returns:
            Updated exercise dictionary, or None if not found or the
            record changed since it was read
        """
        ...

    def delete_many(self, exercise_ids: List[str]) -> int:
        """
        Delete exercise records by id. Deleting missing ids is not an error.

        Args:
            exercise_ids: Exercise record UUIDs

        Returns:
            Number of records deleted
        """
        ...

    def delete_by_user(self, user_id: str) -> int:
        """
        Delete every exercise record of a user.

        Args:
            user_id: The user's ID

        Returns:
            Number of records deleted
        """
        ...

    def get_user_ids_with_incomplete(self, day: date) -> List[str]:
        """
        Users with at least one exercise on the given day not yet completed.

        Args:
            day: Scheduled date

        Returns:
            Distinct user IDs
        """
        ...
