"""
Planner repository port (interface).

This Protocol defines the contract for weekly planner persistence.
Expiry is modelled with an "expires_at" timestamp: active planners are
those whose expiry lies in the future.
"""

from datetime import datetime
from typing import Dict, List, Optional, Protocol


class PlannerRepository(Protocol):
    """
    Repository interface for planner records.

    All methods work with dictionaries for flexibility.
    Implementations raise PersistenceError on storage failures.
    """

    def get_by_user(self, user_id: str) -> List[Dict]:
        """
        Get all planners for a user, newest first.

        Args:
            user_id: The user's ID

        Returns:
            List of planner dictionaries
        """
        ...

    def get_active(self, user_id: str, now: datetime) -> List[Dict]:
        """
        Get the user's unexpired planners, newest first.

        Args:
            user_id: The user's ID
            now: Reference time for expiry

        Returns:
            Planner dictionaries with expires_at > now
        """
        ...

    def create(self, data: Dict) -> Dict:
        """
        Create a planner.

        Args:
            data: Planner dictionary including days and advice lists

        Returns:
            Created planner dictionary
        """
        ...

    def update(self, planner_id: str, data: Dict) -> Optional[Dict]:
        """
        Update a planner.

        Args:
            planner_id: The planner's UUID as string
            data: Columns to overwrite

        Returns:
            Updated planner dictionary, or None if not found
        """
        ...

    def expire(self, planner_ids: List[str], now: datetime) -> int:
        """
        Mark planners as expired by moving their expiry to now.

        Args:
            planner_ids: Planner UUIDs
            now: New expiry timestamp

        Returns:
            Number of planners updated
        """
        ...

    def delete_expired(self, now: datetime) -> int:
        """
        Delete planners whose expiry has passed.

        Args:
            now: Reference time for expiry

        Returns:
            Number of planners deleted
        """
        ...
