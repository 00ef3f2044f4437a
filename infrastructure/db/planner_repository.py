"""
Supabase implementation of PlannerRepository.

Queries against the planners table. Days and advice lists are jsonb
columns; expiry is the expires_at timestamp.
"""

from datetime import datetime
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError
from infrastructure.db.query import execute_query

TABLE = "planners"


class SupabasePlannerRepository:
    """Supabase-backed planner repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_user(self, user_id: str) -> List[Dict]:
        response = execute_query(
            self._client.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            f"get planners for user {user_id}",
        )
        return response.data

    def get_active(self, user_id: str, now: datetime) -> List[Dict]:
        response = execute_query(
            self._client.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .gt("expires_at", now.isoformat())
            .order("created_at", desc=True),
            f"get active planners for user {user_id}",
        )
        return response.data

    def create(self, data: Dict) -> Dict:
        response = execute_query(
            self._client.table(TABLE).insert(data),
            "create planner",
        )
        if not response.data:
            raise PersistenceError("Planner insert returned no row")
        return response.data[0]

    def update(self, planner_id: str, data: Dict) -> Optional[Dict]:
        response = execute_query(
            self._client.table(TABLE).update(data).eq("id", planner_id),
            f"update planner {planner_id}",
        )
        return response.data[0] if response.data else None

    def expire(self, planner_ids: List[str], now: datetime) -> int:
        if not planner_ids:
            return 0
        response = execute_query(
            self._client.table(TABLE)
            .update({"expires_at": now.isoformat()})
            .in_("id", planner_ids),
            f"expire {len(planner_ids)} planners",
        )
        return len(response.data)

    def delete_expired(self, now: datetime) -> int:
        response = execute_query(
            self._client.table(TABLE).delete().lte("expires_at", now.isoformat()),
            "delete expired planners",
        )
        return len(response.data)
