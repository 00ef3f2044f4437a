"""
Supabase implementation of ExerciseRepository.

Queries against the planner_exercises table. The status block is stored
as a jsonb column; dates are ISO strings. Every storage error is wrapped
in PersistenceError.
"""

from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError
from infrastructure.db.query import execute_query

TABLE = "planner_exercises"


class SupabaseExerciseRepository:
    """
    Supabase-backed exercise record repository implementation.

    Optimistic concurrency uses the updated_at column: a conditional
    update matches zero rows when another writer got there first.
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_id(self, exercise_id: str) -> Optional[Dict]:
        response = execute_query(
            self._client.table(TABLE).select("*").eq("id", exercise_id).limit(1),
            f"get exercise {exercise_id}",
        )
        return response.data[0] if response.data else None

    def get_by_ids(self, exercise_ids: List[str]) -> List[Dict]:
        if not exercise_ids:
            return []
        response = execute_query(
            self._client.table(TABLE).select("*").in_("id", exercise_ids),
            "get exercises",
        )
        return response.data

    def get_by_user(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Dict]:
        query = self._client.table(TABLE).select("*").eq("user_id", user_id)
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        response = execute_query(
            query.order("date").order("created_at"),
            f"get exercises for user {user_id}",
        )
        return response.data

    def create_many(self, rows: List[Dict]) -> List[Dict]:
        if not rows:
            return []
        response = execute_query(
            self._client.table(TABLE).insert(rows),
            f"create {len(rows)} exercises",
        )
        if len(response.data) != len(rows):
            raise PersistenceError(
                f"Created {len(response.data)} of {len(rows)} exercises"
            )
        return response.data

    def update_status(
        self,
        exercise_id: str,
        status: Dict,
        expected_updated_at: Optional[str] = None,
    ) -> Optional[Dict]:
        query = (
            self._client.table(TABLE)
            .update({
                "status": status,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", exercise_id)
        )
        if expected_updated_at is not None:
            query = query.eq("updated_at", expected_updated_at)
        response = execute_query(query, f"update status of exercise {exercise_id}")
        return response.data[0] if response.data else None

    def update_fields(
        self,
        exercise_id: str,
        data: Dict,
        expected_updated_at: Optional[str] = None,
    ) -> Optional[Dict]:
        payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        query = self._client.table(TABLE).update(payload).eq("id", exercise_id)
        if expected_updated_at is not None:
            query = query.eq("updated_at", expected_updated_at)
        response = execute_query(query, f"update exercise {exercise_id}")
        return response.data[0] if response.data else None

    def delete_many(self, exercise_ids: List[str]) -> int:
        if not exercise_ids:
            return 0
        response = execute_query(
            self._client.table(TABLE).delete().in_("id", exercise_ids),
            f"delete {len(exercise_ids)} exercises",
        )
        return len(response.data)

    def delete_by_user(self, user_id: str) -> int:
        response = execute_query(
            self._client.table(TABLE).delete().eq("user_id", user_id),
            f"delete exercises for user {user_id}",
        )
        return len(response.data)

    def get_user_ids_with_incomplete(self, day: date) -> List[str]:
        response = execute_query(
            self._client.table(TABLE)
            .select("user_id")
            .eq("date", day.isoformat())
            .eq("status->>completed_by_user", "false"),
            f"get incomplete exercises on {day.isoformat()}",
        )
        return sorted({row["user_id"] for row in response.data})
