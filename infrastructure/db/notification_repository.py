"""
Supabase implementation of NotificationRepository.
"""

from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import PersistenceError
from infrastructure.db.query import execute_query

TABLE = "notifications"


class SupabaseNotificationRepository:
    """Supabase-backed in-app notification repository."""

    def __init__(self, client: Client):
        self._client = client

    def create(self, data: Dict) -> Dict:
        response = execute_query(
            self._client.table(TABLE).insert(data),
            "create notification",
        )
        if not response.data:
            raise PersistenceError("Notification insert returned no row")
        return response.data[0]

    def get_by_user(self, user_id: str, limit: int = 50) -> List[Dict]:
        response = execute_query(
            self._client.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit),
            f"get notifications for user {user_id}",
        )
        return response.data

    def mark_seen(self, notification_id: str, user_id: str) -> Optional[Dict]:
        response = execute_query(
            self._client.table(TABLE)
            .update({"seen": True})
            .eq("id", notification_id)
            .eq("user_id", user_id),
            f"mark notification {notification_id} seen",
        )
        return response.data[0] if response.data else None
