"""
Fake notification repository for testing.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from application.exceptions import PersistenceError


class FakeNotificationRepository:
    """In-memory fake implementation of NotificationRepository."""

    def __init__(self):
        self._notifications: Dict[str, Dict] = {}
        self._fail_for_users: set = set()

    def seed(self, notifications: List[Dict]) -> None:
        for notification in notifications:
            self.create(notification)

    def get_all(self) -> List[Dict]:
        return list(self._notifications.values())

    def fail_for_user(self, user_id: str) -> None:
        self._fail_for_users.add(user_id)

    def create(self, data: Dict) -> Dict:
        if data.get("user_id") in self._fail_for_users:
            raise PersistenceError("Simulated notification insert failure")
        notification_id = data.get("id", str(uuid4()))
        row = {
            "seen": False,
            "created_at": datetime.now(timezone.utc).isoformat(),
            **data,
            "id": notification_id,
        }
        self._notifications[notification_id] = row
        return dict(row)

    def get_by_user(self, user_id: str, limit: int = 50) -> List[Dict]:
        rows = [n for n in self._notifications.values() if n.get("user_id") == user_id]
        rows.sort(key=lambda n: n["created_at"], reverse=True)
        return [dict(n) for n in rows[:limit]]

    def mark_seen(self, notification_id: str, user_id: str) -> Optional[Dict]:
        row = self._notifications.get(notification_id)
        if row is None or row.get("user_id") != user_id:
            return None
        row["seen"] = True
        return dict(row)
