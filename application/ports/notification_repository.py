"""
Notification repository port (interface).
"""

from typing import Dict, List, Optional, Protocol


class NotificationRepository(Protocol):
    """Repository interface for in-app notification records."""

    def create(self, data: Dict) -> Dict:
        """
        Create a notification.

        Args:
            data: Notification dictionary (user_id, message, date)

        Returns:
            Created notification dictionary
        """
        ...

    def get_by_user(self, user_id: str, limit: int = 50) -> List[Dict]:
        """
        Get a user's notifications, newest first.

        Args:
            user_id: The user's ID
            limit: Maximum number of notifications

        Returns:
            List of notification dictionaries
        """
        ...

    def mark_seen(self, notification_id: str, user_id: str) -> Optional[Dict]:
        """
        Mark a notification as seen.

        Args:
            notification_id: The notification's UUID as string
            user_id: Owner; notifications of other users are not touched

        Returns:
            Updated notification, or None if not found for this user
        """
        ...
