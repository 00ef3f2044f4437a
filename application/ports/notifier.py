"""
Push notification sender port (interface).
"""

from typing import Protocol


class Notifier(Protocol):
    """Delivers a push message to a user's devices."""

    async def notify(self, user_id: str, message: str) -> bool:
        """
        Send a push message. Fire-and-forget: never raises.

        Args:
            user_id: Recipient
            message: Body text

        Returns:
            True if the gateway accepted the message
        """
        ...
