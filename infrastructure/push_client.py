"""
HTTP client for the push notification gateway.

Delivery is fire-and-forget: every failure is logged and reported as
False, never raised to the caller.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

PUSH_TITLE = "FitNation Reminder"


class PushGatewayNotifier:
    """
    Sends push messages through an HTTP gateway.

    The gateway resolves the user's device tokens and fans the message out.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the notifier.

        Args:
            base_url: Base URL of the gateway (e.g., "http://push-gateway:8080")
            token: Bearer token for the gateway
            timeout: Request timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    async def notify(self, user_id: str, message: str) -> bool:
        url = f"{self._base_url}/notifications"
        payload = {
            "user_id": user_id,
            "title": PUSH_TITLE,
            "body": message,
        }
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.ConnectError as e:
            logger.warning(f"Push gateway unavailable: {e}")
            return False
        except httpx.TimeoutException as e:
            logger.warning(f"Push gateway timeout for user {user_id}: {e}")
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Push gateway request failed for user {user_id}: {e}")
            return False

        if response.status_code >= 400:
            logger.warning(
                f"Push gateway error for user {user_id}: "
                f"{response.status_code} - {response.text}"
            )
            return False

        logger.info(f"Push notification sent to user {user_id}")
        return True


class LoggingNotifier:
    """Notifier used when no gateway is configured; only logs."""

    async def notify(self, user_id: str, message: str) -> bool:
        logger.info(f"Push gateway not configured, skipping push to user {user_id}")
        return False
