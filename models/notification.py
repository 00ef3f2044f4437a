"""
Notification models.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class Notification(BaseModel):
    id: str
    user_id: str
    message: str
    date: date
    seen: bool = False
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    notifications: List[Notification]
    unseen: int
