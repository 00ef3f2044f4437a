"""
Notifications router.

In-app notifications: list the user's notifications and mark them seen.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_current_user, get_notification_repo
from application.exceptions import PersistenceError
from application.ports import NotificationRepository
from models.notification import Notification, NotificationListResponse

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    user_id: str = Depends(get_current_user),
    notification_repo: NotificationRepository = Depends(get_notification_repo),
):
    """List the user's notifications, newest first."""
    try:
        rows = notification_repo.get_by_user(user_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Notifications are unavailable right now")
    notifications = [Notification.model_validate(row) for row in rows]
    return NotificationListResponse(
        notifications=notifications,
        unseen=sum(1 for n in notifications if not n.seen),
    )


@router.post("/{notification_id}/seen", response_model=Notification)
def mark_notification_seen(
    notification_id: str,
    user_id: str = Depends(get_current_user),
    notification_repo: NotificationRepository = Depends(get_notification_repo),
):
    """Mark one of the user's notifications as seen."""
    try:
        row = notification_repo.mark_seen(notification_id, user_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Notifications are unavailable right now")
    if row is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return Notification.model_validate(row)
