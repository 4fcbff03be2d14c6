"""
Notification endpoints - the caller's notification inbox.
"""

from typing import List
from fastapi import APIRouter, Depends

from app.core.exceptions import NotFoundError, StatusPermissionError
from app.models.base import BaseResponse
from app.models.notification import NotificationResponse
from app.routes.dependencies import get_current_user_id, get_notification_service
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
async def get_my_notifications(
    user_id: str = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    """Newest first."""
    return service.get_user_notifications(user_id)


@router.post("/read-all", response_model=BaseResponse)
async def mark_all_read(
    user_id: str = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    updated = service.mark_all_notifications_as_read(user_id)
    return BaseResponse(message=f"{updated} notification(s) marked as read")


@router.post("/{notification_id}/read", response_model=BaseResponse)
async def mark_read(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
):
    notification = service.get_notification(notification_id)
    if notification is None:
        raise NotFoundError("notifications", notification_id)
    if notification.get("userId") != user_id:
        raise StatusPermissionError("You can only update your own notifications")
    service.mark_notification_as_read(notification_id)
    return BaseResponse(message="Notification marked as read")
