"""
Notification Service - per-user notifications stored in Firestore.
"""

from app.config.firebase import get_store
from app.services.document_store import DocumentStore
from app.utils.firestore_helpers import newest_first, to_iso
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

COLLECTION = "notifications"


class NotificationService:
    """
    Service for creating and reading user notifications.

    Notifications carry template keys (titleKey, messageKey, statusKey);
    the client resolves them to localized text.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or get_store()

    def add_notification(self, notification: Dict[str, Any]) -> str:
        """
        Store a new unread notification.

        Args:
            notification: Notification fields (must include userId)

        Returns:
            New notification ID
        """
        try:
            data = dict(notification)
            data["read"] = False
            data["createdAt"] = self.store.server_timestamp()
            notification_id = self.store.put(COLLECTION, data)
            logger.info(f"Notification {notification_id} created for user {data.get('userId')}")
            return notification_id
        except Exception as e:
            logger.error(f"Failed to add notification: {str(e)}", exc_info=True)
            raise

    def get_user_notifications(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Notifications for one user, newest first.

        Sorted here rather than in the query to avoid a composite index.
        Returns an empty list when the read fails.
        """
        if not user_id:
            return []
        try:
            notifications = self.store.query(COLLECTION, [("userId", "==", user_id)])
        except Exception as e:
            logger.error(f"Failed to fetch notifications for {user_id}: {str(e)}")
            return []

        for notification in notifications:
            notification["createdAt"] = to_iso(notification.get("createdAt"))
        return newest_first(notifications)

    def get_notification(self, notification_id: str) -> Optional[Dict[str, Any]]:
        notification = self.store.get(COLLECTION, notification_id)
        if notification is not None:
            notification["createdAt"] = to_iso(notification.get("createdAt"))
        return notification

    def mark_notification_as_read(self, notification_id: str) -> None:
        try:
            self.store.update(COLLECTION, notification_id, {"read": True})
        except Exception as e:
            logger.error(f"Failed to mark notification {notification_id} as read: {str(e)}")
            raise

    def mark_all_notifications_as_read(self, user_id: str) -> int:
        """
        Mark every unread notification of a user as read.

        Returns:
            Number of notifications updated
        """
        try:
            unread = self.store.query(COLLECTION, [("userId", "==", user_id), ("read", "==", False)])
            for notification in unread:
                self.store.update(COLLECTION, notification["id"], {"read": True})
            return len(unread)
        except Exception as e:
            logger.error(f"Failed to mark all notifications as read for {user_id}: {str(e)}")
            raise


# Global service instance
_notification_service = None


def get_notification_service() -> NotificationService:
    """Get or create NotificationService singleton."""
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService()
    return _notification_service
