"""
Notification models. Text is never stored, only client-side template keys.
"""

from typing import Optional

from app.models.base import CamelModel


class NotificationResponse(CamelModel):
    id: str
    user_id: str
    title_key: Optional[str] = None
    message_key: Optional[str] = None
    status_key: Optional[str] = None
    type: str = "info"
    report_id: Optional[str] = None
    read: bool = False
    created_at: Optional[str] = None
