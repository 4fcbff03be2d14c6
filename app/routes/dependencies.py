"""
Shared route dependencies: caller identity and service lookup.

Tests swap services via app.dependency_overrides on the get_*_service
functions re-exported here.
"""

from fastapi import Depends, Header

from app.core.exceptions import StatusPermissionError
from app.services.admin_service import AdminService, get_admin_service
from app.services.department_service import get_department_service
from app.services.notification_service import get_notification_service
from app.services.report_service import get_report_service
from app.services.user_service import get_user_service

__all__ = [
    "get_current_user_id",
    "require_admin",
    "get_admin_service",
    "get_department_service",
    "get_notification_service",
    "get_report_service",
    "get_user_service",
]


def get_current_user_id(
    x_user_id: str = Header(..., alias="X-User-ID", description="Auth UID or phone number of the caller")
) -> str:
    return x_user_id


def require_admin(
    caller_id: str = Depends(get_current_user_id),
    admin_service: AdminService = Depends(get_admin_service),
) -> str:
    """Caller's UID if they hold the admin role."""
    if not admin_service.verify_admin_role(caller_id):
        raise StatusPermissionError("Admin role required")
    return caller_id
