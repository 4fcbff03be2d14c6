"""
Client state cache - one signed-in session's view of the remote collections.

Holds the current user's reports, notifications and the department list.
Refreshed wholesale on load/login, cleared on logout, and mutated locally
right after each successful remote write. A failed write raises before the
local state is touched; a write that succeeds remotely but is changed by
someone else is only corrected by the next refresh().
"""

from app.core.exceptions import NotFoundError
from app.services.admin_service import AdminService
from app.services.department_service import DepartmentService
from app.services.notification_service import NotificationService
from app.services.report_service import ReportService
from app.services.status_workflow import ReportStatus
from app.utils.firestore_helpers import newest_first
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def _user_ids(user: Dict[str, Any]) -> List[str]:
    """Auth UID first, then the phone-based document ID if different."""
    uid = user.get("uid")
    phone_id = user.get("id") or user.get("phone")
    ids = [uid] if uid else []
    if phone_id and phone_id != uid:
        ids.append(phone_id)
    return ids


def _merge_by_id(*groups: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    merged: Dict[str, Dict[str, Any]] = {}
    for group in groups:
        for item in group:
            if item and item.get("id"):
                merged[item["id"]] = item
    return list(merged.values())


class ClientStateCache:
    """
    Injectable session cache.

    Entry points:
    - load() / login(user) / refresh(): wholesale reload from the store
    - invalidate(): logout, drop everything user-specific
    - add_report / update_report / delete_report / update_report_status /
      mark_notification_as_read / mark_all_notifications_as_read: remote
      write, then local mutation
    """

    def __init__(
        self,
        report_service: ReportService,
        notification_service: NotificationService,
        admin_service: AdminService,
        department_service: DepartmentService,
    ):
        self.report_service = report_service
        self.notification_service = notification_service
        self.admin_service = admin_service
        self.department_service = department_service

        self.current_user: Optional[Dict[str, Any]] = None
        self.is_admin = False
        self.reports: List[Dict[str, Any]] = []
        self.notifications: List[Dict[str, Any]] = []
        self.departments: List[Dict[str, Any]] = []

    # ------------------------------------------------------------------
    # Refresh / invalidation
    # ------------------------------------------------------------------

    def load(self, stored_user: Optional[Dict[str, Any]] = None) -> None:
        """App start: restore a persisted user (if any), always fetch departments."""
        if stored_user:
            self.current_user = stored_user
            self.refresh()
        try:
            self.departments = self.department_service.get_departments()
        except Exception as e:
            logger.error(f"Failed to load departments: {e}")

    def login(self, user: Dict[str, Any]) -> None:
        self.current_user = user
        self.refresh()

    def refresh(self) -> None:
        """Reload reports and notifications for both of the user's IDs."""
        user = self.current_user
        if not user:
            return

        try:
            if user.get("uid"):
                self.is_admin = self.admin_service.verify_admin_role(user["uid"])

            ids = _user_ids(user)
            reports = _merge_by_id(*(self.report_service.get_user_reports(i) for i in ids))
            notifications = _merge_by_id(*(self.notification_service.get_user_notifications(i) for i in ids))
        except Exception as e:
            logger.error(f"Error refreshing user data: {e}", exc_info=True)
            return

        self.reports = newest_first(reports)
        self.notifications = newest_first(notifications)

    def invalidate(self) -> None:
        """Logout."""
        self.current_user = None
        self.is_admin = False
        self.reports = []
        self.notifications = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_report(self, report_id: Any) -> Optional[Dict[str, Any]]:
        if not report_id:
            return None
        report_id = str(report_id)
        return next((r for r in self.reports if str(r.get("id")) == report_id), None)

    def get_user_stats(self) -> Dict[str, int]:
        """pending counts both pending and assigned reports."""
        open_statuses = {ReportStatus.PENDING.value, ReportStatus.ASSIGNED.value}
        return {
            "total": len(self.reports),
            "pending": sum(1 for r in self.reports if r.get("status") in open_statuses),
            "resolved": sum(1 for r in self.reports if r.get("status") == ReportStatus.RESOLVED.value),
        }

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.get("read"))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_report(self, report_data: Dict[str, Any]) -> str:
        data = dict(report_data)
        owner_ids = _user_ids(self.current_user) if self.current_user else []
        if not data.get("userId") and owner_ids:
            data["userId"] = owner_ids[0]

        report_id = self.report_service.create_report(data)

        report = self.report_service.get_report_by_id(report_id)
        if report is not None:
            self.reports.insert(0, report)
        return report_id

    def update_report(self, report_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        report = self._require_report(report_id)
        entry = self.report_service.update_report(report_id, report.get("status"), update_data)

        for field in ("title", "description", "location"):
            if update_data.get(field) is not None:
                report[field] = str(update_data[field]).strip()
        if "contactInfo" in update_data:
            report["contactInfo"] = (update_data["contactInfo"] or "").strip() or None
        if update_data.get("media") is not None:
            report["media"] = list(update_data["media"])
        report["updatedAt"] = entry["date"]
        report.setdefault("timeline", []).append(entry)
        return report

    def delete_report(self, report_id: str) -> None:
        report = self._require_report(report_id)
        self.report_service.delete_report(report_id, report.get("status"))
        self.reports = [r for r in self.reports if r.get("id") != report_id]

    def update_report_status(self, report_id: str, new_status: ReportStatus) -> None:
        """Admin status change; mirrored locally when the report is cached."""
        entry = self.admin_service.update_report_status(report_id, new_status)
        report = self.get_report(report_id)
        if report is not None:
            report["status"] = entry["status"]
            report["updatedAt"] = entry["date"]
            report.setdefault("timeline", []).append(entry)

    def mark_notification_as_read(self, notification_id: str) -> None:
        for notification in self.notifications:
            if notification.get("id") == notification_id:
                notification["read"] = True
        try:
            self.notification_service.mark_notification_as_read(notification_id)
        except Exception as e:
            logger.error(f"Error marking notification read: {e}")

    def mark_all_notifications_as_read(self) -> None:
        for notification in self.notifications:
            notification["read"] = True
        if not self.current_user:
            return
        for user_id in _user_ids(self.current_user):
            try:
                self.notification_service.mark_all_notifications_as_read(user_id)
            except Exception as e:
                logger.error(f"Error marking all notifications read: {e}")

    def _require_report(self, report_id: str) -> Dict[str, Any]:
        report = self.get_report(report_id)
        if report is None:
            raise NotFoundError("reports", report_id)
        return report
