"""
Admin Service - triage, assignment and staff management.

SCOPE OF ADMIN:
✅ Change report status (any status to any status)
✅ Assign reports to department users, move reports between departments
✅ Onboard, edit and disable department users

❌ NOT edit report content (citizen-only, see report_service)
❌ NOT delete reports
"""

from app.config.firebase import get_store
from app.core.exceptions import NotFoundError
from app.core.settings import settings
from app.models.user import UserRole
from app.services.auth_provider import AuthProvider, get_auth_provider
from app.services.document_store import DocumentStore
from app.services.notification_service import NotificationService
from app.services.report_service import COLLECTION as REPORTS
from app.services.report_service import to_report
from app.services.status_workflow import ReportStatus, StatusWorkflowEngine
from app.utils.firestore_helpers import newest_first, normalize_timestamps, to_iso
from typing import Any, Dict, List, Optional, Tuple
import logging
import secrets

logger = logging.getLogger(__name__)

USERS = "users"

# No look-alike characters (0/O, 1/l/I)
TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789@#$%"

DEPARTMENT_USER_EDITABLE_FIELDS = ("fullName", "phone", "departmentId", "status")


def generate_temp_password() -> str:
    suffix = "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(settings.TEMP_PASSWORD_LENGTH))
    return f"{settings.TEMP_PASSWORD_PREFIX}{suffix}"


class AdminService:
    """
    Service for admin-side report workflow and department user management.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        notification_service: Optional[NotificationService] = None,
        auth_provider: Optional[AuthProvider] = None,
    ):
        self.store = store or get_store()
        self.notification_service = notification_service or NotificationService(self.store)
        self._auth_provider = auth_provider

    @property
    def auth_provider(self) -> AuthProvider:
        # Resolved on first account operation
        if self._auth_provider is None:
            self._auth_provider = get_auth_provider()
        return self._auth_provider

    # ------------------------------------------------------------------
    # Role verification
    # ------------------------------------------------------------------

    def verify_admin_role(self, uid: Optional[str]) -> bool:
        """
        True if the user document (by ID, else by uid field) has role admin.
        Any lookup failure counts as not admin.
        """
        if not uid:
            return False
        try:
            user = self.store.get(USERS, uid)
            if user is not None:
                return user.get("role") == UserRole.ADMIN.value

            matches = self.store.query(USERS, [("uid", "==", uid), ("role", "==", UserRole.ADMIN.value)])
            return bool(matches)
        except Exception as e:
            logger.error(f"Failed to verify admin role for {uid}: {e}")
            return False

    def get_user_by_id(self, uid: str) -> Optional[Dict[str, Any]]:
        try:
            user = self.store.get(USERS, uid)
        except Exception as e:
            logger.error(f"Failed to fetch user {uid}: {e}")
            return None
        return normalize_timestamps(user) if user else None

    # ------------------------------------------------------------------
    # Report workflow
    # ------------------------------------------------------------------

    def get_all_reports(self, status: Optional[ReportStatus] = None) -> List[Dict[str, Any]]:
        filters = [("status", "==", status.value)] if status else []
        return newest_first([to_report(d) for d in self.store.query(REPORTS, filters)])

    def get_report_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        document = self.store.get(REPORTS, report_id)
        return to_report(document) if document else None

    def update_report_status(self, report_id: str, new_status: ReportStatus, changed_by: Optional[str] = None) -> Dict[str, Any]:
        """
        Set a report's status and notify its owner.

        No transition guard: admins may move a report from any status to any
        status, including the one it already has.

        Returns:
            The appended timeline entry

        Raises:
            NotFoundError: report does not exist
        """
        new_status = ReportStatus(new_status)
        report = self.store.get(REPORTS, report_id)
        if report is None:
            raise NotFoundError(REPORTS, report_id)

        entry = StatusWorkflowEngine.create_timeline_entry(f"Status changed to {new_status.value}", new_status)
        self.store.update(
            REPORTS,
            report_id,
            {"status": new_status.value, "updatedAt": self.store.server_timestamp()},
            array_appends={"timeline": entry},
        )
        logger.info(f"✅ Report {report_id} status {report.get('status')} → {new_status.value} (by {changed_by or 'admin'})")

        if report.get("userId"):
            self.notification_service.add_notification({
                "userId": report["userId"],
                "titleKey": "reportUpdate",
                "messageKey": "reportStatusUpdateMsg",
                "statusKey": new_status.value,
                "type": "info",
                "reportId": report_id,
            })

        return entry

    def assign_report(self, report_id: str, department_user_id: str, department_user_name: str) -> Dict[str, Any]:
        """Assign to a department user; status becomes assigned."""
        entry = StatusWorkflowEngine.create_timeline_entry(
            f"Report assigned to {department_user_name}", ReportStatus.ASSIGNED
        )
        self.store.update(
            REPORTS,
            report_id,
            {
                "assignedTo": department_user_id,
                "assignedUserName": department_user_name,
                "status": ReportStatus.ASSIGNED.value,
                "updatedAt": self.store.server_timestamp(),
            },
            array_appends={"timeline": entry},
        )
        logger.info(f"Report {report_id} assigned to {department_user_id}")
        return entry

    def change_report_department(self, report_id: str, department_name: str) -> Dict[str, Any]:
        """Route to another department; clears the assignee and resets to pending."""
        entry = StatusWorkflowEngine.create_timeline_entry(
            f"Department changed to {department_name}", ReportStatus.PENDING
        )
        self.store.update(
            REPORTS,
            report_id,
            {
                "category": department_name,
                "assignedTo": None,
                "assignedUserName": None,
                "status": ReportStatus.PENDING.value,
                "updatedAt": self.store.server_timestamp(),
            },
            array_appends={"timeline": entry},
        )
        logger.info(f"Report {report_id} moved to department {department_name}")
        return entry

    # ------------------------------------------------------------------
    # Department users
    # ------------------------------------------------------------------

    def get_department_users(self, department_id: Optional[str] = None) -> List[Dict[str, Any]]:
        filters = [("role", "==", UserRole.DEPARTMENT_USER.value)]
        if department_id:
            filters.append(("departmentId", "==", department_id))

        users = []
        for user in self.store.query(USERS, filters):
            normalize_timestamps(user)
            user["lastActive"] = to_iso(user.get("lastActive"))
            users.append(user)
        return users

    def create_department_user(self, user_data: Dict[str, Any], current_admin_uid: str) -> Tuple[str, str]:
        """
        Onboard a department user.

        Flow:
        1. Create the sign-in account with a temporary password
        2. Create the users document keyed by the new UID

        Returns:
            (uid, temp_password)

        Raises:
            AccountError: the auth provider refused the account
        """
        temp_password = generate_temp_password()
        uid = self.auth_provider.create_account(
            email=user_data["email"],
            password=temp_password,
            display_name=user_data["fullName"],
        )

        self.store.put(
            USERS,
            {
                "uid": uid,
                "fullName": user_data["fullName"],
                "email": user_data["email"],
                "phone": user_data.get("phone") or None,
                "departmentId": user_data["departmentId"],
                "role": UserRole.DEPARTMENT_USER.value,
                "status": "offline",
                "isActive": True,
                "createdBy": current_admin_uid,
                "createdAt": self.store.server_timestamp(),
                "lastActive": None,
            },
            document_id=uid,
        )
        logger.info(f"Department user {uid} created by {current_admin_uid}")
        return uid, temp_password

    def update_department_user(self, uid: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """Only fullName, phone, departmentId and status are editable; empty values are ignored."""
        updates = {
            field: update_data[field]
            for field in DEPARTMENT_USER_EDITABLE_FIELDS
            if update_data.get(field)
        }
        updates["updatedAt"] = self.store.server_timestamp()
        self.store.update(USERS, uid, updates)
        return updates

    def toggle_user_active(self, uid: str, is_active: bool) -> None:
        """Disable instead of deleting; a re-enabled user starts offline."""
        self.store.update(
            USERS,
            uid,
            {
                "isActive": is_active,
                "status": "offline" if is_active else "disabled",
                "updatedAt": self.store.server_timestamp(),
            },
        )
        logger.info(f"Department user {uid} {'enabled' if is_active else 'disabled'}")

    def reset_user_password(self, email: str) -> str:
        return self.auth_provider.send_password_reset(email)

    def update_user_status(self, uid: str, status: str) -> None:
        self.store.update(USERS, uid, {"status": status, "lastActive": self.store.server_timestamp()})


# Global service instance (singleton pattern)
_admin_service = None


def get_admin_service() -> AdminService:
    """
    Get or create AdminService singleton instance.

    Returns:
        AdminService: The global admin service instance
    """
    global _admin_service
    if _admin_service is None:
        _admin_service = AdminService()
    return _admin_service
