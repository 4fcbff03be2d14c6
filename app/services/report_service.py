"""
Report service - citizen-side report handling.

DESIGN NOTE:
- Citizens may edit a report only while it is pending/assigned and delete
  it only while it is pending (see status_workflow)
- Every mutation appends exactly one timeline entry in the same write
- Deletes are permanent
- Nothing is retried; failures surface to the caller
"""

from app.config.firebase import get_store
from app.core.exceptions import FieldValidationError, NotFoundError
from app.services.document_store import DocumentStore
from app.services.notification_service import NotificationService
from app.services.status_workflow import ReportStatus, StatusWorkflowEngine
from app.utils.firestore_helpers import newest_first, normalize_timestamps, to_iso
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

COLLECTION = "reports"

# Must stay non-empty after trimming when supplied
REQUIRED_TEXT_FIELDS = ("title", "description", "location")


def to_report(document: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a stored report: ISO timestamps, missing dates stay None."""
    normalize_timestamps(document)
    document["timeline"] = [
        {**entry, "date": to_iso(entry.get("date"))}
        for entry in document.get("timeline") or []
    ]
    return document


class ReportService:
    """Service for citizen report CRUD."""

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.store = store or get_store()
        self.notification_service = notification_service or NotificationService(self.store)

    def create_report(self, report_data: Dict[str, Any]) -> str:
        """
        Create a new report in pending status.

        Flow:
        1. Validate owner, category and title
        2. Store the report with a one-entry timeline (MUST succeed)
        3. Notify the owner (best-effort, never blocks creation)

        Args:
            report_data: camelCase report fields

        Returns:
            New report ID
        """
        for field in ("userId", "category", "title"):
            if not str(report_data.get(field) or "").strip():
                raise FieldValidationError(f"{field} is required", field=field)

        initial_status = ReportStatus.PENDING
        now = self.store.server_timestamp()
        report = {
            "userId": report_data["userId"],
            "category": report_data["category"],
            "title": report_data["title"].strip(),
            "description": report_data.get("description") or "",
            "location": report_data.get("location") or "Unknown",
            "priority": report_data.get("priority") or "Medium",
            "contactInfo": report_data.get("contactInfo") or None,
            "media": report_data.get("media") or [],
            "photo": report_data.get("photo") or None,
            "status": initial_status.value,
            "assignedTo": None,
            "assignedUserName": None,
            "timeline": [StatusWorkflowEngine.create_timeline_entry("Report submitted", initial_status)],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            report_id = self.store.put(COLLECTION, report)
            logger.info(f"Report saved: {report_id}")
        except Exception as e:
            logger.error(f"Failed to save report: {e}", exc_info=True)
            raise

        try:
            self.notification_service.add_notification({
                "userId": report["userId"],
                "titleKey": "reportSubmitted",
                "messageKey": "reportSubmittedMsg",
                "type": "success",
                "reportId": report_id,
            })
        except Exception as e:
            logger.warning(f"⚠️ Report {report_id} stored, but submission notification failed: {e}")

        return report_id

    def get_user_reports(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Reports owned by one user, newest first.

        Returns an empty list for an empty user ID or a failed read.
        """
        if not user_id:
            return []
        try:
            documents = self.store.query(COLLECTION, [("userId", "==", user_id)])
        except Exception as e:
            logger.error(f"Failed to fetch reports for {user_id}: {e}")
            return []
        return newest_first([to_report(d) for d in documents])

    def get_report_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        document = self.store.get(COLLECTION, report_id)
        return to_report(document) if document else None

    def update_report(self, report_id: str, current_status: Any, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a citizen edit.

        Editing rules:
        - ✅ pending, assigned
        - ❌ inProgress, resolved, closed

        Args:
            report_id: Report document ID
            current_status: Status the caller observed
            update_data: Any of title, description, location, contactInfo, media

        Returns:
            The appended timeline entry

        Raises:
            StatusPermissionError: status does not allow edits
            FieldValidationError: title/description/location empty after trimming
        """
        if not report_id:
            raise FieldValidationError("Report ID is required", field="id")

        status = StatusWorkflowEngine.check_can_edit(current_status)

        updates: Dict[str, Any] = {}
        for field in REQUIRED_TEXT_FIELDS:
            if update_data.get(field) is None:
                continue
            trimmed = str(update_data[field]).strip()
            if not trimmed:
                raise FieldValidationError(f"{field.capitalize()} cannot be empty", field=field)
            updates[field] = trimmed

        if "contactInfo" in update_data:
            updates["contactInfo"] = (update_data["contactInfo"] or "").strip() or None

        if update_data.get("media") is not None:
            media = update_data["media"]
            updates["media"] = media if isinstance(media, list) else []

        updates["updatedAt"] = self.store.server_timestamp()

        entry = StatusWorkflowEngine.create_timeline_entry("Report details updated by citizen", status)
        try:
            self.store.update(COLLECTION, report_id, updates, array_appends={"timeline": entry})
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to update report {report_id}: {e}", exc_info=True)
            raise

        logger.info(f"Report {report_id} updated by citizen ({', '.join(k for k in updates if k != 'updatedAt')})")
        return entry

    def delete_report(self, report_id: str, current_status: Any) -> None:
        """
        Permanently delete a report.

        Only pending reports can be deleted; there is no recovery.
        """
        StatusWorkflowEngine.check_can_delete(current_status)
        try:
            self.store.delete(COLLECTION, report_id)
        except Exception as e:
            logger.error(f"Failed to delete report {report_id}: {e}", exc_info=True)
            raise
        logger.info(f"Report {report_id} deleted")


# Global service instance (singleton pattern)
_report_service = None


def get_report_service() -> ReportService:
    """
    Get or create ReportService singleton instance.

    Returns:
        ReportService: The global report service instance
    """
    global _report_service
    if _report_service is None:
        _report_service = ReportService()
    return _report_service
