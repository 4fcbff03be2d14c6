"""
Report status rules.

DESIGN PRINCIPLES:
- Five canonical statuses, one serialization each
- Citizens may edit only while pending/assigned, delete only while pending
- Admin transitions are unrestricted (any status to any status)
- Every mutation appends exactly one timeline entry; entries are never
  rewritten or removed
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Union
from app.core.exceptions import StatusPermissionError
from app.utils.firestore_helpers import now_iso
import logging

logger = logging.getLogger(__name__)


class ReportStatus(str, Enum):
    """
    Report lifecycle.

    pending → assigned → inProgress → resolved/closed
    """
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "inProgress"
    RESOLVED = "resolved"
    CLOSED = "closed"


StatusLike = Union[ReportStatus, str, None]


class StatusWorkflowEngine:
    """
    Permission table for citizen edits and deletes.

    Unknown or missing statuses are treated as locked.
    """

    EDITABLE_STATUSES: FrozenSet[ReportStatus] = frozenset({ReportStatus.PENDING, ReportStatus.ASSIGNED})
    DELETABLE_STATUSES: FrozenSet[ReportStatus] = frozenset({ReportStatus.PENDING})

    @staticmethod
    def parse(status: StatusLike) -> Optional[ReportStatus]:
        if isinstance(status, ReportStatus):
            return status
        try:
            return ReportStatus(status)
        except ValueError:
            return None

    @classmethod
    def can_edit(cls, status: StatusLike) -> bool:
        return cls.parse(status) in cls.EDITABLE_STATUSES

    @classmethod
    def can_delete(cls, status: StatusLike) -> bool:
        return cls.parse(status) in cls.DELETABLE_STATUSES

    @classmethod
    def check_can_edit(cls, status: StatusLike) -> ReportStatus:
        """
        Raise StatusPermissionError unless a citizen may edit in this status.

        Returns:
            The parsed status
        """
        if not cls.can_edit(status):
            raise StatusPermissionError(
                'Cannot edit this report. Reports can only be edited when status is "pending" or "assigned". '
                f"Current status: {_label(status)}"
            )
        return cls.parse(status)

    @classmethod
    def check_can_delete(cls, status: StatusLike) -> ReportStatus:
        if not cls.can_delete(status):
            raise StatusPermissionError(
                f'Reports cannot be deleted when status is "{_label(status)}". '
                "Only pending reports can be deleted."
            )
        return cls.parse(status)

    @staticmethod
    def create_timeline_entry(note: str, status: StatusLike) -> Dict[str, str]:
        """
        Build one timeline entry for the report's audit trail.

        Args:
            note: What happened
            status: Report status after the change

        Returns:
            {"date": ISO timestamp, "note": note, "status": canonical status}
        """
        parsed = StatusWorkflowEngine.parse(status)
        return {
            "date": now_iso(),
            "note": note,
            "status": parsed.value if parsed else str(status),
        }


def _label(status: StatusLike) -> str:
    return status.value if isinstance(status, ReportStatus) else str(status)
