"""
Department Service - municipal departments reports are routed to.
"""

from app.config.firebase import get_store
from app.core.exceptions import FieldValidationError
from app.models.department import DEFAULT_DEPARTMENTS
from app.services.document_store import DocumentStore
from app.utils.firestore_helpers import normalize_timestamps
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

COLLECTION = "departments"


class DepartmentService:
    """Reference-data CRUD; departments have no lifecycle beyond isActive."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or get_store()

    def get_departments(self, active_only: bool = False) -> List[Dict[str, Any]]:
        filters = [("isActive", "==", True)] if active_only else []
        departments = [normalize_timestamps(d) for d in self.store.query(COLLECTION, filters)]
        return sorted(departments, key=lambda d: d.get("name") or "")

    def get_department(self, department_id: str) -> Optional[Dict[str, Any]]:
        department = self.store.get(COLLECTION, department_id)
        return normalize_timestamps(department) if department else None

    def add_department(self, department_data: Dict[str, Any], department_id: Optional[str] = None) -> str:
        if not str(department_data.get("name") or "").strip():
            raise FieldValidationError("Department name is required", field="name")

        data = dict(department_data)
        data["name"] = data["name"].strip()
        data["isActive"] = True
        data["createdAt"] = self.store.server_timestamp()
        try:
            department_id = self.store.put(COLLECTION, data, document_id=department_id)
        except Exception as e:
            logger.error(f"Failed to add department: {e}", exc_info=True)
            raise
        logger.info(f"Department added: {department_id} ({data['name']})")
        return department_id

    def update_department(self, department_id: str, update_data: Dict[str, Any]) -> None:
        updates = dict(update_data)
        updates.pop("id", None)
        updates["updatedAt"] = self.store.server_timestamp()
        try:
            self.store.update(COLLECTION, department_id, updates)
        except Exception as e:
            logger.error(f"Failed to update department {department_id}: {e}")
            raise

    def delete_department(self, department_id: str) -> None:
        try:
            self.store.delete(COLLECTION, department_id)
        except Exception as e:
            logger.error(f"Failed to delete department {department_id}: {e}")
            raise
        logger.info(f"Department deleted: {department_id}")

    def seed_defaults(self) -> List[str]:
        """
        Insert DEFAULT_DEPARTMENTS that are not stored yet (by ID).

        Returns:
            IDs of departments created
        """
        created = []
        for department in DEFAULT_DEPARTMENTS:
            if self.store.get(COLLECTION, department["id"]) is not None:
                continue
            fields = {k: v for k, v in department.items() if k != "id"}
            created.append(self.add_department(fields, department_id=department["id"]))
        return created


# Global service instance
_department_service = None


def get_department_service() -> DepartmentService:
    """Get or create DepartmentService singleton."""
    global _department_service
    if _department_service is None:
        _department_service = DepartmentService()
    return _department_service
