"""
User Service - citizen accounts in Firestore.

Citizens are keyed by phone number; the Firebase Auth UID is stored as a
field and may change between logins.
"""

from app.config.firebase import get_store
from app.core.exceptions import FieldValidationError
from app.models.user import UserRole
from app.services.document_store import DocumentStore
from app.utils.firestore_helpers import normalize_timestamps, now_iso
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

COLLECTION = "users"


class UserService:
    """
    Service for citizen user management.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store or get_store()

    def check_user_exists(self, phone: str) -> bool:
        try:
            return self.store.get(COLLECTION, phone) is not None
        except Exception as e:
            logger.error(f"Failed to check user existence: {str(e)}")
            raise

    def register_citizen(
        self,
        phone: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        gender: Optional[str] = None,
        uid: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Register a new citizen using the phone number as document ID.

        Returns:
            User dict with ISO timestamps for immediate client state
        """
        if not phone or not phone.strip():
            raise FieldValidationError("Phone number is required", field="phone")

        phone = phone.strip()
        now = self.store.server_timestamp()
        user_doc = {
            "uid": uid or None,
            "phone": phone,
            "name": f"{first_name or ''} {last_name or ''}".strip(),
            "firstName": first_name or "",
            "lastName": last_name or "",
            "gender": gender or None,
            "role": UserRole.CITIZEN.value,
            "status": "active",
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            self.store.put(COLLECTION, user_doc, document_id=phone)
        except Exception as e:
            logger.error(f"Failed to register citizen: {str(e)}", exc_info=True)
            raise

        logger.info(f"Citizen registered: {phone}")
        timestamp = now_iso()
        return {**user_doc, "id": phone, "createdAt": timestamp, "updatedAt": timestamp}

    def get_user_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a user by document ID (phone or UID), falling back to a lookup
        on the uid field.

        Returns:
            User dict with ISO timestamps, or None if not found
        """
        if not user_id:
            return None

        user = self.store.get(COLLECTION, user_id)
        if user is None:
            matches = self.store.query(COLLECTION, [("uid", "==", user_id)])
            user = matches[0] if matches else None

        if user is None:
            return None
        return normalize_timestamps(user)

    def update_user_auth_id(self, phone: str, new_uid: str) -> None:
        """Record a new Auth UID for a phone-keyed user. Failures are logged only."""
        try:
            self.store.update(COLLECTION, phone, {"uid": new_uid, "updatedAt": self.store.server_timestamp()})
        except Exception as e:
            logger.error(f"Failed to update auth ID for {phone}: {str(e)}")

    def update_user_profile(self, user_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update name and/or phone.

        Raises:
            FieldValidationError: missing user ID, or a supplied field empty after trimming
        """
        if not user_id:
            raise FieldValidationError("User ID is required", field="id")

        updates: Dict[str, Any] = {}
        for field, label in (("name", "Name"), ("phone", "Phone number")):
            if update_data.get(field) is None:
                continue
            trimmed = str(update_data[field]).strip()
            if not trimmed:
                raise FieldValidationError(f"{label} cannot be empty", field=field)
            updates[field] = trimmed

        updates["updatedAt"] = self.store.server_timestamp()

        try:
            self.store.update(COLLECTION, user_id, updates)
        except Exception as e:
            logger.error(f"Failed to update profile for {user_id}: {str(e)}")
            raise

        return updates


# Global service instance (singleton pattern)
_user_service = None


def get_user_service() -> UserService:
    """
    Get or create UserService singleton instance.

    Returns:
        UserService: The global user service instance
    """
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
