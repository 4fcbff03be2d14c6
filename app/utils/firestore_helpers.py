"""
Firestore query and timestamp helpers.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


def where_filter(query, field_path: str, op_string: str, value):
    """
    Helper for Firestore queries.

    Uses positional arguments, which firebase_admin still supports.

    Usage:
        query = where_filter(collection, "userId", "==", "9230012345")
    """
    return query.where(field_path, op_string, value)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a stored timestamp to an aware datetime.

    Accepts datetimes (including Firestore's DatetimeWithNanoseconds),
    objects with to_datetime(), {"seconds": ...} mappings, epoch numbers and
    ISO-8601 strings. Returns None for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if hasattr(value, "to_datetime"):
        return to_datetime(value.to_datetime())
    if isinstance(value, dict) and value.get("seconds") is not None:
        return datetime.fromtimestamp(value["seconds"], tz=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return to_datetime(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def to_iso(value: Any) -> Optional[str]:
    """ISO string for a stored timestamp, None when missing or unresolvable."""
    converted = to_datetime(value)
    return converted.isoformat() if converted else None


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_timestamps(document: Dict[str, Any], fields: Iterable[str] = ("createdAt", "updatedAt")) -> Dict[str, Any]:
    """Rewrite timestamp fields of a document to ISO strings in place."""
    for field in fields:
        document[field] = to_iso(document.get(field))
    return document


def newest_first(documents, field: str = "createdAt"):
    """Sort documents by an ISO/timestamp field, newest first."""
    epoch = datetime.fromtimestamp(0, tz=timezone.utc)
    return sorted(documents, key=lambda d: to_datetime(d.get(field)) or epoch, reverse=True)
