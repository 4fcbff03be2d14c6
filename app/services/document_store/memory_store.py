"""
In-memory document store for local development (USE_MOCK_DB) and tests.

Optionally persists every collection to a JSON file so a dev server keeps
its data across restarts.
"""

from app.core.exceptions import NotFoundError
from app.services.document_store.base import DocumentStore, Filter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
import copy
import json
import logging
import os
import threading
import uuid

logger = logging.getLogger(__name__)


def _matches(document: Dict[str, Any], field_path: str, op: str, value: Any) -> bool:
    actual = document.get(field_path)
    if op == "==":
        return actual == value
    if op == "!=":
        return actual != value
    if op == "in":
        return actual in value
    if op == "array_contains":
        return isinstance(actual, list) and value in actual
    raise ValueError(f"Unsupported filter operator: {op}")


class InMemoryDocumentStore(DocumentStore):
    """Dict-of-dicts store: {collection: {document_id: fields}}."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()
        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                self._collections = json.load(f)
            logger.info(f"Loaded mock DB from {path}")

    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._collections.get(collection, {}).get(document_id)
            if data is None:
                return None
            document = copy.deepcopy(data)
        document["id"] = document_id
        return document

    def query(self, collection: str, filters: Sequence[Filter] = ()) -> List[Dict[str, Any]]:
        results = []
        with self._lock:
            for document_id, data in self._collections.get(collection, {}).items():
                if all(_matches(data, *f) for f in filters):
                    document = copy.deepcopy(data)
                    document["id"] = document_id
                    results.append(document)
        return results

    def put(self, collection: str, fields: Dict[str, Any], document_id: Optional[str] = None) -> str:
        document_id = document_id or uuid.uuid4().hex[:20]
        data = copy.deepcopy(fields)
        data.pop("id", None)
        with self._lock:
            self._collections.setdefault(collection, {})[document_id] = data
            self._save()
        return document_id

    def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        array_appends: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        with self._lock:
            data = self._collections.get(collection, {}).get(document_id)
            if data is None:
                raise NotFoundError(collection, document_id)
            data.update(copy.deepcopy(fields))
            for field, entry in (array_appends or {}).items():
                data.setdefault(field, []).append(copy.deepcopy(entry))
            self._save()

    def delete(self, collection: str, document_id: str) -> None:
        with self._lock:
            self._collections.get(collection, {}).pop(document_id, None)
            self._save()

    def server_timestamp(self) -> datetime:
        return datetime.now(timezone.utc)

    def ping(self) -> Dict[str, Any]:
        with self._lock:
            return {"backend": "memory", "collections_count": len(self._collections)}

    def _save(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._collections, f, default=str, indent=2)
