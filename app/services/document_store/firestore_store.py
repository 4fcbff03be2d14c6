"""
Firestore-backed document store (firebase-admin).
"""

from firebase_admin import firestore
from google.api_core.exceptions import NotFound
from app.core.exceptions import NotFoundError
from app.services.document_store.base import DocumentStore, Filter
from app.utils.firestore_helpers import where_filter
from typing import Any, Dict, List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):

    def __init__(self, db: firestore.Client):
        self.db = db

    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        doc = self.db.collection(collection).document(document_id).get()
        if not doc.exists:
            return None
        data = doc.to_dict()
        data["id"] = doc.id
        return data

    def query(self, collection: str, filters: Sequence[Filter] = ()) -> List[Dict[str, Any]]:
        query = self.db.collection(collection)
        for field_path, op, value in filters:
            query = where_filter(query, field_path, op, value)

        documents = []
        for doc in query.stream():
            data = doc.to_dict()
            data["id"] = doc.id
            documents.append(data)
        return documents

    def put(self, collection: str, fields: Dict[str, Any], document_id: Optional[str] = None) -> str:
        collection_ref = self.db.collection(collection)
        doc_ref = collection_ref.document(document_id) if document_id else collection_ref.document()
        data = dict(fields)
        data.pop("id", None)
        doc_ref.set(data)
        return doc_ref.id

    def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        array_appends: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        payload = dict(fields)
        for field, entry in (array_appends or {}).items():
            payload[field] = firestore.ArrayUnion([entry])

        try:
            self.db.collection(collection).document(document_id).update(payload)
        except NotFound:
            raise NotFoundError(collection, document_id)

    def delete(self, collection: str, document_id: str) -> None:
        self.db.collection(collection).document(document_id).delete()

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP

    def ping(self) -> Dict[str, Any]:
        collections = list(self.db.collections())
        return {"backend": "firestore", "collections_count": len(collections)}
