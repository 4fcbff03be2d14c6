"""
Document store boundary.

Services talk to DocumentStore only; the concrete store is chosen by
app.config.firebase.get_store() from settings.
"""

from app.services.document_store.base import DocumentStore, Filter
from app.services.document_store.memory_store import InMemoryDocumentStore

__all__ = ["DocumentStore", "Filter", "InMemoryDocumentStore"]
