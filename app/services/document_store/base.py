from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

# (field_path, op, value), e.g. ("userId", "==", "9230012345")
Filter = Tuple[str, str, Any]


class DocumentStore(ABC):
    """
    Abstract remote document store.

    Contract:
    - Documents are plain dicts. Returned documents always carry their
      document ID under "id".
    - get() returns None for a missing document; update() raises
      NotFoundError for a missing document; delete() of a missing document
      is a no-op.
    - array_appends on update() are applied in the same write as fields.
    - No ordering, transactional or consistency guarantees beyond the
      backing store's own.
    """

    @abstractmethod
    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def query(self, collection: str, filters: Sequence[Filter] = ()) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def put(self, collection: str, fields: Dict[str, Any], document_id: Optional[str] = None) -> str:
        """Create or overwrite a document. Returns its ID (auto-generated when not given)."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        collection: str,
        document_id: str,
        fields: Dict[str, Any],
        array_appends: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, document_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def server_timestamp(self) -> Any:
        """Value that the store resolves to its own write time."""
        raise NotImplementedError

    def append_to_array_field(self, collection: str, document_id: str, field: str, entry: Dict[str, Any]) -> None:
        self.update(collection, document_id, {}, array_appends={field: entry})

    def ping(self) -> Dict[str, Any]:
        """Lightweight connectivity check used by /health/db."""
        return {"backend": type(self).__name__}
