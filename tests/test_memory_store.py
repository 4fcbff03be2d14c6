import threading

import pytest

from app.core.exceptions import NotFoundError
from app.services.document_store import InMemoryDocumentStore


def test_returned_documents_are_copies():
    store = InMemoryDocumentStore()
    doc_id = store.put("reports", {"timeline": []})

    store.get("reports", doc_id)["timeline"].append("mutated")

    assert store.get("reports", doc_id)["timeline"] == []


def test_update_applies_fields_and_array_append_together():
    store = InMemoryDocumentStore()
    doc_id = store.put("reports", {"status": "pending", "timeline": [{"note": "a"}]})

    store.update("reports", doc_id, {"status": "assigned"}, array_appends={"timeline": {"note": "b"}})

    assert store.get("reports", doc_id) == {
        "id": doc_id,
        "status": "assigned",
        "timeline": [{"note": "a"}, {"note": "b"}],
    }


def test_update_missing_document():
    with pytest.raises(NotFoundError):
        InMemoryDocumentStore().update("reports", "missing", {"status": "closed"})


def test_query_filters():
    store = InMemoryDocumentStore()
    store.put("notifications", {"userId": "a", "read": False}, document_id="1")
    store.put("notifications", {"userId": "a", "read": True}, document_id="2")
    store.put("notifications", {"userId": "b", "read": False}, document_id="3")

    unread = store.query("notifications", [("userId", "==", "a"), ("read", "==", False)])

    assert [d["id"] for d in unread] == ["1"]
    assert len(store.query("notifications", [("userId", "in", ["a", "b"])])) == 3


def test_delete_missing_document_is_a_no_op():
    InMemoryDocumentStore().delete("reports", "missing")


def test_persists_to_json(tmp_path):
    path = str(tmp_path / "mock_db.json")
    store = InMemoryDocumentStore(path)
    doc_id = store.put("departments", {"name": "Parks", "createdAt": store.server_timestamp()})

    reloaded = InMemoryDocumentStore(path)

    assert reloaded.get("departments", doc_id)["name"] == "Parks"


def test_query_snapshots_are_consistent_during_concurrent_updates():
    store = InMemoryDocumentStore()
    doc_id = store.put("reports", {"userId": "a", "count": 0, "timeline": []})
    done = threading.Event()

    def writer():
        for n in range(1, 501):
            store.update("reports", doc_id, {"count": n}, array_appends={"timeline": {"note": str(n)}})
        done.set()

    thread = threading.Thread(target=writer)
    thread.start()
    snapshots = []
    while not done.is_set():
        snapshots.extend(store.query("reports", [("userId", "==", "a")]))
    thread.join()

    assert all(len(s["timeline"]) == s["count"] for s in snapshots)
    assert store.get("reports", doc_id)["count"] == 500
