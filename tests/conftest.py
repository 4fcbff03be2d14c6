"""
Shared fixtures: every test gets a fresh in-memory store and services
wired to it. API tests get a TestClient whose service dependencies are
overridden with those services.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from app.config import firebase
from app.core.exceptions import AccountError
from app.main import app
from app.routes import dependencies
from app.services.admin_service import AdminService
from app.services.auth_provider import AuthProvider
from app.services.client_cache import ClientStateCache
from app.services.department_service import DepartmentService
from app.services.document_store import InMemoryDocumentStore
from app.services.notification_service import NotificationService
from app.services.report_service import ReportService
from app.services.user_service import UserService

CITIZEN_ID = "923001234567"
ADMIN_UID = "admin-uid-1"


class FakeAuthProvider(AuthProvider):
    """Records accounts instead of calling Firebase Authentication."""

    def __init__(self):
        self.accounts: Dict[str, Dict[str, str]] = {}
        self.reset_requests: List[str] = []

    def create_account(self, email: str, password: str, display_name: str) -> str:
        if email in self.accounts:
            raise AccountError("This email is already registered")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = {"uid": uid, "password": password, "display_name": display_name}
        return uid

    def send_password_reset(self, email: str) -> str:
        if email not in self.accounts:
            raise AccountError("No account exists for this email")
        self.reset_requests.append(email)
        return f"https://auth.example.com/reset?email={email}"


@pytest.fixture
def store():
    store = InMemoryDocumentStore()
    firebase.set_store(store)
    yield store
    firebase.set_store(None)


@pytest.fixture
def auth_provider():
    return FakeAuthProvider()


@pytest.fixture
def notification_service(store):
    return NotificationService(store)


@pytest.fixture
def report_service(store, notification_service):
    return ReportService(store, notification_service)


@pytest.fixture
def admin_service(store, notification_service, auth_provider):
    return AdminService(store, notification_service, auth_provider)


@pytest.fixture
def user_service(store):
    return UserService(store)


@pytest.fixture
def department_service(store):
    return DepartmentService(store)


@pytest.fixture
def cache(report_service, notification_service, admin_service, department_service):
    return ClientStateCache(report_service, notification_service, admin_service, department_service)


@pytest.fixture
def admin_uid(store):
    store.put("users", {"uid": ADMIN_UID, "role": "admin", "fullName": "City Admin"}, document_id=ADMIN_UID)
    return ADMIN_UID


@pytest.fixture
def seed_report(store):
    """
    Factory that writes a report directly to the store in any status.

    Each call is one minute newer than the previous one.
    """
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _seed(status: str = "pending", user_id: str = CITIZEN_ID, **fields) -> str:
        counter["n"] += 1
        created_at = base + timedelta(minutes=counter["n"])
        report = {
            "userId": user_id,
            "category": "Garbage",
            "title": "Overflowing bin",
            "description": "Not emptied for a week",
            "location": "Main Market",
            "priority": "Medium",
            "status": status,
            "media": [],
            "timeline": [{"date": created_at.isoformat(), "note": "Report submitted", "status": "pending"}],
            "createdAt": created_at,
            "updatedAt": created_at,
        }
        report.update(fields)
        return store.put("reports", report)

    return _seed


@pytest.fixture
def client(report_service, notification_service, admin_service, user_service, department_service):
    app.dependency_overrides[dependencies.get_report_service] = lambda: report_service
    app.dependency_overrides[dependencies.get_notification_service] = lambda: notification_service
    app.dependency_overrides[dependencies.get_admin_service] = lambda: admin_service
    app.dependency_overrides[dependencies.get_user_service] = lambda: user_service
    app.dependency_overrides[dependencies.get_department_service] = lambda: department_service
    yield TestClient(app)
    app.dependency_overrides.clear()
