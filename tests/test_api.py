"""
HTTP surface tests. Services are wired to a fresh in-memory store per test.
"""

from tests.conftest import ADMIN_UID, CITIZEN_ID

CITIZEN = {"X-User-ID": CITIZEN_ID}
ADMIN = {"X-User-ID": ADMIN_UID}


def _submit(client, **overrides):
    payload = {
        "category": "Garbage",
        "title": "Overflowing bin",
        "description": "Bin near the market has not been emptied for a week.",
        "location": "Main Market, Block C",
        "priority": "High",
    }
    payload.update(overrides)
    return client.post("/reports", json=payload, headers=CITIZEN)


class TestReports:
    def test_submit_report(self, client, store):
        response = _submit(client)

        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == CITIZEN_ID
        assert body["status"] == "pending"
        assert body["priority"] == "High"
        assert len(body["timeline"]) == 1
        assert body["timeline"][0]["note"] == "Report submitted"
        assert store.get("reports", body["id"]) is not None

    def test_submit_requires_caller(self, client):
        response = client.post("/reports", json={"category": "Garbage", "title": "Bin"})
        assert response.status_code == 422

    def test_submit_rejects_empty_title(self, client):
        assert _submit(client, title="").status_code == 422

    def test_list_my_reports(self, client, seed_report):
        older = seed_report("pending")
        newer = seed_report("resolved")
        seed_report("pending", user_id="someone-else")

        response = client.get("/reports", headers=CITIZEN)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [newer, older]

    def test_edit_pending_report(self, client, seed_report):
        report_id = seed_report("pending")

        response = client.patch(f"/reports/{report_id}", json={"title": "  Bin still full "}, headers=CITIZEN)

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Bin still full"
        assert body["status"] == "pending"
        assert body["timeline"][-1]["note"] == "Report details updated by citizen"
        assert len(body["timeline"]) == 2

    def test_edit_resolved_report_is_forbidden(self, client, seed_report, store):
        report_id = seed_report("resolved")

        response = client.patch(f"/reports/{report_id}", json={"title": "New"}, headers=CITIZEN)

        assert response.status_code == 403
        assert "resolved" in response.json()["detail"]
        assert store.get("reports", report_id)["title"] == "Overflowing bin"

    def test_edit_with_blank_title(self, client, seed_report):
        report_id = seed_report("assigned")

        response = client.patch(f"/reports/{report_id}", json={"title": "   "}, headers=CITIZEN)

        assert response.status_code == 422
        assert response.json()["field"] == "title"

    def test_delete_pending_report(self, client, seed_report, store):
        report_id = seed_report("pending")

        response = client.delete(f"/reports/{report_id}", headers=CITIZEN)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert store.get("reports", report_id) is None

    def test_delete_assigned_report_is_forbidden(self, client, seed_report, store):
        report_id = seed_report("assigned")

        response = client.delete(f"/reports/{report_id}", headers=CITIZEN)

        assert response.status_code == 403
        assert store.get("reports", report_id) is not None

    def test_other_users_report(self, client, seed_report):
        report_id = seed_report("pending", user_id="someone-else")

        assert client.get(f"/reports/{report_id}", headers=CITIZEN).status_code == 403
        assert client.delete(f"/reports/{report_id}", headers=CITIZEN).status_code == 403

    def test_missing_report(self, client, store):
        assert client.get("/reports/missing", headers=CITIZEN).status_code == 404


class TestAdmin:
    def test_non_admin_is_rejected(self, client, seed_report):
        report_id = seed_report("pending")

        response = client.patch(f"/admin/reports/{report_id}/status", json={"status": "resolved"}, headers=CITIZEN)

        assert response.status_code == 403

    def test_status_change_appends_entry_and_notifies(self, client, admin_uid, seed_report, store):
        report_id = seed_report("pending")

        response = client.patch(f"/admin/reports/{report_id}/status", json={"status": "inProgress"}, headers=ADMIN)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "inProgress"
        assert body["timeline"][-1]["note"] == "Status changed to inProgress"

        notifications = store.query("notifications", [("userId", "==", CITIZEN_ID)])
        assert len(notifications) == 1
        assert notifications[0]["statusKey"] == "inProgress"

    def test_status_change_from_closed(self, client, admin_uid, seed_report):
        report_id = seed_report("closed")

        response = client.patch(f"/admin/reports/{report_id}/status", json={"status": "pending"}, headers=ADMIN)

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_unknown_status_is_rejected(self, client, admin_uid, seed_report):
        report_id = seed_report("pending")

        response = client.patch(f"/admin/reports/{report_id}/status", json={"status": "done"}, headers=ADMIN)

        assert response.status_code == 422

    def test_status_change_on_missing_report(self, client, admin_uid):
        response = client.patch("/admin/reports/missing/status", json={"status": "closed"}, headers=ADMIN)
        assert response.status_code == 404

    def test_list_reports_filtered(self, client, admin_uid, seed_report):
        seed_report("pending")
        resolved = seed_report("resolved", user_id="someone-else")

        response = client.get("/admin/reports", params={"status": "resolved"}, headers=ADMIN)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [resolved]

    def test_assign_report(self, client, admin_uid, seed_report):
        report_id = seed_report("pending")

        response = client.post(
            f"/admin/reports/{report_id}/assign",
            json={"userId": "staff-1", "userName": "Ali"},
            headers=ADMIN,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "assigned"
        assert body["assignedTo"] == "staff-1"

    def test_department_crud(self, client, admin_uid):
        created = client.post("/admin/departments", json={"name": "Parks", "color": "#00ff00"}, headers=ADMIN)
        assert created.status_code == 201
        department_id = created.json()["id"]
        assert created.json()["isActive"] is True

        updated = client.patch(f"/admin/departments/{department_id}", json={"isActive": False}, headers=ADMIN)
        assert updated.status_code == 200

        public = client.get("/departments")
        assert department_id not in [d["id"] for d in public.json()]
        everything = client.get("/departments", params={"activeOnly": "false"})
        assert department_id in [d["id"] for d in everything.json()]

        deleted = client.delete(f"/admin/departments/{department_id}", headers=ADMIN)
        assert deleted.status_code == 200
        assert client.get("/departments", params={"activeOnly": "false"}).json() == []

    def test_create_department_user(self, client, admin_uid, auth_provider, store):
        response = client.post(
            "/admin/users",
            json={"fullName": "Sara Khan", "email": "sara@city.gov", "departmentId": "Water"},
            headers=ADMIN,
        )

        assert response.status_code == 201
        body = response.json()
        assert auth_provider.accounts["sara@city.gov"]["password"] == body["tempPassword"]
        user = store.get("users", body["uid"])
        assert user["role"] == "departmentUser"
        assert user["createdBy"] == ADMIN_UID

        listed = client.get("/admin/users", params={"departmentId": "Water"}, headers=ADMIN)
        assert [u["id"] for u in listed.json()] == [body["uid"]]

    def test_duplicate_department_user_email(self, client, admin_uid):
        payload = {"fullName": "Sara Khan", "email": "sara@city.gov", "departmentId": "Water"}
        client.post("/admin/users", json=payload, headers=ADMIN)

        response = client.post("/admin/users", json=payload, headers=ADMIN)

        assert response.status_code == 400


class TestNotifications:
    def test_list_and_mark_read(self, client, notification_service):
        first = notification_service.add_notification({"userId": CITIZEN_ID, "titleKey": "a", "messageKey": "b"})
        notification_service.add_notification({"userId": CITIZEN_ID, "titleKey": "c", "messageKey": "d"})

        listed = client.get("/notifications", headers=CITIZEN).json()
        assert len(listed) == 2
        assert not any(n["read"] for n in listed)

        assert client.post(f"/notifications/{first}/read", headers=CITIZEN).status_code == 200
        assert notification_service.get_notification(first)["read"] is True

        response = client.post("/notifications/read-all", headers=CITIZEN)
        assert response.json()["message"] == "1 notification(s) marked as read"

    def test_cannot_read_someone_elses(self, client, notification_service):
        notification_id = notification_service.add_notification({"userId": "someone-else", "titleKey": "a", "messageKey": "b"})

        response = client.post(f"/notifications/{notification_id}/read", headers=CITIZEN)

        assert response.status_code == 403


class TestUsers:
    def test_register_citizen(self, client, store):
        response = client.post("/users/citizens", json={"phone": CITIZEN_ID, "firstName": "Ayesha", "lastName": "Malik"})

        assert response.status_code == 201
        assert response.json()["id"] == CITIZEN_ID
        assert response.json()["name"] == "Ayesha Malik"
        assert store.get("users", CITIZEN_ID)["role"] == "citizen"

    def test_register_twice_conflicts(self, client):
        client.post("/users/citizens", json={"phone": CITIZEN_ID})

        response = client.post("/users/citizens", json={"phone": CITIZEN_ID})

        assert response.status_code == 409

    def test_profile_update_is_self_only(self, client):
        client.post("/users/citizens", json={"phone": CITIZEN_ID})

        forbidden = client.patch(f"/users/{CITIZEN_ID}", json={"name": "X"}, headers={"X-User-ID": "other"})
        allowed = client.patch(f"/users/{CITIZEN_ID}", json={"name": "Ayesha"}, headers=CITIZEN)

        assert forbidden.status_code == 403
        assert allowed.status_code == 200
        assert allowed.json()["name"] == "Ayesha"

    def test_profile_update_requires_caller_header(self, client):
        client.post("/users/citizens", json={"phone": CITIZEN_ID})

        response = client.patch(f"/users/{CITIZEN_ID}", json={"name": "Ayesha"})

        assert response.status_code == 422

    def test_profile_lookup_by_uid(self, client):
        client.post("/users/citizens", json={"phone": CITIZEN_ID})
        client.put(f"/users/{CITIZEN_ID}/uid", json={"uid": "auth-9"}, headers=CITIZEN)

        response = client.get("/users/auth-9")

        assert response.status_code == 200
        assert response.json()["id"] == CITIZEN_ID

    def test_auth_id_cannot_be_bound_by_another_caller(self, client, store):
        client.post("/users/citizens", json={"phone": CITIZEN_ID, "uid": "auth-1"})

        response = client.put(f"/users/{CITIZEN_ID}/uid", json={"uid": "intruder"}, headers={"X-User-ID": "intruder"})

        assert response.status_code == 403
        assert store.get("users", CITIZEN_ID)["uid"] == "auth-1"
        assert client.get("/users/intruder").status_code == 404

    def test_auth_id_for_unknown_phone(self, client, store):
        response = client.put("/users/000000000000/uid", json={"uid": "auth-9"}, headers={"X-User-ID": "000000000000"})

        assert response.status_code == 404
        assert store.get("users", "000000000000") is None


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_database_health(self, client, store):
        response = client.get("/health/db")
        assert response.status_code == 200
        assert response.json()["connected"] is True
