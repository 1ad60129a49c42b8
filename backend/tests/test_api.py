"""Tests for the HTTP layer: authentication, permission checks, roles and Ask AI"""
import pytest
from fastapi.testclient import TestClient

from hrdesk.api import deps
from hrdesk.domain.enums import PermissionLevel
from hrdesk.main import app
from hrdesk.utils.jwt import JWTValidator
from tests.fakes import ORG_ID, staff_doc

ASK = "/api/v1/ask-ai/query"
ROLES = "/api/v1/roles"


@pytest.fixture
def client(staff_repo, role_repo, records, settings_repo):
    staff_repo.docs["u-off"] = staff_doc("u-off", "Ina Active", "ina@example.com", status="inactive")
    app.dependency_overrides[deps.get_staff_repository] = lambda: staff_repo
    app.dependency_overrides[deps.get_role_repository] = lambda: role_repo
    app.dependency_overrides[deps.get_hr_records_repository] = lambda: records
    app.dependency_overrides[deps.get_settings_repository] = lambda: settings_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(user_id, organization_id=ORG_ID):
    token = JWTValidator().issue_token(user_id, organization_id)
    return {"Authorization": f"Bearer {token}"}


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.post(ASK, json={"query": "help"})
        assert response.status_code == 401
        assert response.json()["message"] == "Access denied. No token provided."

    def test_bad_token(self, client):
        response = client.post(ASK, json={"query": "help"}, headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    def test_unknown_user(self, client):
        response = client.post(ASK, json={"query": "help"}, headers=auth("u-missing"))
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_inactive_account(self, client):
        response = client.post(ASK, json={"query": "help"}, headers=auth("u-off"))
        assert response.status_code == 403
        assert response.json()["message"] == "Account is inactive. Please contact your administrator."

    def test_organization_mismatch(self, client):
        response = client.post(ASK, json={"query": "help"}, headers=auth("u-john", "org-2"))
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid organization context"


class TestAskAi:
    def test_answers_query(self, client):
        response = client.post(ASK, json={"query": "What time did I clock in today?"}, headers=auth("u-john"))
        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "You have not clocked in today."
        assert len(body["actions"]) == 2
        assert "X-Correlation-Id" in response.headers

    def test_blank_query_rejected(self, client):
        response = client.post(ASK, json={"query": "   "}, headers=auth("u-john"))
        assert response.status_code == 400
        assert response.json()["message"] == "Request validation failed"

    def test_unknown_staff_is_a_normal_answer(self, client):
        response = client.post(ASK, json={"query": "Show leave history for Nobody Here"}, headers=auth("u-admin"))
        assert response.status_code == 200
        assert response.json()["answer"] == "No staff found with Nobody Here."

    def test_data_store_failure_is_a_generic_500(self, client, records, monkeypatch):
        async def unavailable(*args, **kwargs):
            raise RuntimeError("connection reset by peer")

        monkeypatch.setattr(records, "latest_check_in", unavailable)
        failing_client = TestClient(app, raise_server_exceptions=False)
        response = failing_client.post(ASK, json={"query": "What time did I clock in today?"}, headers=auth("u-john"))
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "An unexpected error occurred"
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert "answer" not in body
        assert "connection reset" not in response.text


class TestRoles:
    def test_role_without_document_is_denied(self, client):
        response = client.get(ROLES, headers=auth("u-clerk"))
        assert response.status_code == 403
        body = response.json()
        assert body["message"] == "Insufficient permission for Role Management - Role Management"
        assert body["error"]["code"] == "PERMISSION_DENIED"

    def test_view_permission_lists_but_cannot_create(self, client, role_repo):
        role_repo._insert("payroll_officer", {"Role Management": {"Role Management": "view"}})

        response = client.get(ROLES, headers=auth("u-clerk"))
        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["payroll_officer"]

        response = client.post(ROLES, json={"name": "auditor"}, headers=auth("u-clerk"))
        assert response.status_code == 403

    def test_admin_manages_roles(self, client):
        created = client.post(
            ROLES,
            json={"name": "hr_officer", "permissions": {"Leave": {"Leave Tracker": "view"}}},
            headers=auth("u-admin"),
        )
        assert created.status_code == 201
        role_id = created.json()["id"]

        updated = client.put(f"{ROLES}/{role_id}", json={"permissions": {"Leave": "full"}}, headers=auth("u-admin"))
        assert updated.status_code == 200
        assert updated.json()["permissions"] == {"Leave": "full"}

        deleted = client.delete(f"{ROLES}/{role_id}", headers=auth("u-admin"))
        assert deleted.status_code == 204

        missing = client.delete(f"{ROLES}/{role_id}", headers=auth("u-admin"))
        assert missing.status_code == 404

    def test_admin_name_is_reserved(self, client):
        response = client.post(ROLES, json={"name": "Admin"}, headers=auth("u-admin"))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_invalid_level_rejected(self, client):
        response = client.post(ROLES, json={"name": "auditor", "permissions": {"Leave": "write"}},
                               headers=auth("u-admin"))
        assert response.status_code == 400

    def test_duplicate_name_conflicts(self, client, role_repo):
        role_repo._insert("auditor", {})
        response = client.post(ROLES, json={"name": "auditor"}, headers=auth("u-admin"))
        assert response.status_code == 409

    def test_empty_update_rejected(self, client, role_repo):
        role = role_repo._insert("auditor", {})
        response = client.put(f"{ROLES}/{role.role_id}", json={}, headers=auth("u-admin"))
        assert response.status_code == 400
        assert response.json()["message"] == "No changes provided"

    def test_my_role(self, client, role_repo):
        role_repo._insert("payroll_officer", {"Payroll": "full"})
        response = client.get(f"{ROLES}/my-role", headers=auth("u-clerk"))
        assert response.status_code == 200
        assert response.json()["permissions"] == {"Payroll": "full"}

    def test_my_role_without_document(self, client):
        response = client.get(f"{ROLES}/my-role", headers=auth("u-admin"))
        assert response.status_code == 404


class TestRequirePermission:
    def test_misspelled_level_fails_at_definition(self):
        with pytest.raises(ValueError, match="Invalid permission level 'ful'"):
            deps.require_permission("Payroll", "ful")

    def test_level_names_are_exact(self):
        with pytest.raises(ValueError):
            deps.require_permission("Payroll", "Full")
        assert callable(deps.require_permission("Payroll", "full"))
        assert callable(deps.require_permission("Payroll", PermissionLevel.VIEW))
