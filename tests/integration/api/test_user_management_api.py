"""End-to-end tests of the user management API on in-memory SQLite.

The app runs its real lifespan: tables are created and the built-in admin
is seeded with the configured initial password.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from mangle_config import Settings
from mangle_identity.presentation.api.app import API_V1_PREFIX, create_app

BASE = f"{API_V1_PREFIX}/user-management"
INITIAL_ADMIN_PASSWORD = "initial-admin-pw"
NEW_ADMIN_PASSWORD = "brand-new-admin-pw"
ADMIN = ("admin", INITIAL_ADMIN_PASSWORD)
ADMIN_AFTER_RESET = ("admin", NEW_ADMIN_PASSWORD)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url_override="sqlite+aiosqlite://",
        default_domain="mangle.local",
        admin_username="admin",
        admin_initial_password=SecretStr(INITIAL_ADMIN_PASSWORD),
        password_hash_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    """Client whose admin already completed the first-login reset."""
    response = client.put(
        f"{BASE}/users/admin",
        json={"name": "admin", "password": NEW_ADMIN_PASSWORD},
        auth=ADMIN,
    )
    assert response.status_code == 200
    return client


class TestHealth:
    def test_health_is_unauthenticated(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["api_base"] == API_V1_PREFIX


class TestAdminFirstLogin:
    def test_reset_pending_after_bootstrap(self, client):
        response = client.get(f"{BASE}/password/reset")

        assert response.status_code == 200
        assert response.json() is True

    def test_admin_is_blocked_from_user_endpoints_until_reset(self, client):
        response = client.get(f"{BASE}/users", auth=ADMIN)

        assert response.status_code == 403
        assert response.json()["code"] == "ADMIN_PASSWORD_RESET_REQUIRED"

    def test_admin_can_read_own_record_before_reset(self, client):
        response = client.get(f"{BASE}/user", auth=ADMIN)

        assert response.status_code == 200
        body = response.json()
        assert body["fullyQualifiedName"] == "admin@mangle.local"
        assert body["roles"] == ["ADMIN"]

    def test_reset_flow_clears_gate_and_replaces_password(self, client):
        response = client.put(
            f"{BASE}/users/admin",
            json={"name": "admin", "password": NEW_ADMIN_PASSWORD},
            auth=ADMIN,
        )

        assert response.status_code == 200
        assert response.json() is True
        assert client.get(f"{BASE}/password/reset").json() is False
        assert client.get(f"{BASE}/users", auth=ADMIN).status_code == 401
        assert client.get(f"{BASE}/users", auth=ADMIN_AFTER_RESET).status_code == 200

    def test_reset_keeps_admin_roles(self, admin_client):
        response = admin_client.get(f"{BASE}/user", auth=ADMIN_AFTER_RESET)
        assert response.json()["roles"] == ["ADMIN"]

    def test_repeated_reset_still_succeeds(self, admin_client):
        response = admin_client.put(
            f"{BASE}/users/admin",
            json={"name": "admin", "password": "third-admin-pw"},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 200
        assert admin_client.get(f"{BASE}/password/reset").json() is False

    def test_reset_for_unknown_user_keeps_gate(self, client):
        response = client.put(
            f"{BASE}/users/admin",
            json={"name": "ghost", "password": NEW_ADMIN_PASSWORD},
            auth=ADMIN,
        )

        assert response.status_code == 404
        assert client.get(f"{BASE}/password/reset").json() is True

    def test_reset_without_new_password_keeps_gate(self, client):
        response = client.put(
            f"{BASE}/users/admin",
            json={"name": "admin"},
            auth=ADMIN,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert client.get(f"{BASE}/password/reset").json() is True
        assert client.get(f"{BASE}/users", auth=ADMIN).status_code == 403

    def test_reset_status_ignores_stale_credentials(self, admin_client):
        response = admin_client.get(f"{BASE}/password/reset", auth=ADMIN)

        assert response.status_code == 200
        assert response.json() is False

    def test_reset_status_ignores_wrong_credentials(self, client):
        response = client.get(
            f"{BASE}/password/reset",
            auth=("nobody", "not-a-password"),
        )

        assert response.status_code == 200
        assert response.json() is True


class TestAuthentication:
    def test_missing_credentials_are_rejected(self, client):
        response = client.get(f"{BASE}/user")

        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_CONTEXT_ERROR"
        assert response.headers["WWW-Authenticate"] == "Basic"

    def test_wrong_password_is_rejected(self, client):
        response = client.get(f"{BASE}/user", auth=("admin", "not-the-password"))
        assert response.status_code == 401

    def test_fully_qualified_login_name(self, client):
        response = client.get(
            f"{BASE}/user",
            auth=("admin@mangle.local", INITIAL_ADMIN_PASSWORD),
        )
        assert response.status_code == 200

    def test_locked_account_cannot_log_in(self, admin_client):
        admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password", "accountLocked": True},
            auth=ADMIN_AFTER_RESET,
        )

        response = admin_client.get(f"{BASE}/user", auth=("user1", "user1-password"))

        assert response.status_code == 401


class TestUserManagement:
    def test_create_user_in_default_domain(self, admin_client):
        response = admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password", "roles": ["USER"]},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["domain"] == "mangle.local"
        assert body["fullyQualifiedName"] == "user1@mangle.local"
        assert body["accountLocked"] is False
        assert "password" not in body

    def test_created_user_is_listed(self, admin_client):
        created = admin_client.post(
            f"{BASE}/users",
            json={"name": "ops", "domain": "corp.example", "roles": ["OPS"]},
            auth=ADMIN_AFTER_RESET,
        ).json()

        users = admin_client.get(f"{BASE}/users", auth=ADMIN_AFTER_RESET).json()

        listed = {u["fullyQualifiedName"]: u for u in users}
        assert set(listed) == {"admin@mangle.local", "ops@corp.example"}
        assert listed["ops@corp.example"]["roles"] == created["roles"]

    def test_duplicate_create_is_conflict(self, admin_client):
        payload = {"name": "user1", "password": "user1-password"}
        admin_client.post(f"{BASE}/users", json=payload, auth=ADMIN_AFTER_RESET)

        response = admin_client.post(
            f"{BASE}/users",
            json={**payload, "domain": "MANGLE.LOCAL"},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_USER"

    def test_update_unknown_user_is_not_found(self, admin_client):
        response = admin_client.put(
            f"{BASE}/users",
            json={"name": "ghost", "roles": ["USER"]},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"
        users = admin_client.get(f"{BASE}/users", auth=ADMIN_AFTER_RESET).json()
        assert [u["name"] for u in users] == ["admin"]

    def test_update_user_roles(self, admin_client):
        admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password", "roles": ["USER"]},
            auth=ADMIN_AFTER_RESET,
        )

        response = admin_client.put(
            f"{BASE}/users",
            json={"name": "user1", "roles": ["USER", "AUDITOR"]},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 200
        assert response.json()["roles"] == ["AUDITOR", "USER"]

    def test_new_user_can_read_own_record(self, admin_client):
        admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password"},
            auth=ADMIN_AFTER_RESET,
        )

        response = admin_client.get(f"{BASE}/user", auth=("user1", "user1-password"))

        assert response.status_code == 200
        assert response.json()["fullyQualifiedName"] == "user1@mangle.local"

    def test_regular_user_can_list_users(self, admin_client):
        admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password"},
            auth=ADMIN_AFTER_RESET,
        )

        response = admin_client.get(
            f"{BASE}/users",
            auth=("user1", "user1-password"),
        )

        assert response.status_code == 200

    def test_name_with_separator_is_rejected(self, admin_client):
        response = admin_client.post(
            f"{BASE}/users",
            json={"name": "a@b", "domain": "corp.example"},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_password_over_bcrypt_limit_is_rejected(self, admin_client):
        """50 characters pass the schema but are 100 bytes in UTF-8."""
        response = admin_client.post(
            f"{BASE}/users",
            json={"name": "user2", "password": "é" * 50},
            auth=ADMIN_AFTER_RESET,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_created_user_round_trips_through_list(self, admin_client):
        created = admin_client.post(
            f"{BASE}/users",
            json={
                "name": "user1",
                "password": "user1-password",
                "roles": ["USER"],
                "accountLocked": False,
            },
            auth=ADMIN_AFTER_RESET,
        ).json()

        users = admin_client.get(f"{BASE}/users", auth=ADMIN_AFTER_RESET).json()

        listed = next(u for u in users if u["name"] == "user1")
        assert listed == created

    def test_updated_user_round_trips_through_list(self, admin_client):
        admin_client.post(
            f"{BASE}/users",
            json={"name": "user1", "password": "user1-password"},
            auth=ADMIN_AFTER_RESET,
        )
        updated = admin_client.put(
            f"{BASE}/users",
            json={"name": "user1", "roles": ["AUDITOR"]},
            auth=ADMIN_AFTER_RESET,
        ).json()

        users = admin_client.get(f"{BASE}/users", auth=ADMIN_AFTER_RESET).json()

        assert next(u for u in users if u["name"] == "user1") == updated
