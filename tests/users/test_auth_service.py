from dataclasses import replace

import pytest

from src.kpi_system.kpi_system.core.enums import Role
from src.kpi_system.kpi_system.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.kpi_system.kpi_system.users.service import AuthService, UserService


def test_authenticate_ok(users):
    s_user = AuthService(users).authenticate(" am_user ", "secret123")
    assert (s_user.user_id, s_user.role) == (2, Role.AM)


@pytest.mark.parametrize("username,password", [("am_user", "wrong"), ("ghost", "secret123"), ("", "")])
def test_authenticate_fails(users, username, password):
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate(username, password)


def test_placeholder_hash_is_rejected(users):
    users._by_id[2] = replace(users.get_by_id(2), password_hash="CHANGE_ME")
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("am_user", "secret123")


def test_create_account_rules(users):
    service = UserService(users)

    with pytest.raises(AuthorizationError):
        service.create_account(current_role=Role.AM, full_name="A", username="a", password="123456", role=Role.AM)
    with pytest.raises(ValidationError):
        service.create_account(current_role=Role.ADMIN, full_name="A", username="a", password="123", role=Role.AM)
    with pytest.raises(ValidationError):
        service.create_account(
            current_role=Role.ADMIN, full_name="A", username="am_user", password="123456", role=Role.AM
        )

    user_id = service.create_account(
        current_role=Role.ADMIN, full_name="Nguyễn Văn A", username="nva", password="123456", role=Role.PM
    )
    assert users.get_by_id(user_id).role == Role.PM


def test_admin_cannot_be_deleted(users):
    with pytest.raises(ValidationError):
        UserService(users).delete_user(current_role=Role.ADMIN, user_id=1)


def test_login_route_sets_session(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "secret123"})

    assert resp.status_code == 200
    assert resp.get_json()["role"] == "admin"
    assert client.get("/api/auth/me").get_json()["user_id"] == 1


def test_login_route_wrong_password(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
