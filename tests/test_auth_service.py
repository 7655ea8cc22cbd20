from datetime import datetime, timezone
from typing import Optional

import pytest

from app.application.ports.admin_repo import AdminDto, AdminRepository
from app.application.services.auth_service import AuthService, InvalidCredentialsError
from app.exceptions import AuthorizationError
from app.utils import create_jwt_token, decode_jwt_token, hash_password


class FakeAdminRepo(AdminRepository):
    def __init__(self, password_hash: str):
        self.admins = {
            "admin": AdminDto(
                id="admin-1",
                username="admin",
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
        }

    def get_by_username(self, username: str) -> Optional[AdminDto]:
        return self.admins.get(username)

    def get_by_id(self, admin_id: str) -> Optional[AdminDto]:
        for a in self.admins.values():
            if a.id == admin_id:
                return a
        return None

    def create(self, username: str, password_hash: str) -> AdminDto:
        admin = AdminDto(
            id=f"admin-{len(self.admins) + 1}",
            username=username,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.admins[username] = admin
        return admin


@pytest.fixture
def repo(admin_password_hash):
    return FakeAdminRepo(admin_password_hash)


def test_login_returns_token_for_admin(repo):
    svc = AuthService(admin_repo=repo)
    token = svc.login("admin", "s3cret-pass")
    payload = decode_jwt_token(token)
    assert payload["sub"] == "admin-1"
    assert payload["username"] == "admin"


@pytest.mark.parametrize("username,password", [("admin", "wrong"), ("nobody", "s3cret-pass"), ("", ""), (None, None)])
def test_login_rejects_bad_credentials(repo, username, password):
    svc = AuthService(admin_repo=repo)
    with pytest.raises(InvalidCredentialsError) as err:
        svc.login(username, password)
    assert err.value.status_code == 401
    assert err.value.detail == "Invalid username or password"


def test_resolve_returns_admin_for_valid_token(repo):
    svc = AuthService(admin_repo=repo)
    admin = svc.resolve(svc.login("admin", "s3cret-pass"))
    assert admin.username == "admin"


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_resolve_rejects_missing_or_garbage_token(repo, token):
    with pytest.raises(AuthorizationError) as err:
        AuthService(admin_repo=repo).resolve(token)
    assert err.value.detail == "Unauthorized"


def test_resolve_rejects_expired_token(repo):
    token = create_jwt_token({"sub": "admin-1"}, expires_minutes=-1)
    with pytest.raises(AuthorizationError):
        AuthService(admin_repo=repo).resolve(token)


def test_resolve_rejects_token_for_deleted_admin(repo):
    token = create_jwt_token({"sub": "admin-99"})
    with pytest.raises(AuthorizationError):
        AuthService(admin_repo=repo).resolve(token)


def test_ensure_admin_is_idempotent(repo):
    svc = AuthService(admin_repo=repo)
    assert svc.ensure_admin("curator", "pw-12345") is True
    assert svc.ensure_admin("curator", "other") is False
    assert svc.login("curator", "pw-12345")


def test_hash_password_is_salted():
    assert hash_password("x") != hash_password("x")
