from dataclasses import dataclass
from typing import Optional

from ..ports.admin_repo import AdminDto, AdminRepository
from ...exceptions import AuthorizationError
from ...utils import create_jwt_token, decode_jwt_token, hash_password, verify_password


class InvalidCredentialsError(AuthorizationError):
    public_message = "Invalid username or password"


@dataclass
class AuthService:
    admin_repo: AdminRepository

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        if not username or not password:
            raise InvalidCredentialsError("missing credentials")
        admin = self.admin_repo.get_by_username(username)
        if admin is None or not verify_password(password, admin.password_hash):
            raise InvalidCredentialsError(f"bad credentials for {username}")
        return create_jwt_token({"sub": admin.id, "username": admin.username})

    def resolve(self, token: Optional[str]) -> AdminDto:
        """Admin behind a session token; AuthorizationError when there is none."""
        if not token:
            raise AuthorizationError("missing token")
        payload = decode_jwt_token(token)
        if not payload or not payload.get("sub"):
            raise AuthorizationError("invalid or expired token")
        admin = self.admin_repo.get_by_id(payload["sub"])
        if admin is None:
            raise AuthorizationError("token subject no longer exists")
        return admin

    def ensure_admin(self, username: str, password: str) -> bool:
        """Create the admin account if missing. Returns True when created."""
        if self.admin_repo.get_by_username(username):
            return False
        self.admin_repo.create(username=username, password_hash=hash_password(password))
        return True
