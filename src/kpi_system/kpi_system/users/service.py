from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Sai tài khoản hoặc mật khẩu")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("login failed for username=%s", user.username)
            raise AuthenticationError("Sai tài khoản hoặc mật khẩu")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        current_role: Role,
        full_name: str,
        username: str,
        password: str,
        role: Role,
        phone_number: Optional[str] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Bạn không có quyền")

        full_name = require_non_empty(full_name, "Họ tên")
        username = require_non_empty(username, "Tên đăng nhập")
        require_min_length(password, "Mật khẩu", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Tên đăng nhập đã tồn tại")

        if role == Role.ADMIN:
            raise ValidationError("Không tạo Admin từ màn hình này")

        return self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            phone_number=(phone_number or "").strip() or None,
        )

    def list_users(self) -> list[dict]:
        return [
            {
                "user_id": u.user_id,
                "full_name": u.full_name,
                "username": u.username,
                "role": u.role.value,
                "is_active": u.is_active,
            }
            for u in self._users.list_all()
        ]

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Bạn không có quyền")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Nhân viên không tồn tại")
        if user.is_admin:
            raise ValidationError("Không thể xóa tài khoản Admin")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Xóa nhân viên thất bại")
