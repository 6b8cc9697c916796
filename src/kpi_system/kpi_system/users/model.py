from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Tài khoản đăng nhập. Admin quản trị chỉ tiêu, AM/PM/Staff là nhân viên được đánh giá."""

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
    phone_number: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
