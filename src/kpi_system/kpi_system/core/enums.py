from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    ADMIN = "admin"
    AM = "am"
    PM = "pm"
    STAFF = "staff"


class EvaluationTemplate(str, Enum):
    """Bộ tiêu chí đánh giá KI theo vị trí (AM/PM)."""

    AM = "AM"
    PM = "PM"


class Grade(str, Enum):
    """Xếp loại theo tổng điểm."""

    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class RowType(str, Enum):
    """Loại dòng trong bảng chỉ tiêu của báo cáo."""

    GROUP = "GROUP"
    ITEM = "ITEM"
