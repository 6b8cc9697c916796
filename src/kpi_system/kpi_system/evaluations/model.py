from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import require_period
from ..core.enums import EvaluationTemplate, Grade
from ..core.exceptions import ValidationError
from ..scoring.model import ScoreItem, ScoredItem, require_unique_ids


@dataclass(frozen=True)
class EmployeeEvaluation:
    """Thực thể miền (domain): phiếu đánh giá KI của một nhân viên trong tháng.

    ``evaluation_id`` rỗng nghĩa là phiếu mới, chưa lưu.
    """

    user_id: int
    period: str
    template: EvaluationTemplate
    criteria: tuple[ScoreItem, ...]
    evaluation_id: str = ""
    note: Optional[str] = None

    def __post_init__(self):
        if int(self.user_id) <= 0:
            raise ValidationError("Nhân viên không hợp lệ")
        object.__setattr__(self, "period", require_period(self.period))
        object.__setattr__(self, "criteria", tuple(self.criteria))
        require_unique_ids((c.item_id for c in self.criteria), "tiêu chí")


@dataclass(frozen=True)
class EvaluationResult:
    evaluation: EmployeeEvaluation
    criteria: tuple[ScoredItem, ...]
    total_score: float
    grade: Grade


@dataclass(frozen=True)
class EvaluationRankingRow:
    """Read-model cho danh sách xếp hạng trong tháng."""

    evaluation_id: str
    user_id: int
    full_name: str
    template: EvaluationTemplate
    total_score: float
    grade: Grade
