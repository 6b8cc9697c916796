from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import require_period
from ..common.validators import require_non_negative
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..scoring import engine
from ..users.repository import UserRepository
from .model import EmployeeEvaluation, EvaluationRankingRow, EvaluationResult
from .repository import EvaluationRepository
from .templates import build_criteria, template_for_role

logger = logging.getLogger(__name__)


def evaluation_id_for(user_id: int, period: str) -> str:
    return f"eval_{int(user_id)}_{period.replace('-', '')}"


class EvaluationService:
    """Use case: giao chỉ tiêu và đánh giá KI nhân viên theo tháng."""

    def __init__(self, evaluations: EvaluationRepository, users: UserRepository):
        self._evaluations = evaluations
        self._users = users

    def get_or_new(self, *, user_id: int, period: str) -> EmployeeEvaluation:
        """Stored evaluation, or a blank one built from the employee's template."""
        period = require_period(period)
        existing = self._evaluations.get(user_id=user_id, period=period)
        if existing:
            return existing

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Nhân viên không tồn tại")
        if user.is_admin:
            raise ValidationError("Không đánh giá tài khoản Admin")

        template = template_for_role(user.role)
        return EmployeeEvaluation(
            user_id=user.user_id,
            period=period,
            template=template,
            criteria=build_criteria(template),
        )

    def evaluate(self, evaluation: EmployeeEvaluation) -> EvaluationResult:
        scored = tuple(engine.score_item(c) for c in evaluation.criteria)
        total = sum(s.contribution for s in scored)
        return EvaluationResult(
            evaluation=evaluation,
            criteria=scored,
            total_score=total,
            grade=engine.grade_for(total),
        )

    def record_actual(
        self,
        evaluation: EmployeeEvaluation,
        *,
        criterion_id: str,
        actual: Optional[float] = None,
        target: Optional[float] = None,
    ) -> EvaluationResult:
        """Return the evaluation with one criterion's actual/target changed (not persisted)."""
        if not criterion_id or not any(c.item_id == criterion_id for c in evaluation.criteria):
            raise NotFoundError("Tiêu chí không tồn tại")

        changes = {}
        if actual is not None:
            changes["actual"] = require_non_negative(actual, "Kết quả")
        if target is not None:
            changes["target"] = require_non_negative(target, "Mục tiêu")

        criteria = tuple(replace(c, **changes) if c.item_id == criterion_id else c for c in evaluation.criteria)
        return self.evaluate(replace(evaluation, criteria=criteria))

    def save(self, *, current_role: Role, evaluation: EmployeeEvaluation) -> EvaluationResult:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Bạn không có quyền")

        if not evaluation.evaluation_id:
            evaluation = replace(evaluation, evaluation_id=evaluation_id_for(evaluation.user_id, evaluation.period))

        result = self.evaluate(evaluation)
        self._evaluations.upsert(evaluation, total_score=result.total_score, grade=result.grade)
        logger.info(
            "evaluation saved user_id=%s period=%s score=%.2f grade=%s",
            evaluation.user_id,
            evaluation.period,
            result.total_score,
            result.grade.value,
        )
        return result

    def list_for_period(self, period: str) -> list[EvaluationRankingRow]:
        period = require_period(period)
        rows: list[EvaluationRankingRow] = []
        for ev in self._evaluations.list_for_period(period):
            result = self.evaluate(ev)
            user = self._users.get_by_id(ev.user_id)
            rows.append(
                EvaluationRankingRow(
                    evaluation_id=ev.evaluation_id,
                    user_id=ev.user_id,
                    full_name=user.full_name if user else f"#{ev.user_id}",
                    template=ev.template,
                    total_score=result.total_score,
                    grade=result.grade,
                )
            )
        rows.sort(key=lambda r: (-r.total_score, r.user_id))
        return rows

    def history_for_user(self, user_id: int) -> list[tuple[str, float]]:
        """(period, total_score) for one employee, oldest first."""
        out = [(ev.period, self.evaluate(ev).total_score) for ev in self._evaluations.list_for_user(user_id)]
        out.sort(key=lambda x: x[0])
        return out
