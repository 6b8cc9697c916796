from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Grade
from .model import EmployeeEvaluation


class EvaluationRepository(Protocol):
    def get(self, *, user_id: int, period: str) -> Optional[EmployeeEvaluation]:
        raise NotImplementedError

    def list_for_period(self, period: str) -> Sequence[EmployeeEvaluation]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[EmployeeEvaluation]:
        """Evaluations of one employee, oldest month first."""

        raise NotImplementedError

    def upsert(self, evaluation: EmployeeEvaluation, *, total_score: float, grade: Grade) -> None:
        """Create or replace the evaluation of (user_id, period).

        total_score/grade are stored alongside for SQL-side reporting.
        """

        raise NotImplementedError
