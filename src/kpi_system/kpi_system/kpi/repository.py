from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..scoring.model import PeriodScore


class KpiRepository(Protocol):
    """Giao diện repository cho bộ chỉ tiêu tháng.

    Mỗi tháng là một document; ghi đè nguyên khối (last write wins).
    """

    def get_by_period(self, period: str) -> Optional[PeriodScore]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PeriodScore]:
        """All stored months, oldest first."""

        raise NotImplementedError

    def upsert(self, period_score: PeriodScore) -> None:
        raise NotImplementedError

    def delete(self, period: str) -> bool:
        raise NotImplementedError
