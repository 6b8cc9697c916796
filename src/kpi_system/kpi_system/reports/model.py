from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import RowType
from ..scoring.model import AtRiskItem


@dataclass(frozen=True)
class WeekInfo:
    week_num: int
    month: int
    year: int
    start_date: date
    end_date: date

    @property
    def title(self) -> str:
        return f"TUẦN {self.week_num} THÁNG {self.month}"

    @property
    def range_text(self) -> str:
        return f"(Từ ngày {self.start_date:%d/%m/%Y} đến ngày {self.end_date:%d/%m/%Y})"


@dataclass(frozen=True)
class KpiReportRow:
    """Một dòng bảng chỉ tiêu trong báo cáo (nhóm hoặc chỉ tiêu con)."""

    row_type: RowType
    name: str
    unit: str
    target: float
    actual: float
    weight: float
    percent: float
    score: float


@dataclass(frozen=True)
class WeeklyReport:
    week: WeekInfo
    period: str
    kpi_rows: list[KpiReportRow]
    total_score: Optional[float]
    completed: int
    total: int
    at_risk: list[AtRiskItem]

    @property
    def has_kpi(self) -> bool:
        return self.total_score is not None
