from __future__ import annotations

import logging
from datetime import date, timedelta

from ..common.datetime_utils import period_of
from ..core.enums import RowType
from ..scoring import engine
from ..scoring.model import PeriodScorecard
from ..kpi.repository import KpiRepository
from .model import KpiReportRow, WeekInfo, WeeklyReport

logger = logging.getLogger(__name__)


def week_info(report_date: date) -> WeekInfo:
    """Week of the month as the unit counts it (day // 7 + 1), Monday..Sunday."""
    monday = report_date - timedelta(days=report_date.weekday())
    return WeekInfo(
        week_num=report_date.day // 7 + 1,
        month=report_date.month,
        year=report_date.year,
        start_date=monday,
        end_date=monday + timedelta(days=6),
    )


def flatten_scorecard(card: PeriodScorecard) -> list[KpiReportRow]:
    rows: list[KpiReportRow] = []
    for g in card.groups:
        rows.append(
            KpiReportRow(
                row_type=RowType.GROUP,
                name=g.group.name,
                unit=g.group.unit,
                target=g.target,
                actual=g.actual,
                weight=g.group.weight,
                percent=g.percent,
                score=g.contribution,
            )
        )
        for i in g.items:
            rows.append(
                KpiReportRow(
                    row_type=RowType.ITEM,
                    name=i.item.name,
                    unit=i.item.unit,
                    target=i.item.target,
                    actual=i.item.actual,
                    weight=i.item.weight,
                    percent=i.percent,
                    score=i.contribution,
                )
            )
    return rows


class WeeklyReportService:
    """Use case: báo cáo tuần, phần kết quả thực hiện chỉ tiêu."""

    def __init__(self, kpis: KpiRepository):
        self._kpis = kpis

    def build(self, report_date: date) -> WeeklyReport:
        week = week_info(report_date)
        # The month is taken from the week's Sunday.
        period = period_of(week.end_date)

        current = self._kpis.get_by_period(period)
        if not current:
            logger.info("weekly report %s: no kpi data for %s", week.title, period)
            return WeeklyReport(week=week, period=period, kpi_rows=[], total_score=None, completed=0, total=0, at_risk=[])

        card = engine.score_period(current)
        return WeeklyReport(
            week=week,
            period=period,
            kpi_rows=flatten_scorecard(card),
            total_score=card.total_score,
            completed=card.completed,
            total=card.total,
            at_risk=engine.at_risk_items(current),
        )
