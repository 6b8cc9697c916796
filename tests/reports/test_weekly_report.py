from __future__ import annotations

from datetime import date

import pytest

from src.kpi_system.kpi_system.core.enums import Role, RowType
from src.kpi_system.kpi_system.reports.service import WeeklyReportService, flatten_scorecard, week_info
from src.kpi_system.kpi_system.scoring.engine import score_period


def test_week_info_monday_to_sunday():
    week = week_info(date(2025, 1, 15))  # Wednesday

    assert week.week_num == 3
    assert week.start_date == date(2025, 1, 13)
    assert week.end_date == date(2025, 1, 19)
    assert week.title == "TUẦN 3 THÁNG 1"
    assert week.range_text == "(Từ ngày 13/01/2025 đến ngày 19/01/2025)"


def test_flatten_scorecard_rows(sales_period):
    rows = flatten_scorecard(score_period(sales_period))

    assert [r.row_type for r in rows] == [
        RowType.GROUP,
        RowType.ITEM,
        RowType.ITEM,
        RowType.ITEM,
        RowType.GROUP,
        RowType.ITEM,
    ]
    assert (rows[0].target, rows[0].actual) == (200, 200)
    assert rows[4].score == pytest.approx(24)


def test_build_with_data(make_kpis, sales_period):
    report = WeeklyReportService(make_kpis([sales_period])).build(date(2025, 1, 8))

    assert report.period == "2025-01"
    assert report.has_kpi
    assert report.total_score == pytest.approx(94)
    assert [a.item.item_id for a in report.at_risk] == ["i1"]


def test_period_follows_sunday_of_week(make_kpis, sales_period):
    # Mon 27/01/2025 .. Sun 02/02/2025
    report = WeeklyReportService(make_kpis([sales_period])).build(date(2025, 1, 29))

    assert report.period == "2025-02"
    assert not report.has_kpi
    assert report.kpi_rows == []
    assert report.total_score is None


def test_weekly_route(client, login_as):
    login_as(2, Role.AM)
    body = client.get("/api/reports/weekly?date=2025-01-08").get_json()

    assert body["title"] == "TUẦN 2 THÁNG 1"
    assert body["kpi_rows"][4]["ratio"] == "80.0%"
    assert body["kpi_rows"][3]["ratio"] == "-"


def test_weekly_route_bad_date(client, login_as):
    login_as(2, Role.AM)
    assert client.get("/api/reports/weekly?date=08/01/2025").status_code == 400
