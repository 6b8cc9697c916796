from __future__ import annotations

import csv
import io

import pandas as pd
import pytest

from src.kpi_system.kpi_system.core.enums import Role
from src.kpi_system.kpi_system.reports.export import KPI_COLUMNS, kpi_rows_to_csv, kpi_rows_to_xlsx, trend_to_csv
from src.kpi_system.kpi_system.reports.service import flatten_scorecard
from src.kpi_system.kpi_system.scoring.engine import score_period
from src.kpi_system.kpi_system.scoring.model import TrendPoint


def _read_csv(payload: bytes) -> list[dict]:
    assert payload.startswith(b"\xef\xbb\xbf")
    return list(csv.DictReader(io.StringIO(payload.decode("utf-8-sig"))))


def test_kpi_csv_uses_vietnamese_number_format(sales_period):
    rows = flatten_scorecard(score_period(sales_period))

    records = _read_csv(kpi_rows_to_csv(rows))

    assert list(records[0].keys()) == KPI_COLUMNS
    assert records[0]["Chỉ tiêu"] == "DOANH THU"
    assert records[4]["Mục tiêu"] == "20"
    assert records[4]["Điểm"] == "24.0"


def test_trend_csv():
    records = _read_csv(trend_to_csv([TrendPoint("2025-01", 80.4567), TrendPoint("2025-02", 95)]))
    assert records == [{"Tháng": "2025-01", "Tổng điểm": "80.46"}, {"Tháng": "2025-02", "Tổng điểm": "95"}]


def test_kpi_xlsx(sales_period):
    rows = flatten_scorecard(score_period(sales_period))

    df = pd.read_excel(io.BytesIO(kpi_rows_to_xlsx(rows, sheet_name="2025-01")), sheet_name="2025-01")

    assert list(df.columns) == KPI_COLUMNS
    assert len(df) == 6
    assert df["Điểm"].sum() == pytest.approx(94)


def test_csv_download_route(client, login_as):
    login_as(2, Role.AM)

    resp = client.get("/api/reports/kpi/2025-01/csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "kpi_202501.csv" in resp.headers["Content-Disposition"]
