"""CSV/XLSX rendering of report tables.

CSV is UTF-8 with BOM so Excel opens Vietnamese text correctly.
"""

from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

from ..common.formatting import format_number
from ..scoring.model import TrendPoint
from .model import KpiReportRow

KPI_COLUMNS = ["Loại", "Chỉ tiêu", "Đơn vị", "Mục tiêu", "Thực hiện", "Tỷ trọng", "% HT", "Điểm"]


def _kpi_records(rows: Sequence[KpiReportRow]) -> list[dict]:
    return [
        {
            "Loại": r.row_type.value,
            "Chỉ tiêu": r.name,
            "Đơn vị": r.unit,
            "Mục tiêu": r.target,
            "Thực hiện": r.actual,
            "Tỷ trọng": r.weight,
            "% HT": round(r.percent, 2),
            "Điểm": round(r.score, 2),
        }
        for r in rows
    ]


def _to_csv_bytes(fieldnames: list[str], records: list[dict]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames)
    writer.writeheader()
    for rec in records:
        writer.writerow(rec)
    return out.getvalue().encode("utf-8-sig")


def kpi_rows_to_csv(rows: Sequence[KpiReportRow]) -> bytes:
    records = _kpi_records(rows)
    for rec in records:
        for key in ("Mục tiêu", "Thực hiện"):
            rec[key] = format_number(rec[key])
    return _to_csv_bytes(KPI_COLUMNS, records)


def trend_to_csv(points: Sequence[TrendPoint]) -> bytes:
    return _to_csv_bytes(
        ["Tháng", "Tổng điểm"],
        [{"Tháng": p.period, "Tổng điểm": round(p.total_score, 2)} for p in points],
    )


def kpi_rows_to_xlsx(rows: Sequence[KpiReportRow], *, sheet_name: str = "KPI") -> bytes:
    df = pd.DataFrame(_kpi_records(rows), columns=KPI_COLUMNS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return out.getvalue()
