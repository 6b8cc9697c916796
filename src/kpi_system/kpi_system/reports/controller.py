from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, require_period
from ..common.formatting import format_number, format_percent
from ..common.web import login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .export import kpi_rows_to_csv, kpi_rows_to_xlsx, trend_to_csv
from .service import flatten_scorecard

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _download(payload: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="report_weekly")
    @login_required
    def report_weekly():
        date_s = request.args.get("date")
        try:
            report_date = parse_iso_date(date_s) if date_s else date.today()
        except ValueError:
            raise ValidationError("Ngày báo cáo không hợp lệ (YYYY-MM-DD)")

        report = container.weekly_report_service.build(report_date)
        return jsonify(
            {
                "title": report.week.title,
                "range": report.week.range_text,
                "start_date": report.week.start_date.isoformat(),
                "end_date": report.week.end_date.isoformat(),
                "period": report.period,
                "total_score": report.total_score,
                "completed": report.completed,
                "total": report.total,
                "kpi_rows": [
                    {
                        "type": r.row_type.value,
                        "name": r.name,
                        "unit": r.unit,
                        "target": format_number(r.target),
                        "actual": format_number(r.actual),
                        "ratio": format_percent(r.actual, r.target),
                    }
                    for r in report.kpi_rows
                ],
                "at_risk": [
                    {"group_name": a.group_name, "name": a.item.name, "percent": round(a.percent, 1)}
                    for a in report.at_risk
                ],
            }
        )

    @app.route("/api/reports/kpi/<period>/csv", methods=["GET"], endpoint="report_kpi_csv")
    @login_required
    def report_kpi_csv(period: str):
        period = require_period(period)
        rows = flatten_scorecard(container.kpi_service.scorecard(period))
        return _download(kpi_rows_to_csv(rows), mimetype="text/csv", filename=f"kpi_{period.replace('-', '')}.csv")

    @app.route("/api/reports/kpi/<period>/xlsx", methods=["GET"], endpoint="report_kpi_xlsx")
    @login_required
    def report_kpi_xlsx(period: str):
        period = require_period(period)
        rows = flatten_scorecard(container.kpi_service.scorecard(period))
        return _download(
            kpi_rows_to_xlsx(rows, sheet_name=period),
            mimetype=XLSX_MIMETYPE,
            filename=f"kpi_{period.replace('-', '')}.xlsx",
        )

    @app.route("/api/reports/trend/csv", methods=["GET"], endpoint="report_trend_csv")
    @login_required
    def report_trend_csv():
        points = container.kpi_service.trend(limit=request.args.get("limit", type=int))
        return _download(trend_to_csv(points), mimetype="text/csv", filename="kpi_trend.csv")
