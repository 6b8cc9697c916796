"""Ví dụ: dùng service layer (không qua Flask).

In bảng điểm KPI của tháng gần nhất và xu hướng tổng điểm các tháng.
"""

import importlib

from config import get_settings_module

from src.kpi_system.kpi_system.common.formatting import format_number
from src.kpi_system.kpi_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    periods = container.kpi_service.list_periods()
    if not periods:
        print("Chưa có dữ liệu chỉ tiêu")
        return

    card = container.kpi_service.scorecard(periods[-1])
    print(f"Tháng {card.period}: {format_number(card.total_score)} điểm ({card.completed}/{card.total} hoàn thành)")
    for point in container.kpi_service.trend():
        print(f"  {point.period}: {format_number(point.total_score)}")


if __name__ == "__main__":
    main()
