"""Nạp dữ liệu demo: tháng chỉ tiêu mẫu và các tài khoản admin/am/pm."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.kpi_system.kpi_system.common.formatting import format_number
from src.kpi_system.kpi_system.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users
from src.kpi_system.kpi_system.database.connection import DatabaseConnection, DBConfig
from src.kpi_system.kpi_system.kpi.mysql_kpi_repository import MySQLKpiRepository
from src.kpi_system.kpi_system.scoring.engine import total_score

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)
    logger.info("demo users: %s", ", ".join(username for _, username, _, _ in DEMO_USERS))

    kpis = MySQLKpiRepository(DatabaseConnection.get_instance(DBConfig.from_settings(db_config)))
    for period in kpis.list_all():
        logger.info("kpi %s: total score %s", period.period, format_number(total_score(period)))


if __name__ == "__main__":
    main()
