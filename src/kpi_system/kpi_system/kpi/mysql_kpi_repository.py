from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..scoring.model import PeriodScore
from ..scoring.serializer import group_to_dict, period_from_dict
from .repository import KpiRepository

logger = logging.getLogger(__name__)


def _kpi_id(period: str) -> str:
    return f"kpi_{period.replace('-', '_')}"


def _row_to_period(row: dict) -> PeriodScore:
    groups = row.get("groups_json") or "[]"
    if isinstance(groups, (bytes, bytearray)):
        groups = groups.decode("utf-8")
    return period_from_dict({"period": row["period"], "groups": json.loads(groups)})


class MySQLKpiRepository(KpiRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_period(self, period: str) -> Optional[PeriodScore]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT kpi_id, period, groups_json FROM kpi_data WHERE period=%s",
                (period,),
            )
            r = fetchone(cur)
            return _row_to_period(r) if r else None

    def list_all(self) -> Sequence[PeriodScore]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT kpi_id, period, groups_json FROM kpi_data ORDER BY period ASC")
            return [_row_to_period(r) for r in fetchall(cur)]

    def upsert(self, period_score: PeriodScore) -> None:
        payload = json.dumps([group_to_dict(g) for g in period_score.groups], ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kpi_data(kpi_id, period, groups_json)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE groups_json=VALUES(groups_json)
                """,
                (_kpi_id(period_score.period), period_score.period, payload),
            )
        logger.debug("kpi_data upserted period=%s groups=%d", period_score.period, len(period_score.groups))

    def delete(self, period: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kpi_data WHERE period=%s", (period,))
            return cur.rowcount > 0
