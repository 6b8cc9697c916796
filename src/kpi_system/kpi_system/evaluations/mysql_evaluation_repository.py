from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from ..core.enums import EvaluationTemplate, Grade
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..scoring.serializer import item_from_dict, item_to_dict
from .model import EmployeeEvaluation
from .repository import EvaluationRepository

logger = logging.getLogger(__name__)

_COLUMNS = "evaluation_id, user_id, period, template, criteria_json, note"


def _row_to_evaluation(r: dict) -> EmployeeEvaluation:
    raw = r.get("criteria_json") or "[]"
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return EmployeeEvaluation(
        evaluation_id=str(r["evaluation_id"]),
        user_id=int(r["user_id"]),
        period=r["period"],
        template=EvaluationTemplate(r["template"]),
        criteria=tuple(item_from_dict(c) for c in json.loads(raw)),
        note=r.get("note"),
    )


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, user_id: int, period: str) -> Optional[EmployeeEvaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM evaluations WHERE user_id=%s AND period=%s",
                (int(user_id), period),
            )
            r = fetchone(cur)
            return _row_to_evaluation(r) if r else None

    def list_for_period(self, period: str) -> Sequence[EmployeeEvaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM evaluations WHERE period=%s ORDER BY total_score DESC, user_id ASC",
                (period,),
            )
            return [_row_to_evaluation(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[EmployeeEvaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM evaluations WHERE user_id=%s ORDER BY period ASC",
                (int(user_id),),
            )
            return [_row_to_evaluation(r) for r in fetchall(cur)]

    def upsert(self, evaluation: EmployeeEvaluation, *, total_score: float, grade: Grade) -> None:
        payload = json.dumps([item_to_dict(c) for c in evaluation.criteria], ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO evaluations(evaluation_id, user_id, period, template, criteria_json, total_score, grade, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    template=VALUES(template),
                    criteria_json=VALUES(criteria_json),
                    total_score=VALUES(total_score),
                    grade=VALUES(grade),
                    note=VALUES(note)
                """,
                (
                    evaluation.evaluation_id,
                    int(evaluation.user_id),
                    evaluation.period,
                    evaluation.template.value,
                    payload,
                    float(total_score),
                    grade.value,
                    evaluation.note,
                ),
            )
        logger.debug("evaluation upserted id=%s score=%.2f", evaluation.evaluation_id, total_score)
