from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .evaluations.mysql_evaluation_repository import MySQLEvaluationRepository
from .evaluations.service import EvaluationService
from .kpi.mysql_kpi_repository import MySQLKpiRepository
from .kpi.service import KpiService
from .reports.service import WeeklyReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    kpi_repo: MySQLKpiRepository
    evaluations_repo: MySQLEvaluationRepository

    auth_service: AuthService
    user_service: UserService
    kpi_service: KpiService
    evaluation_service: EvaluationService
    weekly_report_service: WeeklyReportService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    users_repo = MySQLUserRepository(conn)
    kpi_repo = MySQLKpiRepository(conn)
    evaluations_repo = MySQLEvaluationRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        kpi_repo=kpi_repo,
        evaluations_repo=evaluations_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        kpi_service=KpiService(kpi_repo),
        evaluation_service=EvaluationService(evaluations_repo, users_repo),
        weekly_report_service=WeeklyReportService(kpi_repo),
    )
