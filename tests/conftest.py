from __future__ import annotations

import os
from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.kpi_system.kpi_system.core.enums import Grade, Role
from src.kpi_system.kpi_system.evaluations.model import EmployeeEvaluation
from src.kpi_system.kpi_system.evaluations.service import EvaluationService
from src.kpi_system.kpi_system.kpi.service import KpiService
from src.kpi_system.kpi_system.main import create_app
from src.kpi_system.kpi_system.reports.service import WeeklyReportService
from src.kpi_system.kpi_system.scoring.model import PeriodScore, ScoreGroup, ScoreItem
from src.kpi_system.kpi_system.users.model import User
from src.kpi_system.kpi_system.users.service import AuthService, UserService

os.environ.setdefault("APP_ENV", "testing")


class InMemoryKpis:
    def __init__(self, periods=()):
        self._by_period: dict[str, PeriodScore] = {p.period: p for p in periods}
        self.upserts = 0

    def get_by_period(self, period: str) -> Optional[PeriodScore]:
        return self._by_period.get(period)

    def list_all(self):
        return [self._by_period[k] for k in sorted(self._by_period)]

    def upsert(self, period_score: PeriodScore) -> None:
        self.upserts += 1
        self._by_period[period_score.period] = period_score

    def delete(self, period: str) -> bool:
        return self._by_period.pop(period, None) is not None


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.username == username:
                return u
        return None

    def create_user(self, *, full_name, username, password_hash, role, phone_number=None) -> int:
        user_id = max(self._by_id, default=0) + 1
        self._by_id[user_id] = User(
            user_id=user_id,
            full_name=full_name,
            username=username,
            password_hash=password_hash,
            role=role,
            phone_number=phone_number,
        )
        return user_id

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(user_id, None) is not None

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.full_name)


class InMemoryEvaluations:
    def __init__(self):
        self._by_key: dict[tuple[int, str], EmployeeEvaluation] = {}
        self.stored_scores: dict[str, tuple[float, Grade]] = {}

    def get(self, *, user_id: int, period: str) -> Optional[EmployeeEvaluation]:
        return self._by_key.get((user_id, period))

    def list_for_period(self, period: str):
        return [e for (_, p), e in self._by_key.items() if p == period]

    def list_for_user(self, user_id: int):
        items = [e for (u, _), e in self._by_key.items() if u == user_id]
        return sorted(items, key=lambda e: e.period)

    def upsert(self, evaluation: EmployeeEvaluation, *, total_score: float, grade: Grade) -> None:
        self._by_key[(evaluation.user_id, evaluation.period)] = evaluation
        self.stored_scores[evaluation.evaluation_id] = (total_score, grade)


def make_user(user_id: int, username: str, role: Role, password: str = "secret123") -> User:
    return User(
        user_id=user_id,
        full_name=username.title(),
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
    )


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 12, 9, 0, 0)


@pytest.fixture
def sales_period() -> PeriodScore:
    """Group carries no weight; its items do."""
    return PeriodScore(
        period="2025-01",
        groups=(
            ScoreGroup(
                group_id="g1",
                name="DOANH THU",
                weight=0,
                auto_calculate=True,
                items=(
                    ScoreItem(item_id="i1", name="Doanh thu dịch vụ", target=100, actual=50, weight=20),
                    ScoreItem(item_id="i2", name="Doanh thu bán đứt", target=100, actual=150, weight=50),
                    ScoreItem(item_id="i3", name="Ghi chú", target=0, actual=0, weight=0),
                ),
            ),
            ScoreGroup(
                group_id="g2",
                name="KHÁCH HÀNG",
                weight=30,
                auto_calculate=False,
                target=20,
                actual=16,
                items=(ScoreItem(item_id="i4", name="Khách hàng mới", target=10, actual=4, weight=0),),
            ),
        ),
    )


@pytest.fixture
def users():
    return InMemoryUsers(
        [
            make_user(1, "admin", Role.ADMIN),
            make_user(2, "am_user", Role.AM),
            make_user(3, "pm_user", Role.PM),
        ]
    )


@pytest.fixture
def make_kpis():
    return InMemoryKpis


@pytest.fixture
def evaluations_repo():
    return InMemoryEvaluations()


@pytest.fixture
def container(users, make_kpis, sales_period, evaluations_repo):
    kpis = make_kpis([sales_period])
    return SimpleNamespace(
        users_repo=users,
        kpi_repo=kpis,
        evaluations_repo=evaluations_repo,
        auth_service=AuthService(users),
        user_service=UserService(users),
        kpi_service=KpiService(kpis),
        evaluation_service=EvaluationService(evaluations_repo, users),
        weekly_report_service=WeeklyReportService(kpis),
    )


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int, role: Role) -> None:
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = f"user {user_id}"
            sess["role"] = role.value

    return _login
