from __future__ import annotations

import pytest

from src.kpi_system.kpi_system.core.enums import EvaluationTemplate, Grade, Role
from src.kpi_system.kpi_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.kpi_system.kpi_system.evaluations.service import EvaluationService, evaluation_id_for


@pytest.fixture
def service(evaluations_repo, users):
    return EvaluationService(evaluations_repo, users)


def test_new_evaluation_uses_role_template(service):
    am = service.get_or_new(user_id=2, period="2025-01")
    pm = service.get_or_new(user_id=3, period="2025-01")

    assert am.template == EvaluationTemplate.AM
    assert pm.template == EvaluationTemplate.PM
    assert sum(c.weight for c in am.criteria) == pytest.approx(100)
    assert sum(c.weight for c in pm.criteria) == pytest.approx(100)
    assert am.evaluation_id == ""


def test_admin_is_not_evaluated(service):
    with pytest.raises(ValidationError):
        service.get_or_new(user_id=1, period="2025-01")


def test_unknown_user(service):
    with pytest.raises(NotFoundError):
        service.get_or_new(user_id=99, period="2025-01")


def test_record_actual_rescores_without_saving(service, evaluations_repo):
    ev = service.get_or_new(user_id=2, period="2025-01")

    result = service.record_actual(ev, criterion_id="cri_0", target=100, actual=150)

    # Doanh số weight 15, capped at 120%
    assert result.total_score == pytest.approx(18)
    assert result.criteria[0].percent == pytest.approx(150)
    assert result.grade == Grade.D
    assert evaluations_repo.list_for_period("2025-01") == []


def test_record_actual_unknown_criterion(service):
    ev = service.get_or_new(user_id=2, period="2025-01")
    with pytest.raises(NotFoundError):
        service.record_actual(ev, criterion_id="cri_99", actual=1)


def test_full_marks_is_grade_a(service):
    ev = service.get_or_new(user_id=3, period="2025-01")
    for c in ev.criteria:
        ev = service.record_actual(ev, criterion_id=c.item_id, target=100, actual=100).evaluation

    result = service.evaluate(ev)

    assert result.total_score == pytest.approx(100)
    assert result.grade == Grade.A


def test_save_requires_admin(service):
    ev = service.get_or_new(user_id=2, period="2025-01")
    with pytest.raises(AuthorizationError):
        service.save(current_role=Role.AM, evaluation=ev)


def test_save_assigns_id_and_stores_score(service, evaluations_repo):
    ev = service.get_or_new(user_id=2, period="2025-01")
    ev = service.record_actual(ev, criterion_id="cri_4", actual=100).evaluation

    result = service.save(current_role=Role.ADMIN, evaluation=ev)

    assert result.evaluation.evaluation_id == "eval_2_202501"
    assert evaluations_repo.stored_scores["eval_2_202501"] == (pytest.approx(10), Grade.D)
    assert service.get_or_new(user_id=2, period="2025-01") == result.evaluation


def test_ranking_sorted_by_score(service):
    low = service.get_or_new(user_id=2, period="2025-01")
    low = service.record_actual(low, criterion_id="cri_4", actual=50).evaluation
    high = service.get_or_new(user_id=3, period="2025-01")
    high = service.record_actual(high, criterion_id="cri_4", actual=100).evaluation
    service.save(current_role=Role.ADMIN, evaluation=low)
    service.save(current_role=Role.ADMIN, evaluation=high)

    rows = service.list_for_period("2025-01")

    assert [r.user_id for r in rows] == [3, 2]
    assert rows[0].full_name == "Pm_User"


def test_history_oldest_first(service):
    for period in ("2025-03", "2025-01"):
        ev = service.get_or_new(user_id=2, period=period)
        service.save(current_role=Role.ADMIN, evaluation=ev)

    assert [p for p, _ in service.history_for_user(2)] == ["2025-01", "2025-03"]


def test_evaluation_id_format():
    assert evaluation_id_for(7, "2024-11") == "eval_7_202411"
