from datetime import date

import pytest

from src.kpi_system.kpi_system.common import datetime_utils
from src.kpi_system.kpi_system.common.datetime_utils import period_of, previous_period, require_period
from src.kpi_system.kpi_system.core.exceptions import ValidationError


def test_require_period_strips():
    assert require_period(" 2025-07 ") == "2025-07"


@pytest.mark.parametrize("value", [None, "2025-00", "2025-7", "July"])
def test_require_period_rejects(value):
    with pytest.raises(ValidationError):
        require_period(value)


def test_period_of():
    assert period_of(date(2024, 3, 31)) == "2024-03"


@pytest.mark.parametrize("period,expected", [("2025-01", "2024-12"), ("2025-10", "2025-09")])
def test_previous_period(period, expected):
    assert previous_period(period) == expected


def test_current_period(monkeypatch, fixed_now):
    monkeypatch.setattr(datetime_utils, "now_local", lambda: fixed_now)
    assert datetime_utils.current_period() == "2025-03"
