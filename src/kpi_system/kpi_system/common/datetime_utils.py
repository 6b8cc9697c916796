from __future__ import annotations

import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def require_period(value: str) -> str:
    """Validate a month key in ``YYYY-MM`` form and return it stripped."""
    period = (value or "").strip()
    if not _PERIOD_RE.match(period):
        raise ValidationError(f"Tháng không hợp lệ: {value!r} (định dạng YYYY-MM)")
    return period


def period_of(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def current_period() -> str:
    return period_of(now_local().date())


def previous_period(period: str) -> str:
    period = require_period(period)
    year, month = int(period[:4]), int(period[5:])
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"
