"""vi-VN number formatting used by reports and exports.

Matches what the web client shows: ``.`` groups thousands, ``,`` separates
decimals, trailing zeros are dropped.
"""

from __future__ import annotations

import re


def format_number(value: float, max_fraction_digits: int = 2) -> str:
    number = round(float(value or 0), max_fraction_digits)
    negative = number < 0
    text = f"{abs(number):,.{max_fraction_digits}f}"
    if max_fraction_digits > 0:
        text = text.rstrip("0").rstrip(".")
    # "1,234.5" -> "1.234,5"
    text = text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    if negative and text != "0":
        text = "-" + text
    return text


def format_currency(value: float) -> str:
    return f"{format_number(value, 0)} ₫"


def format_percent(actual: float, target: float) -> str:
    """Ratio text for report tables; ``-`` when the target is not measurable."""
    if target <= 0:
        return "-"
    return f"{actual / target * 100:.1f}%"


def parse_currency_input(text: str | None) -> int:
    digits = re.sub(r"[^0-9]", "", text or "")
    return int(digits) if digits else 0
