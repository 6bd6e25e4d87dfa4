from __future__ import annotations

import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

"""Date normalization for ERP date columns.

Source cells arrive as native dates (openpyxl), Excel serial day numbers, or
free-form date strings. Every entry point is total: anything that cannot be
turned into a calendar date yields "" instead of raising, so one dirty cell
never aborts a row.
"""

__all__ = [
    "order_date",
    "ship_date",
    "return_date",
]

# Excel serial day 0 == 1899-12-30 (serial 25569 == 1970-01-01)
EXCEL_EPOCH = datetime(1899, 12, 30)

# ERP 取込側の業務ルール: 時刻はソースに依存せず固定
SHIP_TIME = "15:00:00"
RETURN_TIME = "11:00:00"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    if value is pd.NaT:
        return True
    try:
        return not bool(value)
    except (TypeError, ValueError):
        return False


def _from_serial(serial: float) -> datetime | None:
    try:
        delta = timedelta(milliseconds=round(serial * 86400 * 1000))
        return EXCEL_EPOCH + delta
    except (OverflowError, ValueError):
        return None


def _from_text(text: str) -> datetime | None:
    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed


def _to_calendar_date(value: Any) -> date | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, numbers.Real):
        return _from_serial(float(value))
    return _from_text(str(value))


def order_date(value: Any) -> str:
    """Format a date-like cell as ``YYYY/MM/DD``; "" when absent or unparseable."""
    if _is_blank(value):
        return ""
    d = _to_calendar_date(value)
    if d is None:
        return ""
    return f"{d.year:04d}/{d.month:02d}/{d.day:02d}"


def ship_date(value: Any) -> str:
    base = order_date(value)
    if not base:
        return ""
    return f"{base} {SHIP_TIME}"


def return_date(value: Any) -> str:
    base = order_date(value)
    if not base:
        return ""
    return f"{base} {RETURN_TIME}"
