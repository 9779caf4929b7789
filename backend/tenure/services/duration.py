"""Month-count and human-readable duration phrasing for a pair of months."""

from __future__ import annotations
from typing import NamedTuple, Optional

from tenure.services.dates import YearMonth, months_between

DURATION_UNKNOWN = "Duration unknown"
INVALID_DURATION = "Invalid duration"
LESS_THAN_A_MONTH = "Less than 1 month"


class Duration(NamedTuple):
    months: int
    text: str


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_months(total: int) -> str:
    """Render a month count as "2 years, 3 months", "1 year", "5 months" or "Less than 1 month"."""
    years, months = divmod(max(0, total), 12)
    if years > 0:
        text = _plural(years, "year")
        if months > 0:
            text += f", {_plural(months, 'month')}"
        return text
    if months > 0:
        return _plural(months, "month")
    return LESS_THAN_A_MONTH


def calculate_duration(start: Optional[YearMonth], end: YearMonth) -> Duration:
    """
    Duration between two months; `start=None` stands for an unknown start.

    - Unknown start -> (0, "Duration unknown")
    - End before start -> (0, "Invalid duration")
    - Same month -> (0, "Less than 1 month")
    """
    if start is None:
        return Duration(0, DURATION_UNKNOWN)

    months = months_between(start, end)
    if months < 0:
        return Duration(0, INVALID_DURATION)
    return Duration(months, format_months(months))
