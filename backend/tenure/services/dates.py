"""Date token normalization: reduces the many date spellings found in experience
text to a single year-month value, or to an explicit marker when the token is a
sentinel such as "present" or "unknown".

Everything here works at month granularity. Day-of-month and time-of-day are
accepted in the input and dropped.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union
import logging
import re

from tenure.core.config import settings

logger = logging.getLogger("tenure.dates")


MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

SENTINEL_TERMS = {"present", "now", "null", "unknown"}

# YYYY-MM, YYYY-MM-DD, or a full ISO timestamp (offset or Z optional)
_ISO_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{1,2})"
    r"(?:-(?P<day>\d{1,2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?)?$"
)
# "Aug 2025", "August 2025", "Sept. 2024", "Sep, 2024"
_MONTH_NAME_RE = re.compile(r"^(?P<name>[A-Za-z]+)\.?,?\s+(?P<year>\d{4})$")
_STARTING_RE = re.compile(r"^starting\s+(?P<rest>.+)$", re.IGNORECASE)


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month. Ordering is chronological."""
    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def index(self) -> int:
        """Months since year 0, so the distance between two months is a subtraction."""
        return self.year * 12 + self.month - 1

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse a concrete month token such as "2025-10" or "Oct 2025".

        Raises ValueError for sentinels and unrecognized tokens.
        """
        result = normalize_date_token(value)
        if not isinstance(result, YearMonth):
            raise ValueError(f"Not a valid year-month: '{value}'")
        return result


class DateMarker(str, Enum):
    UNKNOWN = "Unknown"        # start could not be determined
    OPEN_ENDED = "Present"     # position has not ended


class DateRole(str, Enum):
    START = "start"
    END = "end"


NormalizedDate = Union[YearMonth, DateMarker]


def current_month() -> YearMonth:
    """Read the system clock once. Callers pass the result down as `today`."""
    return YearMonth.from_date(date.today())


def months_between(start: YearMonth, end: YearMonth) -> int:
    return end.index - start.index


def _in_range(year: int) -> bool:
    return settings.MIN_YEAR <= year <= settings.MAX_YEAR


def _from_iso(match: re.Match) -> Optional[YearMonth]:
    year = int(match.group("year"))
    month = int(match.group("month"))
    day = match.group("day")
    if not _in_range(year) or not 1 <= month <= 12:
        return None
    if day is not None:
        try:
            date(year, month, int(day))
        except ValueError:
            return None
    return YearMonth(year, month)


def _from_month_name(match: re.Match) -> Optional[YearMonth]:
    month = MONTHS.get(match.group("name").lower())
    year = int(match.group("year"))
    if month is None or not _in_range(year):
        return None
    return YearMonth(year, month)


def normalize_date_token(
    token: Optional[str],
    role: DateRole = DateRole.START,
) -> Optional[NormalizedDate]:
    """
    Normalize a single date token.

    Handles:
    - "2023-01-15" (ISO date) and "2023-01-15T00:00:00+00:00" (ISO timestamp)
    - "2023-01" (year-month)
    - "January 2023" / "Jan 2023" / "Sept 2023" (month name + year, any case)
    - "present", "now", "null", "unknown" (any case), and a missing token
    - "starting 2023-01-15" (the date after "starting" is used)

    Sentinels resolve by role: OPEN_ENDED for an end token, UNKNOWN for a start token.

    Returns:
        A YearMonth, a DateMarker, or None when the token is not recognized
        or its year falls outside the configured bounds.
    """
    if token is None:
        return DateMarker.OPEN_ENDED if role == DateRole.END else DateMarker.UNKNOWN

    cleaned = token.strip()
    if cleaned.lower() in SENTINEL_TERMS:
        return DateMarker.OPEN_ENDED if role == DateRole.END else DateMarker.UNKNOWN

    starting = _STARTING_RE.match(cleaned)
    if starting:
        return normalize_date_token(starting.group("rest"), DateRole.START)

    iso = _ISO_RE.match(cleaned)
    if iso:
        result = _from_iso(iso)
    else:
        named = _MONTH_NAME_RE.match(cleaned)
        result = _from_month_name(named) if named else None

    if result is None:
        logger.debug(f"Unrecognized date token: '{token}'")
    return result
