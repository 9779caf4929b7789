# tenure/schemas/experience.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from tenure.services.dates import DateMarker, YearMonth


def _coerce_month(value):
    """Accept "YYYY-MM" strings (as produced by model_dump) alongside YearMonth values."""
    if isinstance(value, str):
        if value == DateMarker.UNKNOWN.value:
            return None
        return YearMonth.parse(value)
    return value


def _month_text(value: Optional[YearMonth]) -> str:
    return str(value) if value is not None else DateMarker.UNKNOWN.value


class StructuredExperience(BaseModel):
    """Experience record that already carries separate fields.

    Accepts upstream camelCase keys (startDate/endDate) as well as snake_case.
    A missing or null end_date means the position is ongoing.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    company: str
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    location: Optional[str] = None
    description: Optional[str] = None


class ParsedPosition(BaseModel):
    """One position with its dates normalized to months.

    `start=None` means the start could not be determined; such positions have
    duration_months == 0 and duration_text == "Duration unknown".
    """
    title: str
    company: str
    start: Optional[YearMonth] = None
    end: YearMonth
    duration_months: int = Field(0, ge=0)
    duration_text: str
    original_text: str
    location: Optional[str] = None
    description: Optional[str] = None
    source_rule: Optional[str] = None  # grammar rule name, or "structured"

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_months(cls, value):
        return _coerce_month(value)

    @field_serializer("start", "end")
    def serialize_month(self, value: Optional[YearMonth]) -> str:
        return _month_text(value)

    @property
    def start_date(self) -> str:
        return _month_text(self.start)

    @property
    def end_date(self) -> str:
        return str(self.end)

    def is_ongoing(self, today: YearMonth) -> bool:
        return self.end == today


class Stint(BaseModel):
    """A continuous run of positions at one employer (gaps no larger than the configured limit)."""
    company: str
    positions: List[ParsedPosition] = Field(default_factory=list)  # ascending by start
    total_duration_months: int = Field(0, ge=0)
    total_duration_text: str
    earliest_start: Optional[YearMonth] = None
    latest_end: YearMonth

    @field_validator("earliest_start", "latest_end", mode="before")
    @classmethod
    def coerce_months(cls, value):
        return _coerce_month(value)

    @field_serializer("earliest_start", "latest_end")
    def serialize_month(self, value: Optional[YearMonth]) -> str:
        return _month_text(value)

    def is_ongoing(self, today: YearMonth) -> bool:
        return self.latest_end == today


class ExperienceSummary(BaseModel):
    total_duration_text: str
    total_duration_months: int = Field(0, ge=0)
    stints: List[Stint] = Field(default_factory=list)
    positions: List[ParsedPosition] = Field(default_factory=list)


class ExperienceOverview(BaseModel):
    """Compact digest of an ExperienceSummary for badges and list rows."""
    total_duration_text: str
    stint_count: int = 0
    has_multiple_positions: bool = False
