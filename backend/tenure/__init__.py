# backend/tenure/__init__.py
from tenure.schemas.experience import (
    ExperienceOverview,
    ExperienceSummary,
    ParsedPosition,
    Stint,
    StructuredExperience,
)
from tenure.services.aggregation import (
    calculate_total_experience_duration,
    get_experience_overview,
    parse_all_experiences,
)
from tenure.services.dates import DateMarker, YearMonth, current_month, normalize_date_token
from tenure.services.duration import calculate_duration, format_months
from tenure.services.parsing.experience_parser import (
    convert_structured_experience,
    format_experience_with_duration,
    parse_experience_string,
)

__all__ = [
    "ExperienceOverview",
    "ExperienceSummary",
    "ParsedPosition",
    "Stint",
    "StructuredExperience",
    "calculate_total_experience_duration",
    "get_experience_overview",
    "parse_all_experiences",
    "DateMarker",
    "YearMonth",
    "current_month",
    "normalize_date_token",
    "calculate_duration",
    "format_months",
    "convert_structured_experience",
    "format_experience_with_duration",
    "parse_experience_string",
]
