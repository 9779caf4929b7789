"""Single-entry parsing: free-text lines through the grammar, structured records
directly. Both produce a ParsedPosition with month-normalized dates."""

from __future__ import annotations
from typing import Optional
import logging

from tenure.schemas.experience import ParsedPosition, StructuredExperience
from tenure.services.dates import (
    DateMarker,
    DateRole,
    NormalizedDate,
    YearMonth,
    current_month,
    normalize_date_token,
)
from tenure.services.duration import calculate_duration
from tenure.services.parsing.rules import match_experience

logger = logging.getLogger("tenure.parser")

STRUCTURED_SOURCE = "structured"


def _resolve_end(end: NormalizedDate, today: YearMonth) -> YearMonth:
    """Open-ended positions end in the evaluation month."""
    if isinstance(end, YearMonth):
        return end
    return today


def parse_experience_string(text: str, today: Optional[YearMonth] = None) -> Optional[ParsedPosition]:
    """
    Parse one free-text experience line.

    Returns None when no grammar rule recognizes the line; the caller drops it.
    """
    today = today or current_month()

    match = match_experience(text)
    if match is None:
        logger.info(f"No grammar rule matched experience line: {text!r}")
        return None

    end = _resolve_end(match.end, today)
    duration = calculate_duration(match.start, end)
    fields = match.fields

    return ParsedPosition(
        title=fields.title,
        company=fields.company,
        start=match.start,
        end=end,
        duration_months=duration.months,
        duration_text=duration.text,
        original_text=text,
        location=fields.location,
        description=fields.description,
        source_rule=match.rule,
    )


def convert_structured_experience(
    entry: StructuredExperience,
    today: Optional[YearMonth] = None,
) -> ParsedPosition:
    """
    Convert an already-structured record. Never fails.

    - start_date that does not normalize -> unknown start
    - end_date None / "present" -> the evaluation month
    - end_date that does not normalize -> treated as ongoing (logged)
    """
    today = today or current_month()

    start = normalize_date_token(entry.start_date, DateRole.START)
    if not isinstance(start, YearMonth):
        if entry.start_date is not None and start is None:
            logger.warning(f"Could not parse start_date: '{entry.start_date}' ({entry.title} at {entry.company})")
        start = None

    end_value = normalize_date_token(entry.end_date, DateRole.END)
    if end_value is None:
        logger.warning(f"Could not parse end_date: '{entry.end_date}' ({entry.title} at {entry.company}); treating as ongoing")
        end_value = DateMarker.OPEN_ENDED
    end = _resolve_end(end_value, today)

    duration = calculate_duration(start, end)
    start_text = str(start) if start is not None else DateMarker.UNKNOWN.value

    return ParsedPosition(
        title=entry.title,
        company=entry.company,
        start=start,
        end=end,
        duration_months=duration.months,
        duration_text=duration.text,
        original_text=f"{entry.title} at {entry.company} ({start_text} to {end})",
        location=entry.location,
        description=entry.description,
        source_rule=STRUCTURED_SOURCE,
    )


def format_experience_with_duration(text: str, today: Optional[YearMonth] = None) -> str:
    """
    Render "<title> at <company> (<start> to <end|present>) • <duration>".

    Falls back to the input text unchanged when the line cannot be parsed.
    """
    today = today or current_month()
    parsed = parse_experience_string(text, today=today)
    if parsed is None:
        return text

    end_text = "present" if parsed.is_ongoing(today) else parsed.end_date
    return f"{parsed.title} at {parsed.company} ({parsed.start_date} to {end_text}) • {parsed.duration_text}"
