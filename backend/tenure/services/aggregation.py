"""Experience aggregation: parse every entry, group positions into per-employer
stints, and total the tenure.

Ordering rules used throughout:
- Recency order (positions list, stints list): ongoing first (end month equals
  `today`), then most recent start first. Unknown starts sort last in their class.
- Chronological order (positions inside a stint): earliest start first, unknown last.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging

from pydantic import ValidationError

from tenure.core.config import settings
from tenure.schemas.experience import (
    ExperienceOverview,
    ExperienceSummary,
    ParsedPosition,
    Stint,
    StructuredExperience,
)
from tenure.services.dates import YearMonth, current_month, months_between
from tenure.services.duration import calculate_duration, format_months
from tenure.services.parsing.experience_parser import (
    convert_structured_experience,
    parse_experience_string,
)

logger = logging.getLogger("tenure.aggregate")

NO_EXPERIENCE_DATA = "No experience data"
NO_EXPERIENCE = "No experience"

ExperienceEntry = Union[str, StructuredExperience, Mapping[str, Any]]


def _parse_entry(entry: ExperienceEntry, today: YearMonth) -> Optional[ParsedPosition]:
    """Dispatch one entry by shape. Anything unusable is logged and skipped."""
    if isinstance(entry, str):
        return parse_experience_string(entry, today=today)

    if isinstance(entry, StructuredExperience):
        return convert_structured_experience(entry, today=today)

    if isinstance(entry, Mapping):
        try:
            structured = StructuredExperience.model_validate(dict(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed structured experience {dict(entry)!r}: {e.error_count()} error(s)")
            return None
        return convert_structured_experience(structured, today=today)

    logger.warning(f"Skipping experience entry of unsupported type: {type(entry).__name__}")
    return None


def parse_all_experiences(
    entries: Iterable[ExperienceEntry],
    today: Optional[YearMonth] = None,
) -> List[ParsedPosition]:
    """Parse every entry, keep input order, drop the ones that fail."""
    today = today or current_month()
    parsed: List[ParsedPosition] = []
    for entry in entries:
        position = _parse_entry(entry, today)
        if position is not None:
            parsed.append(position)
    return parsed


def _company_key(company: str) -> str:
    return company.strip().casefold()


def _recency_key(start: Optional[YearMonth], ongoing: bool) -> Tuple[int, int, int]:
    if start is None:
        return (0 if ongoing else 1, 1, 0)
    return (0 if ongoing else 1, 0, -start.index)


def _chronological_key(position: ParsedPosition) -> Tuple[int, int]:
    if position.start is None:
        return (1, 0)
    return (0, position.start.index)


def _split_into_stints(positions: List[ParsedPosition]) -> List[List[ParsedPosition]]:
    """
    Group positions by employer, then cut each employer's timeline wherever the
    gap between the latest end seen so far in the stint and the next position's
    start exceeds settings.STINT_GAP_MONTHS. A position nested inside an earlier one
    never shortens that end. A position with an unknown start never causes a cut.
    """
    by_company: Dict[str, List[ParsedPosition]] = {}
    for position in positions:
        by_company.setdefault(_company_key(position.company), []).append(position)

    groups: List[List[ParsedPosition]] = []
    for company_positions in by_company.values():
        current: List[ParsedPosition] = []
        previous_end: Optional[YearMonth] = None

        for position in sorted(company_positions, key=_chronological_key):
            if current and position.start is not None and previous_end is not None:
                gap = months_between(previous_end, position.start)
                if gap > settings.STINT_GAP_MONTHS:
                    logger.debug(f"Gap of {gap} months at '{position.company}' starts a new stint")
                    groups.append(current)
                    current = []
                    previous_end = None
            current.append(position)
            previous_end = position.end if previous_end is None else max(previous_end, position.end)

        if current:
            groups.append(current)
    return groups


def _build_stint(positions: List[ParsedPosition]) -> Stint:
    starts = [p.start for p in positions if p.start is not None]
    earliest_start = min(starts) if starts else None
    latest_end = max(p.end for p in positions)
    duration = calculate_duration(earliest_start, latest_end)

    return Stint(
        company=positions[0].company,
        positions=positions,
        total_duration_months=duration.months,
        total_duration_text=duration.text,
        earliest_start=earliest_start,
        latest_end=latest_end,
    )


def calculate_total_experience_duration(
    entries: Iterable[ExperienceEntry],
    today: Optional[YearMonth] = None,
) -> ExperienceSummary:
    """
    Aggregate a list of free-text and/or structured entries into an ExperienceSummary.

    The grand total is the sum of stint totals; overlapping positions inside
    one stint are counted once through the stint span.
    """
    today = today or current_month()
    parsed = parse_all_experiences(entries, today=today)

    if not parsed:
        return ExperienceSummary(total_duration_text=NO_EXPERIENCE_DATA, total_duration_months=0)

    positions = sorted(parsed, key=lambda p: _recency_key(p.start, p.is_ongoing(today)))

    stints = [_build_stint(group) for group in _split_into_stints(positions)]
    stints.sort(key=lambda s: _recency_key(s.earliest_start, s.is_ongoing(today)))

    total_months = sum(stint.total_duration_months for stint in stints)
    logger.debug(f"Aggregated {len(positions)} positions into {len(stints)} stints ({total_months} months)")

    return ExperienceSummary(
        total_duration_text=format_months(total_months) if total_months > 0 else NO_EXPERIENCE,
        total_duration_months=total_months,
        stints=stints,
        positions=positions,
    )


def get_experience_overview(
    entries: Iterable[ExperienceEntry],
    today: Optional[YearMonth] = None,
) -> ExperienceOverview:
    summary = calculate_total_experience_duration(entries, today=today)
    return ExperienceOverview(
        total_duration_text=summary.total_duration_text,
        stint_count=len(summary.stints),
        has_multiple_positions=any(len(stint.positions) > 1 for stint in summary.stints),
    )
