"""Grammar matching for free-text experience lines.

A grammar rule is a compiled pattern plus an optional range splitter. A rule accepts
a line only when its pattern matches the whole line AND its date tokens normalize.
The ordered rule table and the matcher live in `rules`.

Pattern group names:
- title, company: required
- start, end: date tokens (a rule without an end group describes an ongoing position)
- range: a free-form "start <sep> end" span, split by the rule's splitter
- location, description: optional display text
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging
import re

from tenure.services.dates import (
    DateMarker,
    DateRole,
    NormalizedDate,
    YearMonth,
    normalize_date_token,
)

logger = logging.getLogger("tenure.grammar")

RangeSplitter = Callable[[str], Optional[Tuple[str, str]]]


@dataclass(frozen=True)
class RawFields:
    title: str
    company: str
    raw_start: Optional[str]
    raw_end: Optional[str]
    location: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class GrammarMatch:
    """A rule that matched, with its extracted fields and normalized dates.

    `start` is None when the start is unknown; `end` is a YearMonth or
    DateMarker.OPEN_ENDED.
    """
    rule: str
    fields: RawFields
    start: Optional[YearMonth]
    end: NormalizedDate


def split_on(separator: str) -> RangeSplitter:
    """Build a splitter that expects exactly two non-empty halves around `separator`."""
    def _split(span: str) -> Optional[Tuple[str, str]]:
        parts = [part.strip() for part in span.split(separator)]
        if len(parts) != 2 or not all(parts):
            return None
        return parts[0], parts[1]
    return _split


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class GrammarRule:
    name: str
    pattern: re.Pattern
    split_range: Optional[RangeSplitter] = None

    def extract(self, text: str) -> Optional[RawFields]:
        """Decompose `text` into raw fields, without interpreting the dates."""
        match = self.pattern.fullmatch(text)
        if not match:
            return None

        groups = match.groupdict()
        title = _clean(groups.get("title"))
        company = _clean(groups.get("company"))
        if not title or not company:
            return None

        raw_start = _clean(groups.get("start"))
        raw_end = _clean(groups.get("end"))
        if self.split_range is not None:
            halves = self.split_range(groups.get("range") or "")
            if halves is None:
                return None
            raw_start, raw_end = halves

        return RawFields(
            title=title,
            company=company,
            raw_start=raw_start,
            raw_end=raw_end,
            location=_clean(groups.get("location")),
            description=_clean(groups.get("description")),
        )

    def apply(self, text: str) -> Optional[GrammarMatch]:
        """Extract and normalize. Any date token that fails to normalize rejects the rule."""
        fields = self.extract(text)
        if fields is None:
            return None

        start = normalize_date_token(fields.raw_start, DateRole.START)
        end = normalize_date_token(fields.raw_end, DateRole.END)
        if start is None or end is None:
            logger.debug(
                f"Rule '{self.name}' matched layout but dates did not normalize: "
                f"start='{fields.raw_start}', end='{fields.raw_end}'"
            )
            return None

        return GrammarMatch(
            rule=self.name,
            fields=fields,
            start=None if start is DateMarker.UNKNOWN else start,
            end=end,
        )


def compile_rule(name: str, pattern: str, split_range: Optional[RangeSplitter] = None) -> GrammarRule:
    return GrammarRule(name=name, pattern=re.compile(pattern), split_range=split_range)

