"""Ordered grammar rules for experience lines.

Order matters: several layouts overlap, and an earlier, more specific rule must
claim a line before a looser one infers different field boundaries. New rules
go next to the layout they refine, never simply at the end.
"""

from __future__ import annotations
from typing import Iterable, Optional, Tuple
import logging

from tenure.services.parsing.grammar import GrammarMatch, GrammarRule, compile_rule, split_on

logger = logging.getLogger("tenure.grammar")

# Date token shapes
D = r"\d{4}-\d{2}-\d{2}"                                # 2024-06-01
M = r"\d{4}-\d{2}"                                      # 2024-06
TS = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+\d{2}:\d{2}"  # 2024-06-01T00:00:00+00:00
N = r"[A-Za-z]{3}\s+\d{4}"                              # Jun 2024

# "Title, Company" prefix shared by most layouts
TC = r"(?P<title>.+?),\s*(?P<company>.+?)"
# "Title at Company" prefix
TAC = r"(?P<title>.+?)\s+at\s+(?P<company>.+?)"


GRAMMAR_RULES: Tuple[GrammarRule, ...] = (
    # --- Parenthesized ranges followed by "Location | Description" or "| Description" ---
    compile_rule(
        "timestamp_range_location_pipe",
        TC + rf"\s*\((?P<start>{TS})\s*[–-]\s*(?P<end>Present|{TS})\)\s*[–-]\s*(?P<location>[^|]+)\s*\|\s*(?P<description>.+)",
    ),
    compile_rule(
        "date_range_location_pipe",
        TC + rf"\s*\((?P<start>{D}|Unknown)\s*[–-]\s*(?P<end>Present|{D})\)\s*[–-]\s*(?P<location>[^|]+)\s*\|\s*(?P<description>.+)",
    ),
    compile_rule(
        "date_range_pipe",
        TC + rf"\s*\((?P<start>{D}|Unknown)\s*[–-]\s*(?P<end>Present|{D})\)\s*\|\s*(?P<description>.+)",
    ),
    compile_rule(
        "timestamp_range_pipe",
        TC + rf"\s*\((?P<start>{TS})\s*[–-]\s*(?P<end>Present|{TS})\)\s*\|\s*(?P<description>.+)",
    ),

    # --- Bare "D to D" after the company (location folded into company) ---
    compile_rule(
        "bare_date_to_present",
        TC + rf"\s+(?P<start>{D})\s+to\s+(?P<end>present)",
    ),
    compile_rule(
        "bare_date_to_date",
        TC + rf"\s+(?P<start>{D})\s+to\s+(?P<end>{D})",
    ),

    # --- "(Location) – YYYY-MM to ..." ---
    compile_rule(
        "location_month_to_present",
        TC + rf"\s*\((?P<location>[^)]+)\)\s*–\s*(?P<start>{M})\s+to\s+(?P<end>present)",
    ),
    compile_rule(
        "location_month_to_month",
        TC + rf"\s*\((?P<location>[^)]+)\)\s*–\s*(?P<start>{M})\s+to\s+(?P<end>{M})",
    ),

    # --- "— Location | D – ..." ---
    compile_rule(
        "em_dash_location_pipe_present",
        TC + rf"\s*—\s*(?P<location>[^|]+)\s*\|\s*(?P<start>{D})\s*[–-]\s*(?P<end>Present)",
    ),
    compile_rule(
        "em_dash_location_pipe_range",
        TC + rf"\s*—\s*(?P<location>[^|]+)\s*\|\s*(?P<start>{D})\s*[–-]\s*(?P<end>{D})",
    ),

    # --- "(Location) — Mon YYYY ...; Description" ---
    compile_rule(
        "location_month_name_to_semicolon",
        TC + rf"\s*\((?P<location>[^)]+)\)\s*—\s*(?P<start>{N})\s+to\s+(?P<end>{N});\s*(?P<description>.+)",
    ),
    compile_rule(
        "location_month_name_present_semicolon",
        TC + rf"\s*\((?P<location>[^)]+)\)\s*—\s*(?P<start>{N})–(?P<end>present);\s*(?P<description>.+)",
    ),
    compile_rule(
        "location_starting_date",
        TC + rf"\s*\((?P<location>[^)]+)\)\s+(?P<start>starting\s+{D})",
    ),

    # --- "Title at Company (start_date: ... end_date: ...) — Description" ---
    compile_rule(
        "labelled_range_description",
        TAC + rf"\s*\(start_date:\s*(?P<start>{D})\s*-\s*end_date:\s*(?P<end>Present|{D})\)\s*[—–-]\s*(?P<description>.+)",
    ),
    compile_rule(
        "labelled_range_description_padded",
        TAC + rf"\s*\(\s*start_date:\s*(?P<start>{D})\s*-\s*end_date:\s*(?P<end>Present|{D})\s*\)\s*[—–-]\s*(?P<description>.+)",
    ),
    compile_rule(
        "at_range_description",
        TAC + rf"\s*\((?P<start>{D})\s*-\s*(?P<end>Present|{D})\)\s*[—–-]\s*(?P<description>.+)",
    ),
    compile_rule(
        "labelled_start_end",
        rf"(?P<title>.+?)(?:\s+at\s+|\s*,\s*)(?P<company>.+?)\s*\(start_date:\s*(?P<start>{D}),\s*end_date:\s*(?P<end>null|{D})\)(?:\s*[–-]\s*(?P<description>.+))?",
    ),

    # --- Keyed "start_date=..., end_date=..." records ---
    compile_rule(
        "keyed_description_location",
        TC + rf"\s*\((?P<description>[^)]+)\)\s*,\s*(?P<location>[^,]+)\s*,\s*start_date=(?P<start>{D})\s*,\s*end_date=(?P<end>null|{D})",
    ),
    compile_rule(
        "keyed_null_location",
        TC + rf",\s*location=null\s*,\s*start_date=(?P<start>{D})\s*,\s*end_date=(?P<end>null|{D})",
    ),
    compile_rule(
        "keyed_location",
        TC + rf",\s*(?P<location>.+?)\s*,\s*start_date=(?P<start>{D}|null)\s*,\s*end_date=(?P<end>null|{D})",
    ),

    # --- Parenthesized range followed by ", Location" ---
    compile_rule(
        "date_range_comma_location",
        TC + rf"\s*\((?P<start>{D})\s*[–-]\s*(?P<end>Present|{D})\)\s*,\s*(?P<location>[^,]+)",
    ),
    compile_rule(
        "month_range_comma_location",
        TC + rf"\s*\((?P<start>{M})\s*[–-]\s*(?P<end>{M})\)\s*,\s*(?P<location>[^,]+)",
    ),
    compile_rule(
        "month_name_range_comma_location",
        TC + rf"\s*\((?P<start>{N})\s*[–-]\s*(?P<end>{N})\)\s*,\s*(?P<location>[^,]+)",
    ),

    # --- Parenthesized range alone ---
    compile_rule(
        "month_range",
        TC + rf"\s*\((?P<start>{M})\s*[–-]\s*(?P<end>{M})\)",
    ),
    compile_rule(
        "date_range",
        TC + rf"\s*\((?P<start>{D})\s*[–-]\s*(?P<end>Present|{D})\)",
    ),

    # --- "— Mon YYYY - ...; Location" ---
    compile_rule(
        "em_dash_month_name_range_location",
        TC + rf"\s*—\s*(?P<start>{N})\s*-\s*(?P<end>{N});\s*(?P<location>.+)",
    ),
    compile_rule(
        "em_dash_month_name_present_location",
        TC + rf"\s*—\s*(?P<start>{N})\s*-\s*(?P<end>Present);\s*(?P<location>.+)",
    ),

    # --- Parenthesized range followed by "— Description" ---
    compile_rule(
        "date_range_em_dash_description",
        TC + rf"\s*\((?P<start>{D})\s*[–-]\s*(?P<end>{D})\)\s*—\s*(?P<description>.+)",
    ),
    compile_rule(
        "date_present_em_dash_description",
        TC + rf"\s*\((?P<start>{D})\s*[–-]\s*(?P<end>Present)\)\s*—\s*(?P<description>.+)",
    ),

    # --- "— Mon YYYY–Mon YYYY; Location. Description" ---
    compile_rule(
        "em_dash_month_name_range_location_description",
        TC + rf"\s*—\s*(?P<start>{N})–(?P<end>{N});\s*(?P<location>.+?)\.\s*(?P<description>.+)",
    ),
    compile_rule(
        "em_dash_month_name_present_location_description",
        TC + rf"\s*—\s*(?P<start>{N})–(?P<end>Present);\s*(?P<location>.+?)\.\s*(?P<description>.+)",
    ),
    compile_rule(
        "em_dash_month_name_present_semicolon",
        TC + rf"\s*—\s*(?P<start>{N})–(?P<end>Present);\s*(?P<location>.+)",
    ),

    # --- "(start date D)", "(D to D)" ---
    compile_rule(
        "start_date_only",
        TC + rf"\s*\(start date (?P<start>{D})\)",
    ),
    compile_rule(
        "date_to_date",
        TC + rf"\s*\((?P<start>{D})\s+to\s+(?P<end>{D})\)",
    ),
    compile_rule(
        "dash_separator_date_to_date",
        rf"(?P<title>.+?)\s*-\s*(?P<company>.+?)\s*\((?P<start>{D})\s+to\s+(?P<end>{D})\)",
    ),
    compile_rule(
        "month_to_dash_description",
        TC + rf"\s*\((?P<start>{M})\s+to\s+(?P<end>Present|{M})\)\s*[–-]\s*(?P<description>.+)",
    ),

    # --- "Title @ Company (Mon YYYY - Mon YYYY), Location" ---
    compile_rule(
        "at_sign_range",
        rf"(?P<title>.+?)\s+@\s+(?P<company>.+?)\s*\((?P<range>[^)]+)\)(?:,\s*(?P<location>.+))?",
        split_range=split_on("-"),
    ),

    compile_rule(
        "date_to_em_dash_description",
        TC + rf"\s*\((?P<start>{D})\s+to\s+(?P<end>present|{D})\)\s*—\s*(?P<description>.+)",
    ),
    compile_rule(
        "date_en_dash_location",
        TC + rf"\s*\((?P<start>{D})\s*–\s*(?P<end>Present|{D})\)\s*–\s*(?P<location>.+)",
    ),
    compile_rule(
        "location_comma_month_to",
        TC + rf"\s*\((?P<location>[^)]+)\)\s*,\s*(?P<start>{M})\s+to\s+(?P<end>Present|{M})",
    ),
    compile_rule(
        "comma_date_range",
        TC + rf"\s*,\s*(?P<start>{D})\s*–\s*(?P<end>Present|{D})",
    ),
    compile_rule(
        "comma_token_range_location",
        TC + r"\s*,\s*(?P<start>[^,]+)\s*–\s*(?P<end>[^,]+)\s*,\s*(?P<location>.+)",
    ),
    compile_rule(
        "at_date_range_pipe",
        TAC + rf"\s*\((?P<start>{D})\s*–\s*(?P<end>Present|{D})\)\s*\|\s*(?P<location>.+)",
    ),
    compile_rule(
        "month_to_space_description",
        TC + rf"\s*\((?P<start>{M})\s+to\s+(?P<end>Present|{M})\)\s+(?P<description>.+)",
    ),
    compile_rule(
        "month_to",
        TC + rf"\s*\((?P<start>{M})\s+to\s+(?P<end>Present|{M})\)",
    ),

    # --- Catch-all layouts; the range is split and each half normalized ---
    compile_rule(
        "location_em_dash_range",
        TC + r"\s*\((?P<location>[^)]+)\)\s*—\s*(?P<range>[^;]+?)(?:;\s*(?P<description>.+))?",
        split_range=split_on(" to "),
    ),
    compile_rule(
        "parenthesized_range",
        TC + r"\s*\((?P<range>[^)]+)\)(?:,\s*(?P<location>.+))?",
        split_range=split_on("–"),
    ),
    compile_rule(
        "legacy_at",
        r"(?P<title>.+) at (?P<company>.+?)\s*\((?P<range>[^)]+)\)",
        split_range=split_on(" to "),
    ),
)


RULES_BY_NAME = {rule.name: rule for rule in GRAMMAR_RULES}


def match_experience(text: str, rules: Optional[Iterable[GrammarRule]] = None) -> Optional[GrammarMatch]:
    """
    Run the ordered rule list against one experience line.

    Returns the first successful GrammarMatch, or None when no rule accepts the line.
    """
    if rules is None:
        rules = GRAMMAR_RULES

    cleaned = (text or "").strip()
    if not cleaned:
        return None

    for rule in rules:
        result = rule.apply(cleaned)
        if result is not None:
            logger.debug(f"Matched rule '{rule.name}' for: {cleaned}")
            return result
    return None
