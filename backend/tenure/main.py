"""Command-line entrypoint: sets up logging, reads experience entries as JSON and
prints the aggregated tenure summary.

Logging configuration lives here only; library modules just create named loggers.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from tenure.core.config import settings
from tenure.services.aggregation import calculate_total_experience_duration
from tenure.services.dates import YearMonth

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
    )

    # Per-rule traces are only useful when debugging a specific line
    if level.upper() != "DEBUG":
        logging.getLogger("tenure.grammar").setLevel(logging.INFO)
        logging.getLogger("tenure.dates").setLevel(logging.INFO)


def _month_arg(value: str) -> YearMonth:
    try:
        return YearMonth.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tenure-summary",
        description=f"{settings.APP_NAME}: aggregate employment history into per-employer tenure.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="JSON file holding a list of experience strings and/or objects (default: stdin)",
    )
    parser.add_argument(
        "--today",
        type=_month_arg,
        default=None,
        help="Evaluate open-ended positions against this month (YYYY-MM) instead of the system clock",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Logging level (default: {settings.LOG_LEVEL})",
    )
    return parser


def load_entries(path: Optional[str]) -> List[Any]:
    """Read and decode the entry list. Raises ValueError for anything other than a JSON array."""
    try:
        raw = Path(path).read_text(encoding="utf-8") if path else sys.stdin.read()
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Input is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ValueError("Input must be a JSON array of experience entries")
    return data


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    logger = logging.getLogger("tenure.main")

    try:
        entries = load_entries(args.path)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    logger.info(f"Aggregating {len(entries)} experience entries")
    summary = calculate_total_experience_duration(entries, today=args.today)
    print(summary.model_dump_json(indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
