"""
Test configuration: puts backend/ on sys.path and freezes the evaluation month.
"""
import sys
from pathlib import Path

import pytest

# Add backend to path
BACKEND_DIR = Path(__file__).resolve().parent.parent / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from tenure.services.dates import YearMonth  # noqa: E402


FROZEN_TODAY = YearMonth(2025, 10)


@pytest.fixture
def today():
    """Evaluation month used for every open-ended position in a test."""
    return FROZEN_TODAY
