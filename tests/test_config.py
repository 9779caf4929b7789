"""
Tests for environment-driven settings
"""

from tenure.core.config import Settings, settings
from tenure.services.dates import normalize_date_token


class TestSettings:
    """Test defaults and overrides"""

    def test_defaults(self):
        fresh = Settings()
        assert fresh.MIN_YEAR == 1900
        assert fresh.MAX_YEAR == 2100
        assert fresh.STINT_GAP_MONTHS == 1

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TENURE_STINT_GAP_MONTHS", "3")
        monkeypatch.setenv("TENURE_LOG_LEVEL", "DEBUG")
        fresh = Settings()
        assert fresh.STINT_GAP_MONTHS == 3
        assert fresh.LOG_LEVEL == "DEBUG"

    def test_year_bounds_drive_normalization(self, monkeypatch):
        monkeypatch.setattr(settings, "MIN_YEAR", 2000)
        assert normalize_date_token("1999-12") is None
        assert normalize_date_token("2000-01") is not None
