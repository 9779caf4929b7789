"""
Unit tests for date token normalization
"""

import pytest

from tenure.services.dates import (
    DateMarker,
    DateRole,
    YearMonth,
    months_between,
    normalize_date_token,
)


class TestYearMonth:
    """Test the month value type"""

    def test_string_form_is_zero_padded(self):
        assert str(YearMonth(2024, 3)) == "2024-03"

    def test_ordering_is_chronological(self):
        assert YearMonth(2023, 12) < YearMonth(2024, 1)
        assert max(YearMonth(2020, 5), YearMonth(2019, 11)) == YearMonth(2020, 5)

    def test_months_between(self):
        assert months_between(YearMonth(2022, 1), YearMonth(2023, 1)) == 12
        assert months_between(YearMonth(2022, 11), YearMonth(2023, 2)) == 3
        assert months_between(YearMonth(2022, 1), YearMonth(2021, 1)) == -12

    def test_parse_accepts_concrete_month(self):
        assert YearMonth.parse("2025-10") == YearMonth(2025, 10)

    def test_parse_rejects_sentinel(self):
        with pytest.raises(ValueError):
            YearMonth.parse("present")


class TestConcreteTokens:
    """Test recognized date spellings"""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("2024-06-01", YearMonth(2024, 6)),
            ("2024-06-01T00:00:00+00:00", YearMonth(2024, 6)),
            ("2024-06", YearMonth(2024, 6)),
            ("Jun 2024", YearMonth(2024, 6)),
            ("June 2024", YearMonth(2024, 6)),
            ("jun 2024", YearMonth(2024, 6)),
            ("SEPTEMBER 2019", YearMonth(2019, 9)),
            ("Sept 2024", YearMonth(2024, 9)),
            ("  2021-02-15  ", YearMonth(2021, 2)),
        ],
    )
    def test_recognized(self, token, expected):
        assert normalize_date_token(token) == expected

    def test_day_and_time_are_dropped(self):
        assert normalize_date_token("2023-12-31T23:59:59+02:00") == YearMonth(2023, 12)

    def test_starting_prefix_uses_inner_date(self):
        assert normalize_date_token("starting 2025-06-01") == YearMonth(2025, 6)
        assert normalize_date_token("Starting Aug 2025") == YearMonth(2025, 8)


class TestSentinels:
    """Test sentinel resolution by role"""

    @pytest.mark.parametrize("token", ["present", "Present", "NOW", "null", "Unknown"])
    def test_end_role_is_open_ended(self, token):
        assert normalize_date_token(token, DateRole.END) is DateMarker.OPEN_ENDED

    @pytest.mark.parametrize("token", ["present", "now", "NULL", "unknown"])
    def test_start_role_is_unknown(self, token):
        assert normalize_date_token(token, DateRole.START) is DateMarker.UNKNOWN

    def test_missing_token(self):
        assert normalize_date_token(None, DateRole.END) is DateMarker.OPEN_ENDED
        assert normalize_date_token(None, DateRole.START) is DateMarker.UNKNOWN


class TestRejectedTokens:
    """Test tokens that must not normalize"""

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "soon",
            "Smarch 2020",
            "2024-13",
            "2024-00-10",
            "2023-02-30",
            "1899-12",
            "Jan 2101",
            "2024",
            "06/2024",
        ],
    )
    def test_rejected(self, token):
        assert normalize_date_token(token) is None


class TestIdempotence:
    """Normalizing the string form of a normalized month gives the same month"""

    @pytest.mark.parametrize("token", ["2024-06-01", "Aug 2025", "2019-01", "2020-02-29T10:00:00+00:00"])
    def test_round_trip(self, token):
        first = normalize_date_token(token)
        assert normalize_date_token(str(first)) == first
