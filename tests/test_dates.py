"""Tests for duration and date helpers."""

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from analytics.dates import (
    effective_timestamp,
    format_date,
    format_duration,
    parse_csv_date,
    parse_duration_to_seconds,
)


class TestParseDuration:
    """Tests for Strong duration strings."""

    @pytest.mark.parametrize("text,expected", [
        ("1h 5m", 3900),
        ("45m", 2700),
        ("45m 30s", 2730),
        ("2h", 7200),
        ("30s", 30),
        ("", 0),
        ("unknown", 0),
    ])
    def test_parse(self, text, expected):
        assert parse_duration_to_seconds(text) == expected

    def test_non_string(self):
        assert parse_duration_to_seconds(None) == 0
        assert parse_duration_to_seconds(3600) == 0


class TestFormatDuration:
    """Tests for duration display."""

    def test_hours_and_minutes(self):
        assert format_duration(3900) == "1h 5m"

    def test_seconds_only(self):
        assert format_duration(30) == "30s"

    def test_seconds_hidden_with_minutes(self):
        assert format_duration(2730) == "45m"

    def test_nothing(self):
        assert format_duration(0) == "N/A"
        assert format_duration(None) == "N/A"
        assert format_duration(float('nan')) == "N/A"


class TestParseCsvDate:
    """Tests for Strong workout date parsing."""

    def test_valid(self):
        assert parse_csv_date("2024-01-10 08:00:00") == datetime(2024, 1, 10, 8, 0, 0)

    def test_iso_separator(self):
        assert parse_csv_date("2024-01-10T08:00:00") == datetime(2024, 1, 10, 8, 0, 0)

    def test_unpadded_components(self):
        assert parse_csv_date("2024-1-5 7:03:09") == datetime(2024, 1, 5, 7, 3, 9)

    @pytest.mark.parametrize("text", [
        "2024-13-01 08:00:00",
        "2024-02-30 08:00:00",
        "2024-01-10",
        "01/10/2024 08:00",
        "not a date",
        "",
    ])
    def test_invalid(self, text):
        assert parse_csv_date(text) is None

    def test_non_string(self):
        assert parse_csv_date(None) is None


class TestFormatDate:
    """Tests for date display formats."""

    moment = datetime(2024, 3, 5, 14, 7, 0)

    @pytest.mark.parametrize("fmt,expected", [
        ("YYYY-MM-DD", "2024-03-05"),
        ("YYYY-MM", "2024-03"),
        ("MM/DD", "03/05"),
        ("MM/DD/YYYY", "03/05/2024"),
        ("MM/DD HH:mm", "03/05 14:07"),
        ("Month DD, YYYY", "March 5, 2024"),
        ("Month DD, YYYY HH:mm", "March 5, 2024 14:07"),
    ])
    def test_formats(self, fmt, expected):
        assert format_date(self.moment, fmt) == expected

    def test_accepts_date(self):
        assert format_date(date(2024, 3, 5)) == "2024-03-05"

    def test_accepts_strong_string(self):
        assert format_date("2024-03-05 14:07:00", "MM/DD/YYYY") == "03/05/2024"

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            format_date("yesterday")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_date(self.moment, "DD.MM.YYYY")


class TestEffectiveTimestamp:
    """Tests for resolving when a workout happened."""

    def test_uses_timestamp(self):
        workout = SimpleNamespace(timestamp=datetime(2024, 1, 1), original_date_key="2023-01-01 00:00:00")
        assert effective_timestamp(workout) == datetime(2024, 1, 1)

    def test_falls_back_to_date_key(self):
        workout = SimpleNamespace(timestamp=None, original_date_key="2023-06-01 09:30:00")
        assert effective_timestamp(workout) == datetime(2023, 6, 1, 9, 30)

    def test_unparseable_sorts_first(self):
        workout = SimpleNamespace(timestamp=None, original_date_key="garbage")
        assert effective_timestamp(workout) == datetime.min
