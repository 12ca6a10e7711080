from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from app.validators.value_coercers import local_midnight, parse_date, parse_instant, parse_int


class TestParseDate:
    @pytest.mark.parametrize("raw", ["2024-05-01", "01.05.2024", "05/01/2024", " 2024-05-01 "])
    def test_accepted_formats(self, raw: str) -> None:
        assert parse_date(raw) == date(2024, 5, 1)

    @pytest.mark.parametrize("raw", [None, "", "   ", "2024-13-01", "yesterday", "2024/05/01"])
    def test_invalid_values_yield_none(self, raw: str | None) -> None:
        assert parse_date(raw) is None


class TestParseInstant:
    def test_utc_instant(self) -> None:
        assert parse_instant("2024-05-01T08:30:00Z") == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    def test_offset_date_time(self) -> None:
        parsed = parse_instant("2024-05-01T10:30:00+02:00")

        assert parsed is not None
        assert parsed.utcoffset() == timedelta(hours=2)
        assert parsed == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    def test_local_date_time_uses_process_time_zone(self) -> None:
        parsed = parse_instant("2024-05-01T10:30:00")

        assert parsed is not None
        assert parsed.tzinfo is not None
        assert parsed == datetime(2024, 5, 1, 10, 30).astimezone()

    def test_minute_precision_and_lowercase_separator(self) -> None:
        assert parse_instant("2024-05-01t08:30z") == datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw, microsecond",
        [
            ("2024-05-01T08:30:00.5Z", 500_000),
            ("2024-05-01T08:30:00.123Z", 123_000),
            ("2024-05-01T08:30:00.123456789Z", 123_456),
        ],
    )
    def test_fractional_seconds_are_normalized(self, raw: str, microsecond: int) -> None:
        parsed = parse_instant(raw)

        assert parsed == datetime(2024, 5, 1, 8, 30, 0, microsecond, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["2024-05-01", "01.05.2024", "05/01/2024"])
    def test_plain_dates_anchor_at_local_midnight(self, raw: str) -> None:
        assert parse_instant(raw) == local_midnight(date(2024, 5, 1))

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "not a timestamp",
            "32.01.2024",
            "20240501",
            "20240501T083000Z",
            "2024-05-01 08:30:00",
            "2024-W18-3",
            "2024-05-01T25:00:00Z",
        ],
    )
    def test_invalid_values_yield_none(self, raw: str | None) -> None:
        assert parse_instant(raw) is None


class TestParseInt:
    @pytest.mark.parametrize(
        "raw, expected",
        [("90", 90), (" 42 ", 42), ("0", 0), ("-5", -5), ("+15", 15)],
    )
    def test_integers(self, raw: str, expected: int) -> None:
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "1.5", "90min", "1_000", "99999999999"])
    def test_non_integers_yield_none(self, raw: str | None) -> None:
        assert parse_int(raw) is None


def test_local_midnight_is_aware_start_of_day() -> None:
    midnight = local_midnight(date(2024, 5, 1))

    assert midnight.tzinfo is not None
    assert (midnight.hour, midnight.minute, midnight.second) == (0, 0, 0)
    assert midnight.date() == date(2024, 5, 1)
