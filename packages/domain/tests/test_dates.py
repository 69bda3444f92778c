"""Tests for round deadline date helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from fundraising_domain.dates import (
    calculate_days_remaining,
    get_time_remaining_text,
    is_date_in_future,
    is_date_in_past,
    is_date_range_active,
    is_ending_soon,
    to_datetime,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_to_datetime_variants():
    assert to_datetime("2024-01-15T12:00:00Z") == NOW
    assert to_datetime(datetime(2024, 1, 15, 12, 0)) == NOW
    assert to_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert to_datetime(datetime(2024, 1, 15, 7, 0, tzinfo=timezone(timedelta(hours=-5)))) == NOW


def test_to_datetime_invalid_string():
    with pytest.raises(ValueError):
        to_datetime("not a date")


class TestDaysRemaining:

    def test_rounds_partial_days_up(self):
        assert calculate_days_remaining(NOW + timedelta(days=2, hours=1), NOW) == 3

    def test_exact_days(self):
        assert calculate_days_remaining(NOW + timedelta(days=7), NOW) == 7

    def test_past_dates_floor_at_zero(self):
        assert calculate_days_remaining(NOW - timedelta(days=3), NOW) == 0

    def test_iso_string_input(self):
        assert calculate_days_remaining("2024-01-20T12:00:00Z", NOW) == 5


def test_past_and_future():
    assert is_date_in_past(NOW - timedelta(seconds=1), NOW)
    assert not is_date_in_past(NOW + timedelta(seconds=1), NOW)
    assert is_date_in_future(NOW + timedelta(days=1), NOW)
    assert not is_date_in_future(NOW, NOW)


def test_date_range_active():
    start = NOW - timedelta(days=1)
    end = NOW + timedelta(days=1)
    assert is_date_range_active(start, end, NOW)
    assert is_date_range_active(NOW, end, NOW)
    assert not is_date_range_active(end, end + timedelta(days=1), NOW)


@pytest.mark.parametrize("days,expected", [
    (0, "Ending today"),
    (1, "1 day remaining"),
    (5, "5 days remaining"),
    (7, "7 days remaining"),
    (8, "1 week remaining"),
    (21, "3 weeks remaining"),
    (45, "1 month remaining"),
    (95, "3 months remaining"),
])
def test_time_remaining_text(days, expected):
    assert get_time_remaining_text(NOW + timedelta(days=days), NOW) == expected


def test_is_ending_soon():
    assert is_ending_soon(NOW + timedelta(days=3), NOW)
    assert is_ending_soon(NOW + timedelta(days=7), NOW)
    assert not is_ending_soon(NOW + timedelta(days=8), NOW)
    assert not is_ending_soon(NOW - timedelta(days=1), NOW)
