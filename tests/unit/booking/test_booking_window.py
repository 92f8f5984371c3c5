from __future__ import annotations

import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.domain.booking.window import (
    Allowed,
    TooEarly,
    TooLate,
    classify,
    ordering_window_status,
    parse_booking_date,
    parse_time_range,
    to_booking_window,
)

SLOT = "6:00 PM - 9:00 PM"
BOOKING_DAY = "2024-06-01"


def test_parse_time_range_accepts_strict_format_case_insensitively() -> None:
    parsed = parse_time_range("7:05 pm - 10:30 PM")
    assert parsed is not None
    assert parsed.start.to_24_hour() == (19, 5)
    assert parsed.end.to_24_hour() == (22, 30)


def test_parse_time_range_rejects_other_shapes() -> None:
    assert parse_time_range("7 PM - 10 PM") is None
    assert parse_time_range("19:00 - 22:00") is None
    assert parse_time_range("13:00 PM - 2:00 AM") is None
    assert parse_time_range("7:60 PM - 9:00 PM") is None
    assert parse_time_range("") is None
    assert parse_time_range(None) is None


def test_twelve_oclock_conversions() -> None:
    parsed = parse_time_range("12:00 AM - 12:30 PM")
    assert parsed is not None
    assert parsed.start.to_24_hour() == (0, 0)
    assert parsed.end.to_24_hour() == (12, 30)


def test_parse_booking_date_accepts_iso_and_long_forms() -> None:
    assert parse_booking_date("2024-06-01") == date(2024, 6, 1)
    assert parse_booking_date("Saturday, June 1, 2024") == date(2024, 6, 1)
    assert parse_booking_date(date(2024, 6, 1)) == date(2024, 6, 1)
    assert parse_booking_date("someday") is None
    assert parse_booking_date(None) is None


def test_overnight_slot_ends_on_the_following_day() -> None:
    window = to_booking_window("2024-01-01", "11:00 PM - 2:00 AM")

    assert window is not None
    assert window.start == datetime(2024, 1, 1, 23, 0)
    assert window.end == datetime(2024, 1, 2, 2, 0)
    assert window.end > window.start


def test_noon_to_midnight_slot_ends_next_day() -> None:
    window = to_booking_window("2024-01-01", "12:00 PM - 12:00 AM")

    assert window is not None
    assert window.end == datetime(2024, 1, 2, 0, 0)


def test_access_opens_exactly_fifteen_minutes_before_start() -> None:
    just_before = ordering_window_status(BOOKING_DAY, SLOT, now=datetime(2024, 6, 1, 17, 44, 59))
    at_open = ordering_window_status(BOOKING_DAY, SLOT, now=datetime(2024, 6, 1, 17, 45, 0))

    assert isinstance(just_before, TooEarly)
    assert just_before.access_opens_at == datetime(2024, 6, 1, 17, 45)
    assert not just_before.allowed
    assert isinstance(at_open, Allowed)
    assert at_open.allowed


def test_window_end_is_inclusive() -> None:
    at_end = ordering_window_status(BOOKING_DAY, SLOT, now=datetime(2024, 6, 1, 21, 0, 0))
    after_end = ordering_window_status(BOOKING_DAY, SLOT, now=datetime(2024, 6, 1, 21, 0, 1))

    assert isinstance(at_end, Allowed)
    assert isinstance(after_end, TooLate)
    assert after_end.closed_at == datetime(2024, 6, 1, 21, 0)


def test_overnight_slot_is_open_after_midnight() -> None:
    status = ordering_window_status(
        "2024-01-01",
        "11:00 PM - 2:00 AM",
        now=datetime(2024, 1, 2, 1, 30),
    )
    assert isinstance(status, Allowed)


def test_unparseable_window_fails_open() -> None:
    status = ordering_window_status(BOOKING_DAY, "evening", now=datetime(2030, 1, 1))
    assert status == Allowed(window=None)
    assert classify(None, datetime(2030, 1, 1)) == Allowed(window=None)


def test_access_buffer_is_configurable() -> None:
    status = ordering_window_status(
        BOOKING_DAY,
        SLOT,
        now=datetime(2024, 6, 1, 17, 31),
        access_buffer=timedelta(minutes=30),
    )
    assert isinstance(status, Allowed)
    assert status.access_opens_at == datetime(2024, 6, 1, 17, 30)


def test_window_follows_the_clock_timezone() -> None:
    venue = ZoneInfo("Asia/Kolkata")
    status = ordering_window_status(BOOKING_DAY, SLOT, now=datetime(2024, 6, 1, 18, 10, tzinfo=venue))

    assert isinstance(status, Allowed)
    assert status.window is not None
    assert status.window.start.tzinfo == venue
