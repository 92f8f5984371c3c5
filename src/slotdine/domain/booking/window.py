"""Ordering window arithmetic for a reservation slot.

A reservation carries a calendar date and a human readable slot such as
``"7:00 PM - 10:00 PM"``. Food ordering opens a configurable buffer before the
slot starts and closes when the slot ends. Slots that cross midnight end on the
following calendar day.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Literal, Union

DEFAULT_ACCESS_BUFFER = timedelta(minutes=15)

_TIME_RANGE_PATTERN = re.compile(
    r"^\s*(\d{1,2}):(\d{2})\s*(AM|PM)\s*-\s*(\d{1,2}):(\d{2})\s*(AM|PM)\s*$",
    re.IGNORECASE,
)
_LONG_DATE_FORMATS = (
    "%A, %B %d, %Y",
    "%a, %b %d, %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
)

Period = Literal["AM", "PM"]


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int
    period: Period

    def to_24_hour(self) -> tuple[int, int]:
        value = self.hour % 12
        if self.period == "PM":
            value += 12
        return value, self.minute


@dataclass(frozen=True)
class TimeRange:
    start: ClockTime
    end: ClockTime


@dataclass(frozen=True)
class BookingWindow:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("booking window end must be after start")


@dataclass(frozen=True)
class Allowed:
    window: BookingWindow | None = None
    access_opens_at: datetime | None = None

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class TooEarly:
    access_opens_at: datetime
    window: BookingWindow

    @property
    def allowed(self) -> bool:
        return False


@dataclass(frozen=True)
class TooLate:
    window: BookingWindow

    @property
    def allowed(self) -> bool:
        return False

    @property
    def closed_at(self) -> datetime:
        return self.window.end


OrderingWindowStatus = Union[Allowed, TooEarly, TooLate]


def parse_time_range(text: str | None) -> TimeRange | None:
    if not text or not isinstance(text, str):
        return None
    match = _TIME_RANGE_PATTERN.match(text)
    if match is None:
        return None

    start_hour, start_minute = int(match.group(1)), int(match.group(2))
    end_hour, end_minute = int(match.group(4)), int(match.group(5))
    if not _valid_clock(start_hour, start_minute) or not _valid_clock(end_hour, end_minute):
        return None

    return TimeRange(
        start=ClockTime(hour=start_hour, minute=start_minute, period=match.group(3).upper()),
        end=ClockTime(hour=end_hour, minute=end_minute, period=match.group(6).upper()),
    )


def parse_booking_date(value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    for fmt in _LONG_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def to_booking_window(
    booking_date: date | str | None,
    time_range_text: str | None,
    tz: tzinfo | None = None,
) -> BookingWindow | None:
    day = parse_booking_date(booking_date)
    time_range = parse_time_range(time_range_text)
    if day is None or time_range is None:
        return None

    start_hour, start_minute = time_range.start.to_24_hour()
    end_hour, end_minute = time_range.end.to_24_hour()
    start = datetime.combine(day, time(start_hour, start_minute), tzinfo=tz)
    end = datetime.combine(day, time(end_hour, end_minute), tzinfo=tz)

    if end <= start:
        end += timedelta(days=1)

    return BookingWindow(start=start, end=end)


def classify(
    window: BookingWindow | None,
    now: datetime,
    access_buffer: timedelta = DEFAULT_ACCESS_BUFFER,
) -> OrderingWindowStatus:
    if window is None:
        return Allowed(window=None)

    access_opens_at = window.start - access_buffer
    if now < access_opens_at:
        return TooEarly(access_opens_at=access_opens_at, window=window)
    if now > window.end:
        return TooLate(window=window)
    return Allowed(window=window, access_opens_at=access_opens_at)


def ordering_window_status(
    booking_date: date | str | None,
    time_range_text: str | None,
    now: datetime,
    access_buffer: timedelta = DEFAULT_ACCESS_BUFFER,
) -> OrderingWindowStatus:
    window = to_booking_window(booking_date, time_range_text, tz=now.tzinfo)
    return classify(window, now, access_buffer=access_buffer)


def _valid_clock(hour: int, minute: int) -> bool:
    return 0 <= hour <= 12 and 0 <= minute <= 59
