"""Environment-driven settings read at the infrastructure seams."""

from __future__ import annotations

import os
from datetime import timedelta
from zoneinfo import ZoneInfo

from slotdine.domain.booking.window import DEFAULT_ACCESS_BUFFER
from slotdine.domain.common.money import Money

DEFAULT_VENUE_TIMEZONE = "Asia/Kolkata"
DEFAULT_MENU_CACHE_TTL_SECONDS = 300
DEFAULT_API_URL = "http://localhost:8000"


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


def redis_url() -> str:
    url = os.getenv("REDIS_URL")
    if not url:
        raise RuntimeError("REDIS_URL is not set")
    return url


def catalog_feed_url() -> str | None:
    return os.getenv("CATALOG_FEED_URL") or None


def api_base_url() -> str:
    return os.getenv("SLOTDINE_API_URL", DEFAULT_API_URL).rstrip("/")


def menu_cache_ttl_seconds() -> int:
    raw = os.getenv("MENU_CACHE_TTL_SECONDS")
    if not raw:
        return DEFAULT_MENU_CACHE_TTL_SECONDS
    try:
        return max(1, int(raw))
    except ValueError as exc:
        raise RuntimeError(f"MENU_CACHE_TTL_SECONDS must be an integer, got {raw!r}") from exc


def access_buffer() -> timedelta:
    raw = os.getenv("ORDERING_ACCESS_BUFFER_MINUTES")
    if not raw:
        return DEFAULT_ACCESS_BUFFER
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"ORDERING_ACCESS_BUFFER_MINUTES must be an integer, got {raw!r}") from exc
    if minutes < 0:
        raise RuntimeError("ORDERING_ACCESS_BUFFER_MINUTES must be >= 0")
    return timedelta(minutes=minutes)


def venue_timezone() -> ZoneInfo:
    return ZoneInfo(os.getenv("VENUE_TIMEZONE", DEFAULT_VENUE_TIMEZONE))


def decoration_fee() -> Money | None:
    """Flat fee in rupees added once when a ledger holds decoration lines."""
    raw = os.getenv("DECORATION_FEE")
    if not raw:
        return None
    try:
        fee = Money.from_major(float(raw))
    except ValueError as exc:
        raise RuntimeError(f"DECORATION_FEE must be a non-negative number, got {raw!r}") from exc
    return fee if fee.amount_minor > 0 else None
