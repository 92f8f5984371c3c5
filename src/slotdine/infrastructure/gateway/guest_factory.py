from __future__ import annotations

from datetime import datetime
from typing import Callable

import httpx

from slotdine.application.guest.session import GuestOrderingSession
from slotdine.infrastructure.config import access_buffer, decoration_fee, venue_timezone
from slotdine.infrastructure.gateway.http_gateway import HttpOrderGateway


def create_guest_session(
    gateway: HttpOrderGateway | None = None,
    clock: Callable[[], datetime] | None = None,
) -> GuestOrderingSession:
    """Guest session over the HTTP API, configured from the environment."""
    return GuestOrderingSession(
        gateway or HttpOrderGateway(),
        clock=clock,
        tz=venue_timezone(),
        access_buffer=access_buffer(),
        decoration_fee=decoration_fee(),
    )
