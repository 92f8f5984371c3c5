from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from slotdine.infrastructure.config import database_url


@lru_cache(maxsize=8)
def _build_engine(url: str, connect_timeout: int) -> Engine:
    connect_args: dict[str, object] = {}
    if not url.startswith("sqlite"):
        connect_args["connect_timeout"] = connect_timeout
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    connect_timeout = max(1, int(timeout_seconds))
    return _build_engine(database_url(), connect_timeout)


def ping_database(timeout_seconds: float = 1.0) -> bool:
    try:
        with get_engine(timeout_seconds).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
