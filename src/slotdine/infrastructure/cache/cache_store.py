from __future__ import annotations

from slotdine.application.ports.cache import CacheStore
from slotdine.infrastructure.cache.redis_client import get_redis_client

KEY_PREFIX = "slotdine:"


class RedisCacheStore(CacheStore):
    """Namespaced string cache; values come back decoded by the client."""

    def __init__(self, timeout_seconds: float = 1.0, key_prefix: str = KEY_PREFIX) -> None:
        self._timeout_seconds = timeout_seconds
        self._key_prefix = key_prefix

    def get(self, key: str) -> str | None:
        value = get_redis_client(timeout_seconds=self._timeout_seconds).get(self._key(key))
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        get_redis_client(timeout_seconds=self._timeout_seconds).set(
            name=self._key(key),
            value=value,
            ex=ttl_seconds,
        )

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"
