from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

import slotdine.infrastructure.cache.cache_store as cache_store_module
from slotdine.infrastructure.cache.cache_store import RedisCacheStore


class FakeRedis:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.expiry: dict[str, int] = {}

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def set(self, name: str, value: str, ex: int) -> None:
        self.values[name] = value
        self.expiry[name] = ex


def test_cache_store_prefixes_keys_and_sets_ttl(monkeypatch) -> None:
    fake = FakeRedis()
    monkeypatch.setattr(cache_store_module, "get_redis_client", lambda timeout_seconds=1.0: fake)
    store = RedisCacheStore()

    store.set("menu:feed", '{"services": []}', ttl_seconds=300)

    assert fake.values == {"slotdine:menu:feed": '{"services": []}'}
    assert fake.expiry == {"slotdine:menu:feed": 300}
    assert store.get("menu:feed") == '{"services": []}'
    assert store.get("missing") is None
