from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ValidationError

from slotdine.application.dto.responses import MenuFeedResponse
from slotdine.application.metrics.order_lifecycle import record_menu_feed_request
from slotdine.application.ports.cache import CacheStore
from slotdine.application.ports.catalog import CatalogFeed

MENU_FEED_CACHE_KEY = "menu:feed"


class MenuFeedUnavailableError(Exception):
    pass


class GetMenuFeed:
    def __init__(
        self,
        feed: CatalogFeed,
        cache: CacheStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._feed = feed
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _cache_get(self, key: str) -> str | None:
        try:
            return self._cache.get(key)
        except Exception:
            return None

    def _cache_set(self, key: str, value: str) -> None:
        try:
            self._cache.set(key, value, ttl_seconds=self._ttl_seconds)
        except Exception:
            return

    def execute(self) -> MenuFeedResponse:
        payload = self._cache_get(MENU_FEED_CACHE_KEY)
        if payload:
            try:
                response = MenuFeedResponse.model_validate_json(payload)
            except ValidationError:
                response = None
            if response is not None:
                record_menu_feed_request("cache")
                return response

        try:
            services = self._feed.fetch_services()
        except Exception as exc:
            record_menu_feed_request("unavailable")
            raise MenuFeedUnavailableError(f"catalog feed unavailable: {exc}") from exc

        response = MenuFeedResponse(services=services, fetchedAt=datetime.now(timezone.utc))
        self._cache_set(MENU_FEED_CACHE_KEY, response.model_dump_json())
        record_menu_feed_request("source")
        return response
