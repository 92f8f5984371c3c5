from __future__ import annotations

from fastapi import APIRouter

from slotdine.application.dto.responses import MenuFeedResponse
from slotdine.application.use_cases.get_menu import GetMenuFeed
from slotdine.infrastructure.cache.cache_store import RedisCacheStore
from slotdine.infrastructure.catalog.http_feed import HttpCatalogFeed
from slotdine.infrastructure.config import menu_cache_ttl_seconds

router = APIRouter(tags=["menu"])


def _get_menu_feed_use_case() -> GetMenuFeed:
    return GetMenuFeed(
        feed=HttpCatalogFeed(),
        cache=RedisCacheStore(),
        ttl_seconds=menu_cache_ttl_seconds(),
    )


@router.get("/v1/menu", response_model=MenuFeedResponse)
def get_menu_feed() -> MenuFeedResponse:
    return _get_menu_feed_use_case().execute()
