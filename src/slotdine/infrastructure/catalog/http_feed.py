from __future__ import annotations

import logging
from typing import Any

import httpx

from slotdine.application.ports.catalog import CatalogFeed
from slotdine.domain.menu.catalog import MalformedCatalogError
from slotdine.infrastructure.config import catalog_feed_url

logger = logging.getLogger(__name__)


class HttpCatalogFeed(CatalogFeed):
    """Reads the services feed published by the catalog collaborator."""

    def __init__(
        self,
        url: str | None = None,
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url or catalog_feed_url()
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def fetch_services(self) -> list[dict[str, Any]]:
        if not self._url:
            raise RuntimeError("CATALOG_FEED_URL is not set")

        with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
            response = client.get(self._url)
            response.raise_for_status()
            payload = response.json()

        if isinstance(payload, dict):
            if payload.get("success") is False:
                raise MalformedCatalogError(str(payload.get("error") or "catalog feed reported failure"))
            services = payload.get("services")
        else:
            services = payload
        if not isinstance(services, list):
            raise MalformedCatalogError("catalog feed carries no services list")

        filtered = [service for service in services if isinstance(service, dict)]
        logger.info("catalog_feed_fetched", extra={"services": len(filtered)})
        return filtered
