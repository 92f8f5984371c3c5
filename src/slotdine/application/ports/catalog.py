from __future__ import annotations

from typing import Any, Protocol


class CatalogFeed(Protocol):
    def fetch_services(self) -> list[dict[str, Any]]: ...
