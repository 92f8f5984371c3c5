from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from slotdine.application.dto.requests import OrderMutationRequest
from slotdine.application.dto.responses import OrderMutationResponse, ReservationLookupResponse
from slotdine.application.ports.gateway import OrderGateway, TicketNotFoundError
from slotdine.infrastructure.config import api_base_url


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str:
    body = _json_body(response)
    if body is None:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            return str(body["error"].get("message") or f"HTTP {response.status_code}")
        if body.get("error"):
            return str(body["error"])
    return f"HTTP {response.status_code}"


class HttpOrderGateway(OrderGateway):
    """``OrderGateway`` over the slotdine HTTP API.

    Rejections (4xx) come back as ``success=False`` outcomes so the caller can
    roll back; transport errors and 5xx answers raise ``httpx.HTTPError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or api_base_url()).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> HttpOrderGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_reservation(self, ticket_id: str) -> ReservationLookupResponse:
        response = await self._client.get(f"/v1/reservations/{quote(ticket_id, safe='')}")
        if response.status_code == 404:
            raise TicketNotFoundError(_error_message(response))
        response.raise_for_status()
        return ReservationLookupResponse.model_validate(response.json())

    async def submit_order_mutation(
        self,
        ticket_id: str,
        ledger: str,
        request: OrderMutationRequest,
    ) -> OrderMutationResponse:
        response = await self._client.post(
            f"/v1/reservations/{quote(ticket_id, safe='')}/ledgers/{quote(ledger, safe='')}/mutations",
            json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        if response.status_code >= 500:
            response.raise_for_status()
        if response.is_success:
            return OrderMutationResponse.model_validate(response.json())

        body = _json_body(response)
        if isinstance(body, dict) and "success" in body:
            return OrderMutationResponse.model_validate(body)
        return OrderMutationResponse(success=False, error=_error_message(response))

    async def fetch_menu(self) -> Any:
        response = await self._client.get("/v1/menu")
        response.raise_for_status()
        return response.json()
