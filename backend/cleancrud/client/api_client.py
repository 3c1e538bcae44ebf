"""API Client — one httpx.AsyncClient with the interceptor chain installed.

Invariants:
    - Request hooks run in order: request id, bearer token, logging
    - Response hooks run in order: logging, error handler (raises on non-2xx)
    - Bodies are pydantic models dumped in JSON mode (Decimal → str, UUID → str)
    - 204 responses return None

Design Decisions:
    - transport is injectable: httpx.ASGITransport(app) runs the API in-process
    - The token store is owned here and shared with services and guards
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from cleancrud.client.error_handler import raise_for_error
from cleancrud.client.interceptors import (
    bearer_token, log_request, log_response, stamp_request_id,
)
from cleancrud.client.token_store import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiClient:
    """Thin async HTTP client for the Clean Crud API."""

    def __init__(
        self,
        base_url: str,
        store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.store = store or TokenStore()
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            event_hooks={
                "request": [stamp_request_id, bearer_token(self.store), log_request],
                "response": [log_response, raise_for_error(self.store)],
            },
        )

    async def request(
        self,
        method: str,
        path: str,
        body: BaseModel | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        json = body.model_dump(mode="json") if body is not None else None
        response = await self._http.request(method, path, json=json, params=params)
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: BaseModel | None = None) -> Any:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: BaseModel | None = None) -> Any:
        return await self.request("PUT", path, body)

    async def patch(self, path: str, body: BaseModel | None = None) -> Any:
        return await self.request("PATCH", path, body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
