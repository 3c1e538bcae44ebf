"""Interceptors — httpx event hooks applied to every request/response.

Invariants:
    - Hooks never overwrite a header the caller set explicitly
    - Hooks are async (httpx.AsyncClient awaits them in registration order)
"""

import logging
import uuid
from typing import Awaitable, Callable

import httpx

from cleancrud.client.token_store import TokenStore

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

RequestHook = Callable[[httpx.Request], Awaitable[None]]
ResponseHook = Callable[[httpx.Response], Awaitable[None]]


def bearer_token(store: TokenStore) -> RequestHook:
    """Attach the stored token as Authorization: Bearer."""

    async def attach(request: httpx.Request) -> None:
        if store.token and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {store.token}"

    return attach


async def stamp_request_id(request: httpx.Request) -> None:
    if REQUEST_ID_HEADER not in request.headers:
        request.headers[REQUEST_ID_HEADER] = uuid.uuid4().hex


async def log_request(request: httpx.Request) -> None:
    logger.debug(
        f"-> {request.method} {request.url.path}",
        extra={
            "request_id": request.headers.get(REQUEST_ID_HEADER),
            "method": request.method,
            "path": request.url.path,
        },
    )


async def log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(
        f"<- {request.method} {request.url.path} {response.status_code}",
        extra={
            "request_id": request.headers.get(REQUEST_ID_HEADER),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
        },
    )
