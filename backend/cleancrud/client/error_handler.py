"""Error Handler — turns API error envelopes into typed exceptions.

Invariants:
    - Every non-2xx response raises an ApiError subclass chosen by status code
    - A 401 clears the token store before raising (the session is gone)
    - Bodies that are not the standard envelope still raise, with code HTTP_<status>
"""

import logging

import httpx

from cleancrud.client.interceptors import ResponseHook
from cleancrud.client.token_store import TokenStore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with an error envelope."""

    def __init__(
        self, status_code: int, code: str, message: str,
        details: list[dict] | None = None,
    ):
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or []

    @property
    def fields(self) -> list[str]:
        return [d["field"] for d in self.details if d.get("field")]


class BadRequestError(ApiError):
    pass


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ConflictError(ApiError):
    pass


class ServerError(ApiError):
    pass


_BY_STATUS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
}


def error_from_response(response: httpx.Response) -> ApiError:
    code, message, details = f"HTTP_{response.status_code}", response.reason_phrase, []
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code", code)
        message = error.get("message", message)
        details = error.get("details") or []
    if response.status_code >= 500:
        cls = ServerError
    else:
        cls = _BY_STATUS.get(response.status_code, ApiError)
    return cls(response.status_code, code, message, details)


def raise_for_error(store: TokenStore) -> ResponseHook:
    """Response hook: raise on error responses, forget the session on 401."""

    async def check(response: httpx.Response) -> None:
        if response.is_success:
            return
        await response.aread()
        error = error_from_response(response)
        if isinstance(error, UnauthorizedError):
            store.clear()
        logger.info(
            f"API error {error.status_code} {error.code}",
            extra={"error_code": error.code, "status_code": error.status_code},
        )
        raise error

    return check
