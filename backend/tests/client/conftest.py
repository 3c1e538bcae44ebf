"""Client test fixtures — the real client against the in-process app.

Invariants:
    - Requests travel through the full interceptor chain (ASGITransport)
    - Depends on the root `client` fixture for the DB override
"""

import httpx
import pytest

from cleancrud.client.api_client import ApiClient
from cleancrud.client.services import AuthService, OrderService, UserService
from cleancrud.main import app


@pytest.fixture
async def api(client):
    async with ApiClient("http://test", transport=httpx.ASGITransport(app=app)) as api:
        yield api


@pytest.fixture
def auth(api):
    return AuthService(api)


@pytest.fixture
def user_service(api):
    return UserService(api)


@pytest.fixture
def order_service(api):
    return OrderService(api)


@pytest.fixture
def mock_api():
    """Factory: ApiClient over httpx.MockTransport; records every request."""
    seen: list[httpx.Request] = []

    def _make(respond) -> ApiClient:
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return respond(request)

        return ApiClient("http://test", transport=httpx.MockTransport(handler))

    _make.seen = seen
    return _make
