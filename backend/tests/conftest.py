"""
Test configuration: fixtures for credentials, a fake seller portal and the API client.

The fake portal is an httpx.MockTransport, so no test touches the network.
"""

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from api.deps import get_credentials, get_teepublic_client
from api.main import app
from integrations.base import TeePublicCredentials
from integrations.teepublic import TeePublicClient

BASE_URL = "https://seller.test"
SESSION_COOKIE = "_teepublic_session=abc123; remember_token=xyz"


class FakePortal:
    """Records every request and answers from a (method, path) → response table."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def route(self, method: str, path: str, *, status_code: int = 200, json_body=None, content: bytes | None = None):
        if content is None:
            content = b"" if json_body is None else json.dumps(json_body).encode()
        self.routes[(method, path)] = httpx.Response(
            status_code,
            content=content,
            headers={"Content-Type": "application/json"},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers=response.headers,
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def credentials():
    return TeePublicCredentials(base_url=f"{BASE_URL}/", session_cookie=SESSION_COOKIE)


@pytest.fixture
def portal():
    return FakePortal()


@pytest.fixture
def teepublic_client(portal):
    return TeePublicClient(transport=httpx.MockTransport(portal.handler))


@pytest.fixture
async def client(credentials, teepublic_client):
    """Create an async test client with dependency overrides."""
    app.dependency_overrides[get_credentials] = lambda: credentials
    app.dependency_overrides[get_teepublic_client] = lambda: teepublic_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
