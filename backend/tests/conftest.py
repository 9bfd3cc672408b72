"""Shared test fixtures."""

import json
import os
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("COMMERCE_API_BASE_URL", "http://commerce.test/api/v1")

from marche241.core.dependencies import get_http_client  # noqa: E402
from marche241.main import app  # noqa: E402
from marche241.services.commerce_client import CommerceClient  # noqa: E402

COMMERCE_BASE_URL = "http://commerce.test/api/v1"
COMMERCE_PREFIX = "/api/v1"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeCommerceApi:
    """In-memory stand-in for the remote commerce API (httpx.MockTransport).

    Register responses with ``on(method, path, ...)``; every request is
    recorded in ``calls``. Unregistered routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.calls: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        json_body=None,
        status: int = 200,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:

            def _respond(_request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, json=json_body)

            handler = _respond

        self.routes[(method.upper(), path)] = handler

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r
            for r in self.calls
            if r.method == method.upper() and r.url.path == COMMERCE_PREFIX + path
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path.removeprefix(COMMERCE_PREFIX)
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"success": False, "message": "Route introuvable"})
        return handler(request)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=COMMERCE_BASE_URL, transport=httpx.MockTransport(self))


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def commerce_api() -> FakeCommerceApi:
    return FakeCommerceApi()


@pytest.fixture
async def commerce_client(
    commerce_api: FakeCommerceApi,
) -> AsyncGenerator[CommerceClient, None]:
    """CommerceClient wired to the fake commerce API, for service-level tests."""
    async with commerce_api.http_client() as http:
        yield CommerceClient(http)


@pytest.fixture
async def client(commerce_api: FakeCommerceApi) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app.

    Overrides get_http_client so every outbound commerce call goes to the
    fake commerce API instead of the network.
    """

    async def _fake_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
        async with commerce_api.http_client() as http:
            yield http

    app.dependency_overrides[get_http_client] = _fake_http_client
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_http_client, None)


def auth_headers(token: str = "admin-token") -> dict:
    """Return Authorization headers for admin endpoints."""
    return {"Authorization": f"Bearer {token}"}


def seed_boutique(commerce_api: FakeCommerceApi, slug: str, boutique_id: int = 7) -> None:
    """Register the remote boutique record the catalog/dashboard look up first."""
    commerce_api.on(
        "GET",
        f"/boutiques/{slug}",
        {"success": True, "boutique": {"id": boutique_id, "nom": slug, "slug": slug}},
    )
