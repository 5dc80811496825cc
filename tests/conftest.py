"""Shared test fixtures for reqres_client.

Provides settings, canned API payloads and helpers for building
``httpx.MockTransport``-backed clients so no test touches the network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from reqres_client.services.client import ReqResApiClient
from reqres_client.settings import Settings

BASE_URL = "https://reqres.in/api"


def make_user(user_id: int, first_name: str = "User", last_name: str | None = None) -> dict[str, Any]:
    """Build a user payload as the API publishes it."""
    return {
        "id": user_id,
        "email": f"user{user_id}@example.com",
        "first_name": first_name,
        "last_name": last_name or f"Number{user_id}",
        "avatar": f"https://reqres.in/img/faces/{user_id}-image.jpg",
    }


def make_page(
    page: int,
    user_ids: list[int],
    per_page: int = 3,
    total: int = 6,
    total_pages: int = 2,
) -> dict[str, Any]:
    """Build a paginated users payload."""
    return {
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": total_pages,
        "data": [make_user(i) for i in user_ids],
        "support": {"url": "https://reqres.in/#support-heading", "text": "ignored"},
    }


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {"base_url": BASE_URL, "timeout_seconds": 5}
    values.update(overrides)
    return Settings(**values)


def make_api_client(
    handler: Callable[[httpx.Request], httpx.Response],
    settings: Settings | None = None,
) -> ReqResApiClient:
    """Create a ReqResApiClient whose HTTP calls are served by *handler*."""
    settings = settings or make_settings()
    http_client = httpx.AsyncClient(
        base_url=settings.base_url,
        transport=httpx.MockTransport(handler),
    )
    return ReqResApiClient(settings, http_client=http_client)


Route = tuple[int, Any]


def build_response(status: int, payload: Any) -> httpx.Response:
    """Build a fresh response; str payloads are sent verbatim, anything else as JSON."""
    if isinstance(payload, str):
        return httpx.Response(status, text=payload)
    if payload is None:
        return httpx.Response(status)
    return httpx.Response(status, json=payload)


def request_key(request: httpx.Request) -> str:
    """Path relative to the API root, with query string, e.g. ``users?page=2``."""
    key = request.url.path.removeprefix("/api/")
    if request.url.query:
        key = f"{key}?{request.url.query.decode()}"
    return key


class RecordingHandler:
    """MockTransport handler that routes by relative path and records every request.

    Unknown paths answer 404. Routes can be swapped between calls to
    simulate a recovering server.
    """

    def __init__(self, routes: dict[str, Route]):
        self.routes = routes
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        key = request_key(request)
        self.calls.append(key)
        if key not in self.routes:
            return build_response(404, {})
        return build_response(*self.routes[key])

    def count(self, key: str) -> int:
        return self.calls.count(key)


@pytest.fixture
def settings() -> Settings:
    return make_settings()
