from __future__ import annotations

from typing import Any

import httpx
import pytest

from app.services.brave_client import BraveSearchClient
from app.services.rate_limiter import RateLimiter


def route_of(request: httpx.Request) -> str:
    """Name the Brave endpoint a request targets."""

    path = request.url.path
    if path.endswith("/web/search"):
        if request.url.params.get("result_filter") == "locations":
            return "locations"
        return "web"
    if path.endswith("/local/pois"):
        return "pois"
    if path.endswith("/local/descriptions"):
        return "descriptions"
    return path


class FakeBrave:
    """Canned Brave API responses keyed by endpoint, recording every request."""

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, route: str, payload: Any, status: int = 200) -> None:
        self.responses[route] = (status, payload)

    def calls(self, route: str) -> list[httpx.Request]:
        return [request for request in self.requests if route_of(request) == route]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, payload = self.responses.get(route_of(request), (200, {}))
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def brave() -> FakeBrave:
    return FakeBrave()


@pytest.fixture
def limiter() -> RateLimiter:
    return RateLimiter(per_second=100, per_month=1000)


@pytest.fixture
def client(brave: FakeBrave, limiter: RateLimiter) -> BraveSearchClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(brave))
    return BraveSearchClient(api_key="test-key", rate_limiter=limiter, http_client=http_client)


@pytest.fixture
def web_payload() -> dict[str, Any]:
    return {
        "web": {
            "results": [
                {"title": "Joe's Pizza", "description": "Classic NY slices", "url": "https://joespizza.example"},
                {"title": "Central Park", "description": "Urban park in Manhattan", "url": "https://centralpark.example"},
            ]
        }
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
