from __future__ import annotations

import asyncio

import httpx
import pytest

from app.services.brave_client import BraveSearchClient
from app.services.errors import RateLimitExceeded, UpstreamError
from app.services.orchestration import SearchOrchestrator
from app.services.rate_limiter import RateLimiter


def _run(coro):  # noqa: ANN001
    return asyncio.run(coro)


PIZZA_QUERY = "pizza near Central Park"


@pytest.fixture
def orchestrator(client) -> SearchOrchestrator:
    return SearchOrchestrator(client)


@pytest.fixture
def pizza_brave(brave):
    brave.respond("locations", {"locations": {"results": [{"id": "loc1"}, {"id": "loc2"}]}})
    brave.respond(
        "pois",
        {
            "results": [
                {
                    "id": "loc1",
                    "name": "Joe's Pizza",
                    "address": {"streetAddress": "7 Carmine St", "addressLocality": "New York"},
                    "rating": {"ratingValue": 4.5, "ratingCount": 1200},
                },
                {"id": "loc2", "name": "Slice Shack", "openingHours": ["Daily 11-22"]},
            ]
        },
    )
    brave.respond("descriptions", {"descriptions": {"loc1": "Great pizza", "loc2": "Cozy spot"}})
    return brave


def test_web_search_formats_results(orchestrator, brave, web_payload) -> None:
    brave.respond("web", web_payload)

    text = _run(orchestrator.web_search("pizza"))

    assert text.split("\n\n")[0] == "Title: Joe's Pizza\nDescription: Classic NY slices\nURL: https://joespizza.example"
    assert brave.calls("web")[0].url.params["count"] == "10"


def test_web_search_clamps_count(orchestrator, brave) -> None:
    _run(orchestrator.web_search("pizza", count=50))
    assert brave.calls("web")[0].url.params["count"] == "20"


def test_web_search_propagates_upstream_errors(orchestrator, brave) -> None:
    brave.respond("web", "bad gateway", status=502)
    with pytest.raises(UpstreamError, match="Web Search"):
        _run(orchestrator.web_search("pizza"))


def test_local_search_merges_pois_and_descriptions(orchestrator, pizza_brave) -> None:
    text = _run(orchestrator.local_search(PIZZA_QUERY))

    first, second = text.split("\n---\n")
    assert first.startswith("Name: Joe's Pizza\nAddress: 7 Carmine St, New York\n")
    assert "Rating: 4.5 (1200 reviews)\n" in first
    assert "Description: Great pizza\n" in first
    assert "Hours: Daily 11-22\n" in second
    assert "Description: Cozy spot\n" in second
    assert pizza_brave.calls("pois")[0].url.params.get_list("ids") == ["loc1", "loc2"]
    assert pizza_brave.calls("descriptions")[0].url.params.get_list("ids") == ["loc1", "loc2"]
    assert pizza_brave.calls("web") == []


def test_local_search_consumes_three_quota_units(orchestrator, pizza_brave, limiter) -> None:
    _run(orchestrator.local_search(PIZZA_QUERY))
    assert limiter.snapshot().month_count == 3


def test_local_search_without_locations_matches_web_search(orchestrator, brave, web_payload) -> None:
    brave.respond("locations", {"locations": {"results": []}})
    brave.respond("web", web_payload)

    local_text = _run(orchestrator.local_search(PIZZA_QUERY, count=7))
    web_text = _run(orchestrator.web_search(PIZZA_QUERY, count=7))

    assert local_text == web_text
    fallback = brave.calls("web")[0]
    assert fallback.url.params["count"] == "7"
    assert fallback.url.params["offset"] == "0"
    assert brave.calls("pois") == []


def test_local_search_falls_back_when_descriptions_fail(orchestrator, pizza_brave, web_payload) -> None:
    pizza_brave.respond("descriptions", "internal error", status=500)
    pizza_brave.respond("web", web_payload)

    local_text = _run(orchestrator.local_search(PIZZA_QUERY))
    web_text = _run(orchestrator.web_search(PIZZA_QUERY, count=5))

    assert local_text == web_text
    # both detail calls were issued and settled before falling back
    assert len(pizza_brave.calls("pois")) == 1
    assert len(pizza_brave.calls("descriptions")) == 1


def test_local_search_falls_back_when_pois_fail(orchestrator, pizza_brave, web_payload) -> None:
    pizza_brave.respond("pois", "unavailable", status=503)
    pizza_brave.respond("web", web_payload)

    text = _run(orchestrator.local_search(PIZZA_QUERY))

    assert text.startswith("Title: Joe's Pizza")


def test_local_search_propagates_resolution_errors(orchestrator, brave) -> None:
    brave.respond("locations", "forbidden", status=403)

    with pytest.raises(UpstreamError) as excinfo:
        _run(orchestrator.local_search(PIZZA_QUERY))

    assert excinfo.value.operation == "Local Initial"
    assert brave.calls("web") == []


def test_local_search_propagates_failed_fallback(orchestrator, pizza_brave) -> None:
    pizza_brave.respond("pois", "unavailable", status=503)
    pizza_brave.respond("web", "still unavailable", status=503)

    with pytest.raises(UpstreamError) as excinfo:
        _run(orchestrator.local_search(PIZZA_QUERY))

    assert excinfo.value.operation == "Web Search"


def test_local_search_under_tight_quota_surfaces_rate_limit(pizza_brave) -> None:
    limiter = RateLimiter(per_second=2, per_month=100)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(pizza_brave))
    orchestrator = SearchOrchestrator(BraveSearchClient(api_key="test-key", rate_limiter=limiter, http_client=http_client))

    # resolution and one detail call fit the window; the other detail call and the fallback do not
    with pytest.raises(RateLimitExceeded):
        _run(orchestrator.local_search(PIZZA_QUERY))

    assert limiter.snapshot().month_count == 2
    assert pizza_brave.calls("web") == []
