"""Async client for the Brave Search web and local endpoints."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Union

import httpx

from ..models.search import (
    LocationRef,
    PoiRecord,
    WebResult,
    WebSearchPage,
    parse_descriptions,
    parse_pois,
)
from .errors import MalformedResponse, MissingCredentialError, UpstreamError
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.search.brave.com/res/v1"
WEB_SEARCH_PATH = "/web/search"
POIS_PATH = "/local/pois"
DESCRIPTIONS_PATH = "/local/descriptions"

# Upstream cap on results per request
MAX_RESULT_COUNT = 20
LOCAL_SEARCH_LANG = "en"

QueryParams = Union[dict[str, str], Sequence[tuple[str, str]]]


def clamp_count(count: int) -> int:
    return min(count, MAX_RESULT_COUNT)


def _id_params(ids: Iterable[Optional[str]]) -> list[tuple[str, str]]:
    return [("ids", location_id) for location_id in ids if location_id]


class BraveSearchClient:
    """Issues rate-limited requests against the Brave Search API.

    Every public call consumes exactly one unit from the shared
    `RateLimiter` before any bytes go over the wire. The caller owns
    `http_client` and closes it.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        rate_limiter: RateLimiter,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        if not api_key:
            raise MissingCredentialError()
        self._api_key = api_key
        self._rate_limiter = rate_limiter
        self._base_url = base_url.rstrip("/")
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": self._api_key,
        }

    async def _request(self, operation: str, path: str, params: QueryParams) -> dict[str, Any]:
        self._rate_limiter.check_and_consume()
        url = f"{self._base_url}{path}"
        logger.debug("Brave %s request to %s with params %s", operation, path, params)

        response = await self._client.get(url, params=params, headers=self._headers())
        if not response.is_success:
            raise UpstreamError(operation, response.status_code, response.text, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponse(operation, str(exc)) from exc
        return data if isinstance(data, dict) else {}

    async def web_search(self, query: str, count: int = 10, offset: int = 0) -> list[WebResult]:
        """Run a general web search and return results in upstream order."""

        params = {
            "q": query,
            "count": str(clamp_count(count)),
            "offset": str(offset),
        }
        data = await self._request("Web Search", WEB_SEARCH_PATH, params)
        return WebSearchPage.from_payload(data).results

    async def resolve_locations(self, query: str, count: int = 5) -> list[LocationRef]:
        """Run a location-filtered web search and return the location ids it found."""

        params = {
            "q": query,
            "search_lang": LOCAL_SEARCH_LANG,
            "result_filter": "locations",
            "count": str(clamp_count(count)),
        }
        data = await self._request("Local Initial", WEB_SEARCH_PATH, params)
        return WebSearchPage.from_payload(data).locations

    async def get_pois(self, ids: Iterable[Optional[str]]) -> list[PoiRecord]:
        data = await self._request("POI", POIS_PATH, _id_params(ids))
        return parse_pois(data)

    async def get_descriptions(self, ids: Iterable[Optional[str]]) -> dict[str, str]:
        data = await self._request("Descriptions", DESCRIPTIONS_PATH, _id_params(ids))
        return parse_descriptions(data)
