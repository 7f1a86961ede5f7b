"""Web and local search workflows built on the Brave client."""
from __future__ import annotations

import asyncio
import logging

from .brave_client import BraveSearchClient
from .formatting import format_local_results, format_web_results

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Runs the two search use cases and renders their text output."""

    def __init__(self, client: BraveSearchClient) -> None:
        self._client = client

    async def web_search(self, query: str, count: int = 10, offset: int = 0) -> str:
        """Search the web; upstream and quota failures propagate to the caller."""

        results = await self._client.web_search(query, count=count, offset=offset)
        return format_web_results(results)

    async def local_search(self, query: str, count: int = 5) -> str:
        """Search for local businesses, degrading to a web search when needed.

        Location ids are resolved first. With no ids, or when either detail
        lookup fails, the result of `web_search(query, count)` is returned
        instead. Errors from the resolution call itself are not masked.
        """

        locations = await self._client.resolve_locations(query, count=count)
        location_ids = [location.id for location in locations]
        if not location_ids:
            logger.info("No local results found for %r, falling back to web search", query)
            return await self.web_search(query, count)

        pois, descriptions = await asyncio.gather(
            self._client.get_pois(location_ids),
            self._client.get_descriptions(location_ids),
            return_exceptions=True,
        )
        for outcome in (pois, descriptions):
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
        failures = [outcome for outcome in (pois, descriptions) if isinstance(outcome, Exception)]
        if failures:
            logger.warning(
                "Error fetching POI/description data for %r, falling back to web search: %s",
                query,
                "; ".join(str(failure) for failure in failures),
            )
            return await self.web_search(query, count)

        return format_local_results(pois, descriptions)
