"""Plain-text renderings of search results returned to tool callers."""
from __future__ import annotations

from typing import Iterable, Mapping

from ..models.search import PoiRecord, WebResult

NOT_AVAILABLE = "N/A"
NO_DESCRIPTION = "No description available"
NO_LOCAL_RESULTS = "No local results found"
LOCAL_SEPARATOR = "\n---\n"
WEB_SEPARATOR = "\n\n"


def _display_number(value: object) -> object:
    # 4.0 renders as "4"
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_web_results(results: Iterable[WebResult]) -> str:
    return WEB_SEPARATOR.join(
        f"Title: {result.title}\nDescription: {result.description}\nURL: {result.url}"
        for result in results
    )


def _format_poi(poi: PoiRecord, descriptions: Mapping[str, str]) -> str:
    address = ", ".join(poi.address.parts()) or NOT_AVAILABLE
    rating_value = NOT_AVAILABLE
    rating_count = 0
    if poi.rating is not None:
        if poi.rating.value is not None:
            rating_value = _display_number(poi.rating.value)
        if poi.rating.count is not None:
            rating_count = _display_number(poi.rating.count)
    hours = ", ".join(poi.opening_hours) or NOT_AVAILABLE

    return (
        f"Name: {poi.name}\n"
        f"Address: {address}\n"
        f"Phone: {poi.phone or NOT_AVAILABLE}\n"
        f"Rating: {rating_value} ({rating_count} reviews)\n"
        f"Price Range: {poi.price_range or NOT_AVAILABLE}\n"
        f"Hours: {hours}\n"
        f"Description: {descriptions.get(poi.id) or NO_DESCRIPTION}\n"
    )


def format_local_results(pois: Iterable[PoiRecord], descriptions: Mapping[str, str]) -> str:
    """Render POI records with their descriptions as separated text blocks.

    The layout (field order, placeholders and the `---` separator) is part of
    the tool's output contract.
    """

    blocks = [_format_poi(poi, descriptions) for poi in pois]
    return LOCAL_SEPARATOR.join(blocks) or NO_LOCAL_RESULTS
