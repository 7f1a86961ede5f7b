"""Typed views over Brave Search API payloads.

Upstream payloads are loosely shaped; every `from_payload` constructor
tolerates missing or null fields and leaves placeholder substitution to the
formatters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True)
class WebResult:
    title: str = ""
    description: str = ""
    url: str = ""

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "WebResult":
        return cls(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            url=str(data.get("url") or ""),
        )


@dataclass(slots=True)
class LocationRef:
    id: str
    title: Optional[str] = None


@dataclass(slots=True)
class WebSearchPage:
    """Web results and location references from one `/web/search` response."""

    results: list[WebResult] = field(default_factory=list)
    locations: list[LocationRef] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "WebSearchPage":
        web = _as_dict(data.get("web"))
        results = [WebResult.from_payload(item) for item in _as_list(web.get("results")) if isinstance(item, dict)]

        locations: list[LocationRef] = []
        for item in _as_list(_as_dict(data.get("locations")).get("results")):
            if not isinstance(item, dict) or item.get("id") is None:
                continue
            locations.append(LocationRef(id=str(item["id"]), title=_as_text(item.get("title"))))
        return cls(results=results, locations=locations)


@dataclass(slots=True)
class PostalAddress:
    street: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "PostalAddress":
        return cls(
            street=_as_text(data.get("streetAddress")),
            locality=_as_text(data.get("addressLocality")),
            region=_as_text(data.get("addressRegion")),
            postal_code=_as_text(data.get("postalCode")),
        )

    def parts(self) -> list[str]:
        """Non-empty components in display order."""

        return [part for part in (self.street, self.locality, self.region, self.postal_code) if part]


@dataclass(slots=True)
class Rating:
    value: Optional[float] = None
    count: Optional[int] = None


@dataclass(slots=True)
class PoiRecord:
    id: str
    name: str = ""
    address: PostalAddress = field(default_factory=PostalAddress)
    phone: Optional[str] = None
    rating: Optional[Rating] = None
    opening_hours: list[str] = field(default_factory=list)
    price_range: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "PoiRecord":
        rating_data = data.get("rating")
        rating = None
        if isinstance(rating_data, dict):
            rating = Rating(value=rating_data.get("ratingValue"), count=rating_data.get("ratingCount"))
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            address=PostalAddress.from_payload(_as_dict(data.get("address"))),
            phone=_as_text(data.get("phone")),
            rating=rating,
            opening_hours=[str(hours) for hours in _as_list(data.get("openingHours"))],
            price_range=_as_text(data.get("priceRange")),
        )


def parse_pois(data: dict[str, Any]) -> list[PoiRecord]:
    return [PoiRecord.from_payload(item) for item in _as_list(data.get("results")) if isinstance(item, dict)]


def parse_descriptions(data: dict[str, Any]) -> dict[str, str]:
    descriptions = _as_dict(data.get("descriptions"))
    return {str(key): str(value) for key, value in descriptions.items() if value is not None}
