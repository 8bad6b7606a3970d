"""Pydantic data models for the destination suggestion pipeline.

This module contains the models passed between the pipeline stages and returned
to API callers. Outbound models serialise with camelCase aliases so the JSON
matches what the itinerary form client already renders.

Key model categories:
- Coordinates / ResolvedPlace: geocoding output for one destination
- CuratedAttraction / CuratedEntry: static, hand-authored catalog rows
- Attraction: one suggestion row, tagged with its provenance
- Suggestion*: the per-destination tagged result (ok, not_found, error)
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.types import HttpURLStr, ISO4217, Lat, Lon, NonNegMoney


class CamelModel(BaseModel):
    """Base model that accepts field names and emits camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(BaseModel):
    """Latitude/longitude pair in decimal degrees."""

    lat: Lat
    lon: Lon


class ResolvedPlace(BaseModel):
    """Best geocoding match for a destination label."""

    display_name: str = Field(description="Full place name as reported by the geocoder")
    country: Optional[str] = Field(default=None, description="Country of the match")
    coordinates: Coordinates
    map_url: HttpURLStr = Field(description="Map link built from the coordinates")


class CuratedAttraction(BaseModel):
    """Hand-authored attraction with a verified local ticket price."""

    title: str
    price_local: NonNegMoney
    duration: str
    category: str
    description: str
    booking_url: Optional[HttpURLStr] = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class CuratedEntry(BaseModel):
    """Catalog row for one destination: currency, USD rate and ordered attractions."""

    currency: ISO4217
    usd_rate: float = Field(gt=0, description="USD value of one unit of local currency")
    attractions: Tuple[CuratedAttraction, ...]

    model_config = ConfigDict(frozen=True, extra="forbid")


class Attraction(CamelModel):
    """Single suggestion row returned for a destination.

    Attributes:
        attraction_id: Stable identifier (Wikipedia page id for live rows)
        title: Display title, unique within one destination's list
        price_local: Price in ``currency`` for curated rows
        currency: ISO currency of ``price_local``
        price_usd: Whole-dollar price; ``None`` when unknown
        duration: Human readable duration
        category: Coarse category label
        description: Short blurb
        reference_url: Booking or reference link
        distance_m: Distance from the destination centre in meters
        provenance: Which source produced the row
    """

    attraction_id: str = Field(alias="pageId")
    title: str
    price_local: Optional[NonNegMoney] = None
    currency: Optional[ISO4217] = None
    price_usd: Optional[int] = Field(default=None, alias="priceUSD")
    duration: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    reference_url: Optional[HttpURLStr] = Field(default=None, alias="pageUrl")
    distance_m: Optional[float] = Field(default=None, alias="distance")
    provenance: Literal["curated", "live", "generated"]


class SuggestionOk(CamelModel):
    """Suggestions for a destination that was resolved successfully."""

    status: Literal["ok"] = "ok"
    destination_label: str
    exact_name: str
    country: Optional[str] = None
    coordinates: Coordinates
    map_url: HttpURLStr
    per_day_budget: Optional[int] = None
    currency: ISO4217 = "USD"
    uses_curated: bool = False
    attractions: List[Attraction] = Field(default_factory=list)
    notes: Optional[str] = None


class SuggestionNotFound(CamelModel):
    """The geocoder had no match for the destination label."""

    status: Literal["not_found"] = "not_found"
    destination_label: str
    message: str


class SuggestionError(CamelModel):
    """An external lookup failed while building this destination's suggestions."""

    status: Literal["error"] = "error"
    destination_label: str
    message: str


SuggestionResult = Annotated[
    Union[SuggestionOk, SuggestionNotFound, SuggestionError],
    Field(discriminator="status"),
]

__all__ = [
    "Attraction",
    "CamelModel",
    "Coordinates",
    "CuratedAttraction",
    "CuratedEntry",
    "ResolvedPlace",
    "SuggestionError",
    "SuggestionNotFound",
    "SuggestionOk",
    "SuggestionResult",
]
