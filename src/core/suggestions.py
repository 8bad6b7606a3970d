"""Per-destination suggestion assembly.

``SuggestionBuilder.build_suggestions`` fans out one task per destination label,
resolves it, merges curated, live and generated attractions, and returns one
tagged result per label in input order. Lookup failures are contained to the
destination they happened on.
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Callable, Iterable, List, Optional, Protocol, Set

from src.core.catalog import Catalog, default_catalog, round_half_up
from src.core.errors import ExternalLookupError
from src.core.fallback import generate_fallback_attractions
from src.core.normalizer import canonical_key, normalize_destinations
from src.core.schemas import (
    Attraction,
    ResolvedPlace,
    SuggestionError,
    SuggestionNotFound,
    SuggestionOk,
    SuggestionResult,
)

logger = logging.getLogger(__name__)

SUPPLEMENTAL_LIVE_LIMIT = 3
LIVE_LIMIT = 8
NOT_FOUND_MESSAGE = "We could not find this destination. Please check the spelling or try a nearby city."
ERROR_MESSAGE = "We could not fetch suggestions for this destination right now. Please try again later."
NO_ATTRACTIONS_NOTE = "No notable attractions found within 15 km"

FallbackFactory = Callable[[str, Optional[str]], List[Attraction]]


class Geocoder(Protocol):
    async def resolve(self, label: str) -> Optional[ResolvedPlace]:
        ...


class PoiLookup(Protocol):
    async def nearby(self, lat: float, lon: float, limit: int) -> List[Attraction]:
        ...


def per_day_budget(budget: Optional[float], days: Optional[int]) -> Optional[int]:
    """Whole-unit budget per day, or ``None`` without a positive day count.

    Non-finite budgets also yield ``None``.
    """

    if budget is None or not days or days <= 0:
        return None
    daily = budget / days
    if not math.isfinite(daily):
        return None
    return round_half_up(daily)


def merge_unique(*groups: Iterable[Attraction]) -> List[Attraction]:
    """Concatenate attraction groups, keeping the first row for each exact title."""

    seen: Set[str] = set()
    merged: List[Attraction] = []
    for group in groups:
        for attraction in group:
            if attraction.title in seen:
                continue
            seen.add(attraction.title)
            merged.append(attraction)
    return merged


class SuggestionBuilder:
    """Builds destination suggestions from a geocoder, a POI lookup and a catalog.

    Attributes:
        geocoder: Resolves labels to places; ``None`` means not found
        poi_lookup: Returns live attractions around coordinates
        catalog: Curated entries keyed by canonical key
        fallback: Generates placeholder attractions when nothing else is available
    """

    def __init__(
        self,
        geocoder: Geocoder,
        poi_lookup: PoiLookup,
        catalog: Optional[Catalog] = None,
        *,
        fallback: FallbackFactory = generate_fallback_attractions,
    ) -> None:
        self.geocoder = geocoder
        self.poi_lookup = poi_lookup
        self.catalog = catalog if catalog is not None else default_catalog()
        self.fallback = fallback

    async def aclose(self) -> None:
        """Close the underlying service clients when they hold connections."""

        for service in (self.geocoder, self.poi_lookup):
            closer = getattr(service, "aclose", None)
            if closer is not None:
                await closer()

    async def build_suggestions(
        self,
        destinations: Any,
        days: Optional[int] = None,
        budget: Optional[float] = None,
    ) -> List[SuggestionResult]:
        """Return one suggestion result per normalized destination, in input order.

        Never raises for not-found, empty, or failed lookups; those come back as
        ``not_found`` and ``error`` results.
        """

        labels = normalize_destinations(destinations)
        if not labels:
            return []

        daily = per_day_budget(budget, days)
        results = await asyncio.gather(*(self._suggest_isolated(label, daily) for label in labels))
        return list(results)

    async def _suggest_isolated(self, label: str, daily: Optional[int]) -> SuggestionResult:
        try:
            return await self.suggest_destination(label, daily)
        except ExternalLookupError as exc:
            logger.warning("Lookup failed for destination %r: %s", label, exc)
        except Exception:
            logger.exception("Unexpected error while building suggestions for %r", label)
        return SuggestionError(destination_label=label, message=ERROR_MESSAGE)

    async def suggest_destination(self, label: str, daily: Optional[int] = None) -> SuggestionResult:
        """Build the suggestion result for a single label.

        Raises:
            ExternalLookupError: when the geocoder or the POI lookup fails
        """

        place = await self.geocoder.resolve(label)
        if place is None:
            logger.info("No geocoding match for %r", label)
            return SuggestionNotFound(destination_label=label, message=NOT_FOUND_MESSAGE)

        key = canonical_key(label)
        entry = self.catalog.get(key)
        lat, lon = place.coordinates.lat, place.coordinates.lon

        if entry is not None:
            curated = self.catalog.attractions_for(key)
            live = await self.poi_lookup.nearby(lat, lon, SUPPLEMENTAL_LIVE_LIMIT)
            supplemental = merge_unique(curated, live)[len(curated):]
            attractions = merge_unique(curated, supplemental or self.fallback(label, place.country))
            currency = entry.currency
        else:
            live = await self.poi_lookup.nearby(lat, lon, LIVE_LIMIT)
            attractions = merge_unique(live or self.fallback(label, place.country))
            currency = "USD"

        logger.debug(
            "Built %d attractions for %r (curated=%s)", len(attractions), label, entry is not None
        )
        return SuggestionOk(
            destination_label=label,
            exact_name=place.display_name,
            country=place.country,
            coordinates=place.coordinates,
            map_url=place.map_url,
            per_day_budget=daily,
            currency=currency,
            uses_curated=entry is not None,
            attractions=attractions,
            notes=None if attractions else NO_ATTRACTIONS_NOTE,
        )
