"""Hand-curated attraction catalog keyed by canonical destination key."""
from __future__ import annotations

import math
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Protocol

from src.core.normalizer import slugify
from src.core.schemas import Attraction, CuratedAttraction, CuratedEntry


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero for positive values."""

    return int(math.floor(value + 0.5))


class Catalog(Protocol):
    """Read-only lookup the suggestion builder depends on."""

    def get(self, key: str) -> Optional[CuratedEntry]:
        ...

    def attractions_for(self, key: str) -> List[Attraction]:
        ...


class CuratedCatalog:
    """Immutable mapping from canonical key to :class:`CuratedEntry`.

    Lookups are exact on the canonical key; unknown keys return ``None``.
    """

    def __init__(self, entries: Mapping[str, CuratedEntry]) -> None:
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> "CuratedCatalog":
        """Validate a plain nested mapping into catalog entries."""

        return cls({key: CuratedEntry.model_validate(value) for key, value in raw.items()})

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[str]:
        return list(self._entries)

    def get(self, key: str) -> Optional[CuratedEntry]:
        return self._entries.get(key)

    def attractions_for(self, key: str) -> List[Attraction]:
        """Priced attraction rows for ``key``; empty when the key is not curated."""

        entry = self.get(key)
        if entry is None:
            return []
        return price_curated_attractions(key, entry)


def price_curated_attractions(key: str, entry: CuratedEntry) -> List[Attraction]:
    """Convert an entry's attractions into priced :class:`Attraction` rows."""

    prefix = slugify(key) or "destination"
    return [
        Attraction(
            attraction_id=f"curated-{prefix}-{index}",
            title=item.title,
            price_local=item.price_local,
            currency=entry.currency,
            price_usd=round_half_up(item.price_local * entry.usd_rate),
            duration=item.duration,
            category=item.category,
            description=item.description,
            reference_url=item.booking_url,
            provenance="curated",
        )
        for index, item in enumerate(entry.attractions, start=1)
    ]


CURATED_DESTINATIONS: Dict[str, Dict[str, Any]] = {
    "singapore": {
        "currency": "SGD",
        "usd_rate": 0.74,
        "attractions": [
            {
                "title": "Gardens by the Bay (Flower Dome + Cloud Forest)",
                "price_local": 28,
                "duration": "2-3 hrs",
                "category": "Nature & Gardens",
                "description": "Two climate-controlled conservatories with the indoor waterfall and the Supertree Grove next door.",
                "booking_url": "https://www.gardensbythebay.com.sg",
            },
            {
                "title": "Singapore Zoo with Tram Ride",
                "price_local": 49,
                "duration": "Half day",
                "category": "Wildlife",
                "description": "Open-concept rainforest zoo in Mandai with orangutans, white tigers and a hop-on tram.",
                "booking_url": "https://www.mandai.com/en/singapore-zoo.html",
            },
            {
                "title": "Marina Bay Sands SkyPark Observation Deck",
                "price_local": 32,
                "duration": "1 hr",
                "category": "Viewpoint",
                "description": "Skyline views from level 56, best around sunset before the Spectra light show.",
                "booking_url": "https://www.marinabaysands.com/sands-skypark.html",
            },
            {
                "title": "Night Safari",
                "price_local": 56,
                "duration": "3 hrs",
                "category": "Wildlife",
                "description": "After-dark tram and walking trails through habitats of nocturnal animals.",
                "booking_url": "https://www.mandai.com/en/night-safari.html",
            },
            {
                "title": "Universal Studios Singapore",
                "price_local": 83,
                "duration": "Full day",
                "category": "Theme Park",
                "description": "Movie-themed rides and shows on Sentosa Island.",
                "booking_url": "https://www.rwsentosa.com/en/attractions/universal-studios-singapore",
            },
            {
                "title": "Chinatown Heritage Walk with Hawker Lunch",
                "price_local": 45,
                "duration": "3 hrs",
                "category": "Culture & Food",
                "description": "Shophouse lanes, temples and a tasting round at Maxwell Food Centre.",
                "booking_url": "https://www.chinatownheritagecentre.com.sg",
            },
        ],
    },
    "dubai": {
        "currency": "AED",
        "usd_rate": 0.27,
        "attractions": [
            {
                "title": "Burj Khalifa At the Top (Levels 124 + 125)",
                "price_local": 169,
                "duration": "1-2 hrs",
                "category": "Viewpoint",
                "description": "Observation decks of the tallest building in the world.",
                "booking_url": "https://www.burjkhalifa.ae",
            },
            {
                "title": "Desert Safari with BBQ Dinner",
                "price_local": 250,
                "duration": "6 hrs",
                "category": "Adventure",
                "description": "Dune bashing, camel rides and a camp dinner with live shows.",
                "booking_url": "https://www.visitdubai.com/en/things-to-do/desert-safari",
            },
            {
                "title": "Dubai Frame",
                "price_local": 50,
                "duration": "1 hr",
                "category": "Landmark",
                "description": "Glass-floored bridge framing old and new Dubai.",
                "booking_url": "https://www.dubaiframe.ae",
            },
            {
                "title": "Museum of the Future",
                "price_local": 149,
                "duration": "2 hrs",
                "category": "Museum",
                "description": "Immersive exhibits on space, climate and wellbeing inside the torus building.",
                "booking_url": "https://museumofthefuture.ae",
            },
            {
                "title": "Dhow Dinner Cruise at Dubai Marina",
                "price_local": 120,
                "duration": "2 hrs",
                "category": "Cruise",
                "description": "Buffet dinner aboard a traditional wooden dhow past the Marina towers.",
                "booking_url": "https://www.visitdubai.com/en/places-to-visit/dubai-marina",
            },
        ],
    },
    "bali": {
        "currency": "IDR",
        "usd_rate": 0.000064,
        "attractions": [
            {
                "title": "Sacred Monkey Forest Sanctuary",
                "price_local": 80000,
                "duration": "1-2 hrs",
                "category": "Nature & Wildlife",
                "description": "Temple complex in Ubud shared with several hundred long-tailed macaques.",
                "booking_url": "https://www.monkeyforestubud.com",
            },
            {
                "title": "Tegallalang Rice Terraces",
                "price_local": 50000,
                "duration": "2 hrs",
                "category": "Scenic",
                "description": "Stepped rice paddies north of Ubud with cafes and swings on the ridge.",
                "booking_url": "https://bali.com/tegallalang-rice-terraces.html",
            },
            {
                "title": "Uluwatu Temple and Kecak Fire Dance",
                "price_local": 150000,
                "duration": "3 hrs",
                "category": "Culture",
                "description": "Clifftop temple at sunset followed by the Kecak performance.",
                "booking_url": "https://bali.com/uluwatu-temple.html",
            },
            {
                "title": "Mount Batur Sunrise Trek",
                "price_local": 600000,
                "duration": "8 hrs",
                "category": "Adventure",
                "description": "Pre-dawn hike up an active volcano with breakfast at the rim.",
                "booking_url": "https://bali.com/mount-batur-sunrise-trekking.html",
            },
            {
                "title": "Tanah Lot Temple",
                "price_local": 75000,
                "duration": "2 hrs",
                "category": "Culture",
                "description": "Sea temple on a rock outcrop, reachable on foot at low tide.",
                "booking_url": "https://bali.com/tanah-lot-temple.html",
            },
        ],
    },
    "paris": {
        "currency": "EUR",
        "usd_rate": 1.08,
        "attractions": [
            {
                "title": "Eiffel Tower Summit Access",
                "price_local": 35,
                "duration": "2-3 hrs",
                "category": "Landmark",
                "description": "Lift tickets to the second floor and the summit.",
                "booking_url": "https://www.toureiffel.paris/en",
            },
            {
                "title": "Louvre Museum",
                "price_local": 22,
                "duration": "Half day",
                "category": "Museum",
                "description": "Timed entry to the Louvre, home of the Mona Lisa and the Winged Victory.",
                "booking_url": "https://www.louvre.fr/en",
            },
            {
                "title": "Seine River Cruise",
                "price_local": 17,
                "duration": "1 hr",
                "category": "Cruise",
                "description": "Sightseeing boat past Notre-Dame, the Louvre and the Eiffel Tower.",
                "booking_url": "https://www.bateauxparisiens.com/en",
            },
            {
                "title": "Musee d'Orsay",
                "price_local": 16,
                "duration": "2-3 hrs",
                "category": "Museum",
                "description": "Impressionist collection in a former Beaux-Arts railway station.",
                "booking_url": "https://www.musee-orsay.fr/en",
            },
            {
                "title": "Palace of Versailles Day Trip",
                "price_local": 21,
                "duration": "Full day",
                "category": "History",
                "description": "Hall of Mirrors, state apartments and the formal gardens.",
                "booking_url": "https://en.chateauversailles.fr",
            },
        ],
    },
    "tokyo": {
        "currency": "JPY",
        "usd_rate": 0.0067,
        "attractions": [
            {
                "title": "Tokyo Skytree Tembo Deck",
                "price_local": 2100,
                "duration": "1-2 hrs",
                "category": "Viewpoint",
                "description": "350 m observation deck with views to Mount Fuji on clear days.",
                "booking_url": "https://www.tokyo-skytree.jp/en",
            },
            {
                "title": "teamLab Planets",
                "price_local": 3800,
                "duration": "2 hrs",
                "category": "Art & Design",
                "description": "Walk-through digital art installations, partly knee-deep in water.",
                "booking_url": "https://www.teamlab.art/e/planets",
            },
            {
                "title": "Asakusa Food and Temple Walking Tour",
                "price_local": 6500,
                "duration": "3 hrs",
                "category": "Culture & Food",
                "description": "Senso-ji, Nakamise street snacks and old downtown alleys with a local guide.",
                "booking_url": "https://www.gotokyo.org/en/destinations/eastern-tokyo/asakusa",
            },
            {
                "title": "Shibuya Sky",
                "price_local": 2200,
                "duration": "1 hr",
                "category": "Viewpoint",
                "description": "Open-air rooftop above Shibuya Crossing.",
                "booking_url": "https://www.shibuya-scramble-square.com/sky",
            },
            {
                "title": "Ghibli Museum",
                "price_local": 1000,
                "duration": "2 hrs",
                "category": "Museum",
                "description": "Studio Ghibli museum in Mitaka with an exclusive short film.",
                "booking_url": "https://www.ghibli-museum.jp/en",
            },
        ],
    },
}


@lru_cache(maxsize=1)
def default_catalog() -> CuratedCatalog:
    """Return the process-wide curated catalog, validated once on first use."""

    return CuratedCatalog.from_mapping(CURATED_DESTINATIONS)
