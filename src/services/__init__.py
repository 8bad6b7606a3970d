"""External service integrations for destination suggestions.

This package provides async clients for the third-party services the suggestion
pipeline depends on:

- Geocoding: Destination label to place resolution via Nominatim
- Wikipedia: Nearby points of interest via the MediaWiki geosearch API

Each service module exports:
    - create_*: Factory to create the API client from settings
    - The client class itself, usable as an async context manager

Example Usage:
    >>> from src.services import create_geocoder, create_nearby_client
    >>> from src.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> geocoder = create_geocoder(settings)
    >>> place = await geocoder.resolve("Singapore")
"""

# Geocoding
from src.services.geocoding import NominatimGeocoder, build_map_url, create_geocoder

# Wikipedia nearby search
from src.services.wikipedia import (
    GeoSearchHit,
    GeoSearchQuery,
    WikipediaNearby,
    create_nearby_client,
)

__all__ = [
    # Geocoding
    "NominatimGeocoder",
    "build_map_url",
    "create_geocoder",
    # Wikipedia
    "GeoSearchHit",
    "GeoSearchQuery",
    "WikipediaNearby",
    "create_nearby_client",
]
