"""Wikipedia geosearch integration.

Looks up encyclopedic points of interest around a coordinate pair and returns
them as unpriced live attractions.

Public API:
    - WikipediaNearby: Async client for the MediaWiki geosearch list
    - create_nearby_client: Factory that builds the client from ApiSettings
    - GeoSearchQuery: Pydantic schema for geosearch parameters
"""
from src.services.wikipedia.client import WikipediaNearby, create_nearby_client
from src.services.wikipedia.schemas import GeoSearchHit, GeoSearchQuery

__all__ = [
    "WikipediaNearby",
    "create_nearby_client",
    "GeoSearchHit",
    "GeoSearchQuery",
]
