"""Geocoding and location resolution services.

This module resolves free-form destination labels to a single best place using
the Nominatim OpenStreetMap API.

Public API:
    - NominatimGeocoder: Async client returning a ResolvedPlace or None
    - create_geocoder: Factory that builds the client from ApiSettings
    - build_map_url: Deterministic OpenStreetMap link for a coordinate pair
"""
from src.services.geocoding.geocoding import NominatimGeocoder, build_map_url, create_geocoder

__all__ = [
    "NominatimGeocoder",
    "build_map_url",
    "create_geocoder",
]
