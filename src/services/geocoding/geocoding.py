"""Small async client for the public Nominatim geocoding service."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from src.core.config import ApiSettings, DEFAULT_NOMINATIM_URL, DEFAULT_USER_AGENT
from src.core.errors import ExternalLookupError
from src.core.schemas import Coordinates, ResolvedPlace


def build_map_url(lat: float, lon: float) -> str:
    """Return an OpenStreetMap link centred on the coordinates."""

    return f"https://www.openstreetmap.org/?mlat={lat}&mlon={lon}#map=12/{lat}/{lon}"


def _country_of(match: Dict[str, Any]) -> Optional[str]:
    address = match.get("address") or {}
    country = address.get("country")
    if country:
        return country
    display_name = match.get("display_name") or ""
    tail = display_name.rsplit(",", 1)[-1].strip()
    return tail or None


class NominatimGeocoder:
    """Thin async wrapper around the Nominatim ``/search`` endpoint."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_NOMINATIM_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_s: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"User-Agent": user_agent, "accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "NominatimGeocoder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Any:
        """Execute a GET request and return the parsed JSON."""

        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise ExternalLookupError(f"Nominatim request failed: {exc}") from exc
        except ValueError as exc:
            raise ExternalLookupError("Nominatim returned a non-JSON body") from exc

    async def search(self, query: str) -> Optional[Dict[str, Any]]:
        """Return the raw best match for ``query`` or ``None`` when there is none."""

        data = await self._aget(
            "/search",
            {"q": query, "format": "jsonv2", "limit": 1, "addressdetails": 1},
        )
        if not isinstance(data, list):
            raise ExternalLookupError(f"Unexpected Nominatim payload: {type(data).__name__}")
        matches: List[Dict[str, Any]] = data
        return matches[0] if matches else None

    async def resolve(self, label: str) -> Optional[ResolvedPlace]:
        """Resolve ``label`` to a place, ``None`` if Nominatim has no match.

        Raises:
            ExternalLookupError: on transport failures or malformed coordinates
        """

        if not label:
            return None

        match = await self.search(label)
        if match is None:
            return None

        try:
            lat = float(match["lat"])
            lon = float(match["lon"])
            return ResolvedPlace(
                display_name=match.get("display_name") or label,
                country=_country_of(match),
                coordinates=Coordinates(lat=lat, lon=lon),
                map_url=build_map_url(lat, lon),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ExternalLookupError(f"Malformed Nominatim match for {label!r}: {exc}") from exc


def create_geocoder(settings: ApiSettings) -> NominatimGeocoder:
    """Instantiate the geocoder using project settings."""

    return NominatimGeocoder(
        base_url=settings.ensure("nominatim_url"),
        user_agent=settings.user_agent,
        timeout_s=settings.http_timeout_s,
    )
