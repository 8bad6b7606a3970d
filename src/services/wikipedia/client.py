import logging
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from src.core.config import ApiSettings, DEFAULT_USER_AGENT, DEFAULT_WIKIPEDIA_URL
from src.core.errors import ExternalLookupError
from src.core.schemas import Attraction
from src.services.wikipedia.schemas import MAX_GEOSEARCH_RADIUS_M, GeoSearchHit, GeoSearchQuery

logger = logging.getLogger(__name__)


class WikipediaNearby:
    """Thin async wrapper around the MediaWiki geosearch API."""

    def __init__(
        self,
        *,
        site_url: str = DEFAULT_WIKIPEDIA_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        radius_m: int = 15000,
        timeout_s: float = 10.0,
    ) -> None:
        self.site_url = site_url.rstrip("/")
        # geosearch rejects radii above 10 km
        self.radius_m = max(10, min(radius_m, MAX_GEOSEARCH_RADIUS_M))
        self._client = httpx.AsyncClient(
            base_url=self.site_url,
            headers={"User-Agent": user_agent, "accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "WikipediaNearby":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    def page_url(self, pageid: int) -> str:
        return f"{self.site_url}/?curid={pageid}"

    async def _aget(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a GET against ``/w/api.php`` and return the parsed JSON."""

        try:
            response = await self._client.get("/w/api.php", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise ExternalLookupError(f"Wikipedia request failed: {exc}") from exc
        except ValueError as exc:
            raise ExternalLookupError("Wikipedia returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise ExternalLookupError(f"Unexpected Wikipedia payload: {type(data).__name__}")
        if "error" in data:
            error = data["error"] or {}
            raise ExternalLookupError(
                f"Wikipedia API error {error.get('code')}: {error.get('info')}"
            )
        return data

    async def search(self, lat: float, lon: float, radius_m: int, limit: int) -> List[GeoSearchHit]:
        """Return geosearch hits around the point, in the API's distance order."""

        query = GeoSearchQuery(gscoord=f"{lat}|{lon}", gsradius=radius_m, gslimit=limit)
        data = await self._aget(query.model_dump())
        rows = (data.get("query") or {}).get("geosearch") or []
        try:
            return [GeoSearchHit.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise ExternalLookupError(f"Malformed geosearch row: {exc}") from exc

    async def nearby(self, lat: float, lon: float, limit: int) -> List[Attraction]:
        """Return up to ``limit`` live attractions near the coordinates.

        Raises:
            ExternalLookupError: on transport failures or malformed rows
        """

        if limit <= 0:
            return []

        hits = await self.search(lat, lon, self.radius_m, limit)
        logger.debug("Wikipedia geosearch returned %d pages near %s,%s", len(hits), lat, lon)
        try:
            return [
                Attraction(
                    attraction_id=str(hit.pageid),
                    title=hit.title,
                    reference_url=self.page_url(hit.pageid),
                    distance_m=hit.dist,
                    provenance="live",
                )
                for hit in hits[:limit]
            ]
        except ValidationError as exc:
            raise ExternalLookupError(f"Could not build attraction from geosearch row: {exc}") from exc


def create_nearby_client(settings: ApiSettings) -> WikipediaNearby:
    """Instantiate the Wikipedia geosearch client using project settings."""

    return WikipediaNearby(
        site_url=settings.ensure("wikipedia_url"),
        user_agent=settings.user_agent,
        radius_m=settings.poi_radius_m,
        timeout_s=settings.http_timeout_s,
    )
