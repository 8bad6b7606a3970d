"""Tests for service modules."""
from __future__ import annotations

import pytest
from unittest.mock import Mock, patch, AsyncMock
import httpx

from src.core.config import ApiSettings
from src.core.errors import ExternalLookupError
from src.services.geocoding import NominatimGeocoder, build_map_url, create_geocoder
from src.services.wikipedia import WikipediaNearby, create_nearby_client


def _json_response(payload):
    """Build a sync Mock mimicking an httpx.Response with a JSON body."""
    mock_response = Mock()  # httpx Response methods are sync
    mock_response.json.return_value = payload
    mock_response.raise_for_status.return_value = None
    return mock_response


@pytest.fixture
def mock_client():
    """Create a mock HTTPX client for testing."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = _json_response([])
    return mock_client


# Geocoding Tests
class TestNominatimGeocoder:
    """Test suite for the Nominatim geocoder."""

    @pytest.fixture
    def geocoder(self, mock_client):
        """Create a geocoder with a mocked HTTP client."""
        with patch('httpx.AsyncClient', return_value=mock_client):
            geocoder = NominatimGeocoder(user_agent="Tests/1.0")
            geocoder._client = mock_client
            return geocoder

    async def test_init_with_defaults(self):
        """Test geocoder initialization with default parameters."""
        with patch('httpx.AsyncClient') as mock_httpx:
            geocoder = NominatimGeocoder()
            mock_httpx.assert_called_once()
            assert geocoder.base_url == "https://nominatim.openstreetmap.org"
            headers = mock_httpx.call_args.kwargs["headers"]
            assert headers["User-Agent"] == "TravelSuggestions/1.0"

    async def test_resolve_success(self, geocoder, mock_client):
        """Test a successful single-match lookup."""
        mock_client.get.return_value = _json_response(
            [
                {
                    "lat": "1.2904753",
                    "lon": "103.8520359",
                    "display_name": "Singapore, Central, Singapore",
                    "address": {"country": "Singapore"},
                }
            ]
        )

        place = await geocoder.resolve("Singapore")

        assert place is not None
        assert place.display_name == "Singapore, Central, Singapore"
        assert place.country == "Singapore"
        assert place.coordinates.lat == pytest.approx(1.2904753)
        assert place.coordinates.lon == pytest.approx(103.8520359)
        assert place.map_url == build_map_url(1.2904753, 103.8520359)

        params = mock_client.get.call_args.kwargs["params"]
        assert params["q"] == "Singapore"
        assert params["limit"] == 1

    async def test_resolve_country_from_display_name(self, geocoder, mock_client):
        """Test the country fallback when addressdetails are missing."""
        mock_client.get.return_value = _json_response(
            [{"lat": "48.85", "lon": "2.35", "display_name": "Paris, Ile-de-France, France"}]
        )

        place = await geocoder.resolve("Paris")

        assert place.country == "France"

    async def test_resolve_no_results(self, geocoder, mock_client):
        """Test that zero matches is not an error."""
        mock_client.get.return_value = _json_response([])

        assert await geocoder.resolve("Nowhereland123") is None

    async def test_resolve_empty_label_skips_request(self, geocoder, mock_client):
        assert await geocoder.resolve("") is None
        mock_client.get.assert_not_called()

    async def test_resolve_transport_error(self, geocoder, mock_client):
        """Test that transport failures surface as ExternalLookupError."""
        mock_client.get.side_effect = httpx.ConnectTimeout("timed out")

        with pytest.raises(ExternalLookupError):
            await geocoder.resolve("Tokyo")

    async def test_resolve_http_status_error(self, geocoder, mock_client):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "503", request=Mock(), response=Mock()
        )
        mock_client.get.return_value = mock_response

        with pytest.raises(ExternalLookupError):
            await geocoder.resolve("Tokyo")

    async def test_resolve_malformed_coordinates(self, geocoder, mock_client):
        """Test that unparsable coordinates are treated as a lookup failure."""
        mock_client.get.return_value = _json_response(
            [{"lat": "north-ish", "lon": "139.69", "display_name": "Tokyo, Japan"}]
        )

        with pytest.raises(ExternalLookupError):
            await geocoder.resolve("Tokyo")

    async def test_resolve_out_of_range_coordinates(self, geocoder, mock_client):
        mock_client.get.return_value = _json_response(
            [{"lat": "123.0", "lon": "139.69", "display_name": "Tokyo, Japan"}]
        )

        with pytest.raises(ExternalLookupError):
            await geocoder.resolve("Tokyo")

    async def test_aclose(self, geocoder, mock_client):
        await geocoder.aclose()
        mock_client.aclose.assert_awaited_once()


def test_build_map_url_is_deterministic():
    assert build_map_url(1.5, 103.25) == (
        "https://www.openstreetmap.org/?mlat=1.5&mlon=103.25#map=12/1.5/103.25"
    )
    assert build_map_url(1.5, 103.25) == build_map_url(1.5, 103.25)


# Wikipedia Tests
class TestWikipediaNearby:
    """Test suite for the Wikipedia geosearch client."""

    @pytest.fixture
    def nearby_client(self, mock_client):
        """Create a Wikipedia client with a mocked HTTP client."""
        with patch('httpx.AsyncClient', return_value=mock_client):
            client = WikipediaNearby()
            client._client = mock_client
            return client

    async def test_init_clamps_radius(self):
        """Test that the radius is clamped to the geosearch maximum."""
        with patch('httpx.AsyncClient'):
            assert WikipediaNearby(radius_m=15000).radius_m == 10000
            assert WikipediaNearby(radius_m=2000).radius_m == 2000

    async def test_nearby_success(self, nearby_client, mock_client):
        """Test that geosearch rows become unpriced live attractions."""
        mock_client.get.return_value = _json_response(
            {
                "batchcomplete": "",
                "query": {
                    "geosearch": [
                        {"pageid": 101, "ns": 0, "title": "Merlion", "lat": 1.28, "lon": 103.85, "dist": 412.5, "primary": ""},
                        {"pageid": 202, "ns": 0, "title": "Esplanade", "lat": 1.29, "lon": 103.85, "dist": 880.1, "primary": ""},
                    ]
                },
            }
        )

        attractions = await nearby_client.nearby(1.29, 103.85, 3)

        assert [a.title for a in attractions] == ["Merlion", "Esplanade"]
        first = attractions[0]
        assert first.provenance == "live"
        assert first.attraction_id == "101"
        assert first.distance_m == pytest.approx(412.5)
        assert first.reference_url == "https://en.wikipedia.org/?curid=101"
        assert first.price_usd is None
        assert first.price_local is None

        params = mock_client.get.call_args.kwargs["params"]
        assert params["list"] == "geosearch"
        assert params["gscoord"] == "1.29|103.85"
        assert params["gslimit"] == 3
        assert params["gsradius"] == 10000

    async def test_nearby_with_ported_site_url(self, mock_client):
        """Test that page links keep a host:port site URL."""
        mock_client.get.return_value = _json_response(
            {"query": {"geosearch": [{"pageid": 7, "title": "Local Sight", "dist": 12.0}]}}
        )
        with patch('httpx.AsyncClient', return_value=mock_client):
            client = WikipediaNearby(site_url="http://localhost:8080")

        [attraction] = await client.nearby(1.0, 2.0, 3)

        assert attraction.title == "Local Sight"
        assert attraction.reference_url == "http://localhost:8080/?curid=7"

    async def test_nearby_invalid_page_link_is_lookup_error(self, mock_client):
        mock_client.get.return_value = _json_response(
            {"query": {"geosearch": [{"pageid": 7, "title": "Local Sight", "dist": 12.0}]}}
        )
        with patch('httpx.AsyncClient', return_value=mock_client):
            client = WikipediaNearby(site_url="http://wiki mirror")

        with pytest.raises(ExternalLookupError):
            await client.nearby(1.0, 2.0, 3)

    async def test_nearby_truncates_to_limit(self, nearby_client, mock_client):
        rows = [{"pageid": i, "title": f"Place {i}", "dist": float(i)} for i in range(1, 6)]
        mock_client.get.return_value = _json_response({"query": {"geosearch": rows}})

        attractions = await nearby_client.nearby(0.0, 0.0, 2)

        assert [a.title for a in attractions] == ["Place 1", "Place 2"]

    async def test_nearby_empty_results(self, nearby_client, mock_client):
        """Test that zero rows is a valid, empty outcome."""
        mock_client.get.return_value = _json_response({"query": {"geosearch": []}})

        assert await nearby_client.nearby(0.0, 0.0, 8) == []

    async def test_nearby_api_error_payload(self, nearby_client, mock_client):
        mock_client.get.return_value = _json_response(
            {"error": {"code": "invalid-coord", "info": "Invalid coordinate provided"}}
        )

        with pytest.raises(ExternalLookupError, match="invalid-coord"):
            await nearby_client.nearby(0.0, 0.0, 8)

    async def test_nearby_malformed_row(self, nearby_client, mock_client):
        mock_client.get.return_value = _json_response(
            {"query": {"geosearch": [{"pageid": 1, "title": "No distance"}]}}
        )

        with pytest.raises(ExternalLookupError):
            await nearby_client.nearby(0.0, 0.0, 8)

    async def test_nearby_transport_error(self, nearby_client, mock_client):
        mock_client.get.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(ExternalLookupError):
            await nearby_client.nearby(0.0, 0.0, 8)


def test_factories_use_settings():
    settings = ApiSettings(
        nominatim_url="https://geo.example.com/",
        wikipedia_url="https://de.wikipedia.org",
        user_agent="Custom/2.0",
        http_timeout_s=3.0,
        poi_radius_m=5000,
    )
    with patch('httpx.AsyncClient'):
        geocoder = create_geocoder(settings)
        nearby_client = create_nearby_client(settings)

    assert geocoder.base_url == "https://geo.example.com"
    assert nearby_client.site_url == "https://de.wikipedia.org"
    assert nearby_client.radius_m == 5000
    assert nearby_client.page_url(7) == "https://de.wikipedia.org/?curid=7"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("POI_RADIUS_M", "8000")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("SENTRY_DSN", raising=False)

    settings = ApiSettings.from_env()

    assert settings.http_timeout_s == 2.5
    assert settings.poi_radius_m == 8000
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.log_level == "DEBUG"
    assert settings.sentry_dsn is None
    assert settings.ensure("nominatim_url") == "https://nominatim.openstreetmap.org"
    with pytest.raises(RuntimeError):
        settings.ensure("sentry_dsn")
