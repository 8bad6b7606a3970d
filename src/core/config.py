"""Configuration helpers for service endpoints and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"
DEFAULT_WIKIPEDIA_URL = "https://en.wikipedia.org"
DEFAULT_USER_AGENT = "TravelSuggestions/1.0"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for external service endpoints and runtime knobs."""

    nominatim_url: str = DEFAULT_NOMINATIM_URL
    wikipedia_url: str = DEFAULT_WIKIPEDIA_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout_s: float = 10.0
    poi_radius_m: int = 15000
    database_path: str = "itinerary.db"
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: _split_csv(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables, keeping defaults for unset ones."""

        return cls(
            nominatim_url=os.getenv("NOMINATIM_URL", DEFAULT_NOMINATIM_URL),
            wikipedia_url=os.getenv("WIKIPEDIA_URL", DEFAULT_WIKIPEDIA_URL),
            user_agent=os.getenv("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "10")),
            poi_radius_m=int(os.getenv("POI_RADIUS_M", "15000")),
            database_path=os.getenv("DATABASE_PATH", "itinerary.db"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value
