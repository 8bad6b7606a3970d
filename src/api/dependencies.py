from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from src.core.catalog import default_catalog
from src.core.config import ApiSettings
from src.core.suggestions import SuggestionBuilder
from src.services import create_geocoder, create_nearby_client
from src.storage.itineraries import ItineraryStore


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


@lru_cache(maxsize=1)
def get_suggestion_builder() -> SuggestionBuilder:
    settings = get_settings()
    return SuggestionBuilder(
        geocoder=create_geocoder(settings),
        poi_lookup=create_nearby_client(settings),
        catalog=default_catalog(),
    )


@lru_cache(maxsize=1)
def get_itinerary_store() -> ItineraryStore:
    return ItineraryStore(get_settings().database_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        # only close clients that were actually created
        if get_suggestion_builder.cache_info().currsize:
            await get_suggestion_builder().aclose()
