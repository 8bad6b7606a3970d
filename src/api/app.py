"""FastAPI surface for itinerary submissions and destination suggestions."""
from __future__ import annotations

import logging

# Load .env file before any other imports that might need environment variables
from dotenv import load_dotenv

load_dotenv()

from typing import List

import sentry_sdk
from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_itinerary_store, get_settings, get_suggestion_builder, lifespan
from src.api.response_builder import _acknowledgement, _missing_fields, _request_to_submission
from src.api.schemas import HealthResponse, ItineraryRequest, ItineraryResponse
from src.core.errors import PersistenceError
from src.storage.itineraries import ItineraryRecord

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if settings.sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        enable_logs=True,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

MISSING_FIELDS_MESSAGE = (
    "Missing required fields: name, email, destinations, budget, and days are required"
)

app = FastAPI(title="Travel Suggestions API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Mirror ``detail`` under ``error``, which the itinerary form reads."""

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple health endpoint used for readiness probes."""

    return HealthResponse()


@app.post("/api/itinerary", response_model=ItineraryResponse)
async def submit_itinerary(payload: ItineraryRequest) -> ItineraryResponse:
    """Store an itinerary request and attach destination suggestions.

    The submission is persisted first; a storage failure is the only error the
    caller sees. Suggestion building is best effort: per-destination failures
    come back as ``not_found`` or ``error`` entries, and if the builder itself
    blows up the acknowledgement carries an empty ``suggestions`` list.

    Example JSON payload:
        ```json
        {
            "name": "Avery",
            "email": "avery@example.com",
            "destinations": ["Singapore", "Bali"],
            "budget": 2000,
            "days": 5,
            "foodPreferences": "vegetarian"
        }
        ```
    """

    missing = _missing_fields(payload)
    if missing:
        logger.info(f"Rejected itinerary request, missing: {', '.join(missing)}")
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    submission = _request_to_submission(payload)
    try:
        store = get_itinerary_store()
        itinerary_id = await run_in_threadpool(store.insert, submission)
    except PersistenceError as exc:
        logger.error(f"Error inserting itinerary: {exc}")
        raise HTTPException(status_code=500, detail="Failed to save itinerary request") from exc

    logger.info(f"Stored itinerary {itinerary_id} for destinations: {submission.destinations}")

    builder = get_suggestion_builder()
    try:
        suggestions = await builder.build_suggestions(
            payload.destinations, days=payload.days, budget=payload.budget
        )
    except Exception as exc:
        logger.error(f"Suggestion building failed for itinerary {itinerary_id}: {exc}", exc_info=True)
        suggestions = []

    return _acknowledgement(itinerary_id, suggestions)


@app.get("/api/itineraries", response_model=List[ItineraryRecord])
def list_itineraries() -> List[ItineraryRecord]:
    """Return every stored itinerary request, newest first."""

    try:
        return get_itinerary_store().list_all()
    except PersistenceError as exc:
        logger.error(f"Error fetching itineraries: {exc}")
        raise HTTPException(status_code=500, detail="Failed to fetch itineraries") from exc


@app.get("/api/itinerary/{itinerary_id}", response_model=ItineraryRecord)
def get_itinerary(itinerary_id: int) -> ItineraryRecord:
    """Return a single stored itinerary request."""

    try:
        record = get_itinerary_store().get(itinerary_id)
    except PersistenceError as exc:
        logger.error(f"Error fetching itinerary {itinerary_id}: {exc}")
        raise HTTPException(status_code=500, detail="Failed to fetch itinerary") from exc

    if record is None:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return record
