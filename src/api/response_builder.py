from typing import List, Sequence

from src.api.schemas import ItineraryRequest, ItineraryResponse
from src.core.normalizer import normalize_destinations
from src.core.schemas import SuggestionResult
from src.storage.itineraries import ItinerarySubmission, join_destinations


def _missing_fields(payload: ItineraryRequest) -> List[str]:
    missing = [field for field in ("name", "email") if not getattr(payload, field)]
    if not normalize_destinations(payload.destinations):
        missing.append("destinations")
    missing.extend(field for field in ("budget", "days") if not getattr(payload, field))
    return missing


def _request_to_submission(payload: ItineraryRequest) -> ItinerarySubmission:
    return ItinerarySubmission(
        name=payload.name,
        email=payload.email,
        phone=payload.phone or None,
        destinations=join_destinations(normalize_destinations(payload.destinations)),
        budget=payload.budget,
        days=payload.days,
        food_preferences=payload.food_preferences or None,
        stay_preferences=payload.stay_preferences or None,
        sightseeing=payload.sightseeing or None,
        permissions=payload.permissions or None,
        special_requests=payload.special_requests or None,
    )


def _acknowledgement(itinerary_id: int, suggestions: Sequence[SuggestionResult]) -> ItineraryResponse:
    return ItineraryResponse(id=itinerary_id, suggestions=list(suggestions))
