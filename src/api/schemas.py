from typing import Any, List, Optional
from pydantic import Field
from src.core.schemas import CamelModel, SuggestionResult


class ItineraryRequest(CamelModel):
    """Itinerary form payload; required fields are checked by the endpoint."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    destinations: Any = Field(
        default=None,
        description="List of destination names or a single comma-separated string.",
    )
    budget: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    days: Optional[int] = Field(default=None, ge=0)
    food_preferences: Optional[str] = None
    stay_preferences: Optional[str] = None
    sightseeing: Optional[str] = None
    permissions: Optional[str] = None
    special_requests: Optional[str] = None


class ItineraryResponse(CamelModel):
    """Acknowledgement returned once the submission has been stored."""

    success: bool = True
    message: str = Field(default="Itinerary request submitted successfully")
    id: int = Field(description="Row id of the stored submission")
    suggestions: List[SuggestionResult] = Field(
        default_factory=list,
        description="One entry per requested destination, empty if enrichment failed.",
    )


class HealthResponse(CamelModel):
    status: str = "OK"
    message: str = "Server is running"
