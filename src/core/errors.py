"""Exception hierarchy for the suggestion pipeline and its collaborators."""
from __future__ import annotations


class SuggestionServiceError(Exception):
    """Base class for all errors raised by this package."""


class ExternalLookupError(SuggestionServiceError):
    """A geocoding or nearby-places call failed, timed out or returned garbage.

    Raised by the service clients and converted into an ``error`` suggestion by
    the assembler, so it never aborts a whole batch.
    """


class PersistenceError(SuggestionServiceError):
    """Storing or reading an itinerary submission failed."""
