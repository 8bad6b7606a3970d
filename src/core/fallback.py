"""Generic placeholder attractions for destinations without curated or live data."""
from __future__ import annotations

from typing import List, Optional

from src.core.normalizer import slugify
from src.core.schemas import Attraction


def generate_fallback_attractions(label: str, country: Optional[str] = None) -> List[Attraction]:
    """Return the three generated attractions for ``label``.

    Prices are fixed USD estimates; the function never calls out and never fails.
    """

    where = f"{label}, {country}" if country else label
    prefix = slugify(label) or "destination"
    templates = [
        (
            f"{label} City Highlights Tour",
            120,
            "Half day (4 hrs)",
            "Sightseeing",
            f"Guided loop through the best-known landmarks and neighbourhoods of {where}.",
        ),
        (
            f"{label} Street Food Crawl",
            55,
            "3 hrs",
            "Food & Drink",
            f"Tasting walk through the markets and street stalls locals favour in {where}.",
        ),
        (
            f"{label} Cultural Evening",
            80,
            "Evening (3 hrs)",
            "Culture",
            f"Traditional performance or heritage venue visit with dinner in {where}.",
        ),
    ]
    return [
        Attraction(
            attraction_id=f"generated-{prefix}-{index}",
            title=title,
            currency="USD",
            price_usd=price,
            duration=duration,
            category=category,
            description=description,
            provenance="generated",
        )
        for index, (title, price, duration, category, description) in enumerate(templates, start=1)
    ]
