"""Shared type aliases used across the suggestion modules."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

NonNegMoney = Annotated[float, Field(ge=0)]
Lat = Annotated[float, Field(ge=-90, le=90)]
Lon = Annotated[float, Field(ge=-180, le=180)]
ISO4217 = Annotated[str, Field(pattern=r"^[A-Z]{3}$")]
HttpURLStr = Annotated[
    str,
    StringConstraints(
        pattern=r"^https?://[\w\-./%?#=&:]+$",
        strip_whitespace=True,
    ),
]
