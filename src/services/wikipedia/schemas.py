from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

MAX_GEOSEARCH_RADIUS_M = 10000
MAX_GEOSEARCH_LIMIT = 500


class GeoSearchQuery(BaseModel):
    """Input payload accepted by the MediaWiki ``list=geosearch`` module."""
    action: Literal["query"] = "query"
    list: Literal["geosearch"] = "geosearch"
    format: Literal["json"] = "json"
    gscoord: str = Field(description="Latitude|longitude pair (e.g., '1.29|103.85')")
    gsradius: int = Field(ge=10, le=MAX_GEOSEARCH_RADIUS_M, description="Search radius in meters")
    gslimit: int = Field(ge=1, le=MAX_GEOSEARCH_LIMIT, description="Maximum number of pages")

    model_config = ConfigDict(extra="forbid")


class GeoSearchHit(BaseModel):
    """Single page row from a geosearch response."""
    pageid: int
    title: str = Field(min_length=1)
    dist: float = Field(ge=0, description="Distance from the query point in meters")
    lat: Optional[float] = None
    lon: Optional[float] = None

    model_config = ConfigDict(extra="ignore")
