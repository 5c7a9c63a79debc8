"""API request and response models."""
from __future__ import annotations

from typing import Annotated, List, Optional, Tuple
from pydantic import AfterValidator, BaseModel, Field

from pollen_router.core.geodesy import Coordinate


def _check_latlon(value: Tuple[float, float]) -> Tuple[float, float]:
    if not Coordinate(*value).is_valid():
        raise ValueError("coordinates must be (lat, lon) with lat in [-90, 90] and lon in [-180, 180]")
    return value


LatLon = Annotated[Tuple[float, float], AfterValidator(_check_latlon)]


class ZoneModel(BaseModel):
    name: str
    center: LatLon = Field(..., description="(lat, lon) of the zone center")
    radius_meters: float = Field(..., ge=0)
    severity: str = Field(..., description="Low, Moderate, High or Very High")
    description: str = ""
    color: Optional[str] = None


class ZonesRequest(BaseModel):
    origin: LatLon = Field(..., description="(lat, lon) of the user")


class ZonesResponse(BaseModel):
    zones: List[ZoneModel]


class RouteRequest(BaseModel):
    origin: LatLon = Field(..., description="(lat, lon) of the start point")
    destination: LatLon = Field(..., description="(lat, lon) of the end point")
    zones: Optional[List[ZoneModel]] = Field(None, description="Custom zones; default catalog when omitted")


class SearchRequest(BaseModel):
    origin: LatLon = Field(..., description="(lat, lon) of the start point")
    query: str = Field(..., min_length=1, description="Free-text destination")


class RouteResponse(BaseModel):
    path: List[Tuple[float, float]]
    distance_miles: float
    duration_minutes: int
    detour_zone: Optional[str] = None
    destination: Tuple[float, float]
    warnings: List[str] = []
