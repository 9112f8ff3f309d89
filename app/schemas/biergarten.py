from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, confloat

from app.core.geo import Candidate, GeoPoint


class CandidateSource(str, Enum):
    static = "static"
    live = "live"


# Input shapes. Both are normalized to app.core.geo.Candidate right after fetch.

class StaticLocation(BaseModel):
    lat: confloat(ge=-90, le=90)
    lon: confloat(ge=-180, le=180)


class StaticCandidate(BaseModel):
    """Record of the bundled biergarten_data.json file."""
    location: StaticLocation
    name: Optional[str] = None
    cost: Optional[Union[str, float]] = None
    rating: Optional[float] = None

    def to_candidate(self) -> Candidate:
        return Candidate(
            point=GeoPoint(self.location.lat, self.location.lon),
            name=self.name,
            cost=str(self.cost) if self.cost is not None else None,
            rating=self.rating,
            source=CandidateSource.static.value,
        )


class OverpassCenter(BaseModel):
    lat: float
    lon: float


class LiveCandidate(BaseModel):
    """Overpass element; ways and relations only carry a center."""
    type: str = "node"
    id: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    center: Optional[OverpassCenter] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def to_candidate(self) -> Candidate:
        if self.lat is not None and self.lon is not None:
            point = GeoPoint(self.lat, self.lon)
        elif self.center is not None:
            point = GeoPoint(self.center.lat, self.center.lon)
        else:
            raise ValueError(f"Overpass element {self.type}/{self.id} has no coordinates")
        return Candidate(
            point=point,
            name=self.tags.get("name"),
            source=CandidateSource.live.value,
            osm_id=f"{self.type}/{self.id}",
        )


# Browser geolocation report

class PositionIn(BaseModel):
    latitude: confloat(ge=-90, le=90)
    longitude: confloat(ge=-180, le=180)
    accuracy: Optional[float] = Field(None, ge=0, description="Accuracy radius in meters")


class PositionErrorIn(BaseModel):
    code: int = Field(..., description="GeolocationPositionError code (1 denied, 2 unavailable, 3 timeout)")
    message: Optional[str] = None


class LocateRequest(BaseModel):
    position: Optional[PositionIn] = None
    error: Optional[PositionErrorIn] = None
    source: CandidateSource = CandidateSource.static

    class Config:
        json_schema_extra = {
            "example": {
                "position": {"latitude": 48.1351, "longitude": 11.5820, "accuracy": 25.0},
                "source": "static",
            }
        }


# Responses

class GeoPointOut(BaseModel):
    lat: float
    lon: float


class BiergartenOut(BaseModel):
    name: str
    lat: float
    lon: float
    cost: Optional[str] = None
    rating: Optional[float] = None
    source: CandidateSource
    osm_id: Optional[str] = None


class WalkingLinks(BaseModel):
    google_maps: str
    openstreetmap: str


class MarkerOut(BaseModel):
    lat: float
    lon: float
    popup: str


class NearestResponse(BaseModel):
    found: bool
    origin: Optional[GeoPointOut] = None
    biergarten: Optional[BiergartenOut] = None
    distance_km: Optional[float] = None
    summary: List[str] = Field(default_factory=list)
    links: Optional[WalkingLinks] = None
    markers: List[MarkerOut] = Field(default_factory=list)
    error: Optional[str] = None
    message: Optional[str] = None
