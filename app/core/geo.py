"""Great-circle distance and nearest-candidate lookup."""
from dataclasses import dataclass
from math import radians, sin, cos, asin, sqrt
from typing import Iterable, Optional

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Candidate:
    """Canonical Biergarten record shared by every candidate source."""
    point: GeoPoint
    name: Optional[str] = None
    cost: Optional[str] = None
    rating: Optional[float] = None
    source: str = "static"
    osm_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Biergarten"


@dataclass(frozen=True)
class NearestResult:
    candidate: Candidate
    distance_km: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Haversine distance in kilometers between two points.
    NaN coordinates are not guarded and yield NaN.
    """
    dlat = radians(b.latitude - a.latitude)
    dlon = radians(b.longitude - a.longitude)
    h = sin(dlat / 2) ** 2 + cos(radians(a.latitude)) * cos(radians(b.latitude)) * sin(dlon / 2) ** 2
    # rounding can push h marginally above 1 for antipodal points; NaN must stay first so min keeps it
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(h, 1.0)))


def find_nearest(query: GeoPoint, candidates: Iterable[Candidate]) -> Optional[NearestResult]:
    """
    Single pass over the candidates. Ties keep the first candidate seen.
    A NaN distance never compares smaller, so such candidates are never picked.
    Returns None for an empty input.
    """
    best: Optional[Candidate] = None
    best_dist = float("inf")
    for candidate in candidates:
        d = haversine_km(query, candidate.point)
        if d < best_dist:
            best = candidate
            best_dist = d
    if best is None:
        return None
    return NearestResult(candidate=best, distance_km=best_dist)
