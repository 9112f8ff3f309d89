from typing import List, Optional

from app.core.geo import Candidate, GeoPoint
from app.schemas.biergarten import CandidateSource
from app.services.overpass import fetch_live_biergartens
from app.services.static_data import load_static_biergartens


async def get_candidates(source: CandidateSource, point: Optional[GeoPoint]) -> List[Candidate]:
    """Candidates from the chosen provider; live lookups need a point to search around."""
    if source == CandidateSource.live:
        if point is None:
            raise ValueError("A point is required for live Biergarten lookups")
        return await fetch_live_biergartens(point)
    return await load_static_biergartens()
