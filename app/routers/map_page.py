from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from app.core.geo import GeoPoint
from app.services.map_view import default_context, render_page

router = APIRouter(tags=["map"])


@router.get("/", response_class=HTMLResponse)
async def map_page(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    zoom: Optional[int] = Query(None, ge=3, le=19),
):
    """Map page with the "Find nearest Biergarten" button. Centered on Munich unless lat/lon are given."""
    center = GeoPoint(lat, lon) if lat is not None and lon is not None else None
    return HTMLResponse(content=render_page(default_context(center, zoom)))
