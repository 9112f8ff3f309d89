from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from structlog import get_logger

from app.core.geo import GeoPoint
from app.dependencies.rate_limit import rate_limit
from app.schemas.biergarten import BiergartenOut, CandidateSource, LocateRequest, NearestResponse
from app.services.candidates import get_candidates
from app.services.finder import locate_and_find, nearest_biergarten
from app.services.presentation import biergarten_out

logger = get_logger()
router = APIRouter(prefix="/api/v1/biergarten", tags=["biergarten"])


@router.get("/nearest", response_model=NearestResponse, dependencies=[Depends(rate_limit)])
async def nearest(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    source: CandidateSource = Query(CandidateSource.static),
):
    try:
        return await nearest_biergarten(GeoPoint(lat, lon), source)
    except Exception as e:
        logger.error("Nearest lookup failed", origin=(lat, lon), source=source.value, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Nearest Biergarten lookup failed")


@router.post("/locate", response_model=NearestResponse, dependencies=[Depends(rate_limit)])
async def locate(req: LocateRequest):
    """
    Entry point for the map page: the browser posts its geolocation result
    (position or error code) and gets back the nearest Biergarten or a message.
    """
    try:
        return await locate_and_find(req)
    except Exception as e:
        logger.error("Locate request failed", source=req.source.value, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Nearest Biergarten lookup failed")


@router.get("/candidates", response_model=List[BiergartenOut], dependencies=[Depends(rate_limit)])
async def list_candidates(
    source: CandidateSource = Query(CandidateSource.static),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
):
    if source == CandidateSource.live and (lat is None or lon is None):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="lat and lon are required for live lookups")
    point = GeoPoint(lat, lon) if lat is not None and lon is not None else None
    candidates = await get_candidates(source, point)
    logger.info("Listed Biergarten candidates", source=source.value, count=len(candidates))
    return [biergarten_out(c) for c in candidates]
