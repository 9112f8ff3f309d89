from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError
from structlog import get_logger

from app.config import settings
from app.core.errors import ErrorKind
from app.core.geo import Candidate, GeoPoint
from app.schemas.biergarten import LiveCandidate
from app.services.cache import cache_get_json, cache_set_json

logger = get_logger()

CACHE_PREFIX = "overpass:"


def build_query(point: GeoPoint, radius_m: Optional[int] = None, amenity: Optional[str] = None) -> str:
    radius_m = radius_m or settings.OVERPASS_RADIUS_M
    amenity = amenity or settings.OVERPASS_AMENITY
    return (
        f"[out:json][timeout:25];"
        f'nwr["amenity"="{amenity}"](around:{radius_m},{point.latitude},{point.longitude});'
        f"out center;"
    )


def _cache_key(point: GeoPoint) -> str:
    # ~10 m grid so repeated lookups from the same spot share an entry
    return (
        f"{CACHE_PREFIX}{settings.OVERPASS_AMENITY}:{settings.OVERPASS_RADIUS_M}:"
        f"{point.latitude:.4f},{point.longitude:.4f}"
    )


def parse_elements(payload: Any) -> List[Candidate]:
    elements = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(elements, list):
        raise ValueError("Overpass response has no 'elements' list")
    candidates: List[Candidate] = []
    for el in elements:
        try:
            candidates.append(LiveCandidate.model_validate(el).to_candidate())
        except (ValidationError, ValueError) as e:
            logger.warning("Skipping Overpass element", element_id=el.get("id") if isinstance(el, dict) else None, error=str(e))
    return candidates


async def _run_query(client: httpx.AsyncClient, query: str) -> Dict[str, Any]:
    resp = await client.get(
        settings.OVERPASS_API_URL,
        params={"data": query},
        headers={"User-Agent": settings.USER_AGENT},
    )
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error("Overpass error", status=e.response.status_code, text=e.response.text[:200])
        raise
    return resp.json()


async def fetch_live_biergartens(point: GeoPoint, client: Optional[httpx.AsyncClient] = None) -> List[Candidate]:
    """
    Query Overpass for biergarten features within the configured radius of point.
    Network, HTTP and payload errors are logged and yield an empty list.
    """
    cache_key = _cache_key(point)
    cached = await cache_get_json(cache_key)
    if cached is not None:
        logger.info("Overpass cache hit", cache_key=cache_key)
        try:
            return parse_elements(cached)
        except ValueError:
            logger.warning("Cached Overpass payload unusable; refetching", cache_key=cache_key)

    query = build_query(point)
    logger.info("Overpass cache miss", cache_key=cache_key, query=query)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.OVERPASS_TIMEOUT) as own_client:
                payload = await _run_query(own_client, query)
        else:
            payload = await _run_query(client, query)
        candidates = parse_elements(payload)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(
            "Error fetching Biergarten data from Overpass",
            kind=ErrorKind.candidate_fetch_failed.value,
            error=str(e),
            error_type=type(e).__name__,
        )
        return []

    await cache_set_json(cache_key, payload, settings.OVERPASS_CACHE_TTL)
    logger.info("Overpass lookup completed", count=len(candidates))
    return candidates
