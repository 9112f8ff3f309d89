from structlog import get_logger

from app.core.errors import ErrorKind, LocationError, USER_MESSAGES
from app.core.geo import GeoPoint, find_nearest
from app.schemas.biergarten import CandidateSource, LocateRequest, NearestResponse
from app.services.candidates import get_candidates
from app.services.locator import resolve_position
from app.services.presentation import (
    biergarten_out,
    markers_for,
    point_out,
    summary_lines,
    user_marker,
    walking_links,
)

logger = get_logger()


async def nearest_biergarten(point: GeoPoint, source: CandidateSource) -> NearestResponse:
    """Fetch candidates around point, then pick the closest one."""
    candidates = await get_candidates(source, point)
    result = find_nearest(point, candidates)
    if result is None:
        logger.info("No Biergarten candidates", source=source.value, origin=(point.latitude, point.longitude))
        return NearestResponse(
            found=False,
            origin=point_out(point),
            error=ErrorKind.no_candidates_found.value,
            message=USER_MESSAGES[ErrorKind.no_candidates_found],
            markers=[user_marker(point)],
        )

    logger.info(
        "Nearest Biergarten found",
        source=source.value,
        origin=(point.latitude, point.longitude),
        name=result.candidate.display_name,
        distance_km=round(result.distance_km, 3),
        candidate_count=len(candidates),
    )
    return NearestResponse(
        found=True,
        origin=point_out(point),
        biergarten=biergarten_out(result.candidate),
        distance_km=result.distance_km,
        summary=summary_lines(result),
        links=walking_links(point, result.candidate.point),
        markers=markers_for(point, result),
    )


async def locate_and_find(report: LocateRequest) -> NearestResponse:
    """Location first; the nearest lookup only runs once a position is known."""
    try:
        point = resolve_position(report)
    except LocationError as e:
        return NearestResponse(found=False, error=e.kind.value, message=e.user_message)
    return await nearest_biergarten(point, report.source)
