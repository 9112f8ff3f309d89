from structlog import get_logger

from app.core.errors import ErrorKind, LocationError
from app.core.geo import GeoPoint
from app.schemas.biergarten import LocateRequest

logger = get_logger()

# GeolocationPositionError codes reported by the browser
PERMISSION_DENIED = 1
POSITION_UNAVAILABLE = 2
TIMEOUT = 3

_ERROR_KINDS = {
    PERMISSION_DENIED: ErrorKind.location_permission_denied,
    POSITION_UNAVAILABLE: ErrorKind.location_unavailable,
    TIMEOUT: ErrorKind.location_timeout,
}


def error_kind_for_code(code: int) -> ErrorKind:
    return _ERROR_KINDS.get(code, ErrorKind.location_unknown)


def resolve_position(report: LocateRequest) -> GeoPoint:
    """
    Turn the browser's single-shot geolocation result into a GeoPoint.
    Raises LocationError when the browser reported a failure, or reported nothing.
    """
    if report.error is not None:
        kind = error_kind_for_code(report.error.code)
        logger.warning("Geolocation failed", kind=kind.value, code=report.error.code, detail=report.error.message)
        raise LocationError(kind, report.error.message or "")
    if report.position is None:
        logger.warning("Geolocation report carried neither position nor error")
        raise LocationError(ErrorKind.location_unknown)
    return GeoPoint(report.position.latitude, report.position.longitude)
