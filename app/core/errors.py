from enum import Enum


class ErrorKind(str, Enum):
    location_permission_denied = "location_permission_denied"
    location_unavailable = "location_unavailable"
    location_timeout = "location_timeout"
    location_unknown = "location_unknown"
    candidate_fetch_failed = "candidate_fetch_failed"
    no_candidates_found = "no_candidates_found"


USER_MESSAGES = {
    ErrorKind.location_permission_denied: "User denied the request for Geolocation.",
    ErrorKind.location_unavailable: "Location information is unavailable.",
    ErrorKind.location_timeout: "The request to get user location timed out.",
    ErrorKind.location_unknown: "An unknown error occurred.",
    ErrorKind.candidate_fetch_failed: "Could not load Biergarten data.",
    ErrorKind.no_candidates_found: "No Biergärten available.",
}


class LocationError(Exception):
    """Raised when the browser reports that no position could be obtained."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        super().__init__(detail or USER_MESSAGES[kind])
        self.kind = kind
        self.detail = detail

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.kind]
