"""User-facing text, deep links and markers for a nearest-Biergarten result."""
from html import escape
from typing import List

from app.core.geo import Candidate, GeoPoint, NearestResult
from app.schemas.biergarten import BiergartenOut, GeoPointOut, MarkerOut, WalkingLinks

USER_MARKER_POPUP = "You are here"


def walking_links(origin: GeoPoint, destination: GeoPoint) -> WalkingLinks:
    o_lat, o_lon = origin.latitude, origin.longitude
    d_lat, d_lon = destination.latitude, destination.longitude
    return WalkingLinks(
        google_maps=(
            f"https://www.google.com/maps/dir/?api=1&origin={o_lat},{o_lon}"
            f"&destination={d_lat},{d_lon}&travelmode=walking"
        ),
        openstreetmap=(
            f"https://www.openstreetmap.org/directions?engine=fossgis_osrm"
            f"&route={o_lat}%2C{o_lon}%3B{d_lat}%2C{d_lon}&transport=foot"
        ),
    )


def summary_lines(result: NearestResult) -> List[str]:
    c = result.candidate
    lines = [
        c.display_name,
        f"Latitude: {c.point.latitude}, Longitude: {c.point.longitude}",
    ]
    if c.cost is not None:
        lines.append(f"Cost: {c.cost}")
    if c.rating is not None:
        lines.append(f"Rating: {c.rating}")
    lines.append(f"Distance: {result.distance_km:.2f} km")
    return lines


def popup_html(c: Candidate) -> str:
    parts = [
        f"<strong>{escape(c.display_name)}</strong>",
        f"Lat: {c.point.latitude}, Lon: {c.point.longitude}",
    ]
    if c.cost is not None:
        parts.append(f"Cost: {escape(c.cost)}")
    if c.rating is not None:
        parts.append(f"Rating: {c.rating}")
    return "<br>".join(parts)


def user_marker(origin: GeoPoint) -> MarkerOut:
    return MarkerOut(lat=origin.latitude, lon=origin.longitude, popup=USER_MARKER_POPUP)


def markers_for(origin: GeoPoint, result: NearestResult) -> List[MarkerOut]:
    target = result.candidate.point
    return [
        user_marker(origin),
        MarkerOut(lat=target.latitude, lon=target.longitude, popup=popup_html(result.candidate)),
    ]


def biergarten_out(c: Candidate) -> BiergartenOut:
    return BiergartenOut(
        name=c.display_name,
        lat=c.point.latitude,
        lon=c.point.longitude,
        cost=c.cost,
        rating=c.rating,
        source=c.source,
        osm_id=c.osm_id,
    )


def point_out(p: GeoPoint) -> GeoPointOut:
    return GeoPointOut(lat=p.latitude, lon=p.longitude)
