from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException, status

from app.core.geo import Candidate, GeoPoint, NearestResult
from app.dependencies.rate_limit import rate_limit
from app.main import app
from app.services.map_view import MapContext, Marker, render_page
from app.services.presentation import summary_lines, walking_links


@pytest.mark.asyncio
@patch("app.services.finder.get_candidates", new_callable=AsyncMock)
async def test_nearest_selects_closest_candidate(mock_get_candidates, client, candidates):
    mock_get_candidates.return_value = candidates
    response = await client.get("/api/v1/biergarten/nearest?lat=48.1351&lon=11.5820")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["found"] is True
    assert body["biergarten"]["name"] == "A"
    assert body["biergarten"]["source"] == "static"
    assert body["origin"] == {"lat": 48.1351, "lon": 11.582}
    assert body["summary"][0] == "A"
    assert body["summary"][-1] == f"Distance: {body['distance_km']:.2f} km"
    assert body["markers"][0]["popup"] == "You are here"
    assert "<strong>A</strong>" in body["markers"][1]["popup"]
    assert body["links"]["google_maps"] == (
        "https://www.google.com/maps/dir/?api=1&origin=48.1351,11.582&destination=48.14,11.58&travelmode=walking"
    )
    mock_get_candidates.assert_called_once()


@pytest.mark.asyncio
async def test_nearest_against_bundled_data(client, static_data):
    response = await client.get("/api/v1/biergarten/nearest?lat=48.1351&lon=11.5763")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["biergarten"]["name"] == "Biergarten am Viktualienmarkt"
    assert body["distance_km"] == pytest.approx(0.0, abs=1e-9)


@pytest.mark.asyncio
@patch("app.services.finder.get_candidates", new_callable=AsyncMock)
async def test_nearest_with_no_candidates_returns_message(mock_get_candidates, client):
    mock_get_candidates.return_value = []
    response = await client.get("/api/v1/biergarten/nearest?lat=48.1351&lon=11.5820&source=live")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["found"] is False
    assert body["error"] == "no_candidates_found"
    assert body["message"] == "No Biergärten available."
    assert body["origin"] == {"lat": 48.1351, "lon": 11.582}
    assert body["markers"] == [{"lat": 48.1351, "lon": 11.582, "popup": "You are here"}]


@pytest.mark.asyncio
@patch("app.services.overpass.cache_get_json", new_callable=AsyncMock)
@patch("app.services.overpass._run_query", new_callable=AsyncMock)
async def test_live_fetch_failure_shows_no_candidates_message(mock_run_query, mock_cache_get, client):
    mock_cache_get.return_value = None
    mock_run_query.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    response = await client.get("/api/v1/biergarten/nearest?lat=48.1351&lon=11.5820&source=live")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["error"] == "no_candidates_found"


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [
    "lat=91&lon=11.58",
    "lat=48.1&lon=-181",
    "lat=48.1",
    "lat=48.1&lon=11.5&source=bogus",
])
async def test_nearest_rejects_invalid_query(client, query):
    response = await client.get(f"/api/v1/biergarten/nearest?{query}")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch("app.services.finder.get_candidates", new_callable=AsyncMock)
async def test_nearest_unexpected_error_is_500(mock_get_candidates, client):
    mock_get_candidates.side_effect = RuntimeError("boom")
    response = await client.get("/api/v1/biergarten/nearest?lat=48.1351&lon=11.5820")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Nearest Biergarten lookup failed"


@pytest.mark.asyncio
@patch("app.services.finder.get_candidates", new_callable=AsyncMock)
async def test_locate_with_position(mock_get_candidates, client, candidates):
    mock_get_candidates.return_value = candidates
    response = await client.post(
        "/api/v1/biergarten/locate",
        json={"position": {"latitude": 48.1351, "longitude": 11.5820, "accuracy": 20}, "source": "live"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["biergarten"]["name"] == "A"
    source, point = mock_get_candidates.call_args.args
    assert source.value == "live"
    assert point == GeoPoint(48.1351, 11.5820)


@pytest.mark.asyncio
@pytest.mark.parametrize("code,kind,message", [
    (1, "location_permission_denied", "User denied the request for Geolocation."),
    (2, "location_unavailable", "Location information is unavailable."),
    (3, "location_timeout", "The request to get user location timed out."),
    (9, "location_unknown", "An unknown error occurred."),
])
@patch("app.services.finder.get_candidates", new_callable=AsyncMock)
async def test_locate_error_never_fetches_candidates(mock_get_candidates, client, code, kind, message):
    response = await client.post("/api/v1/biergarten/locate", json={"error": {"code": code}})
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["found"] is False
    assert body["error"] == kind
    assert body["message"] == message
    mock_get_candidates.assert_not_called()


@pytest.mark.asyncio
async def test_candidates_lists_static_data(client, static_data):
    response = await client.get("/api/v1/biergarten/candidates")
    assert response.status_code == status.HTTP_200_OK
    names = [c["name"] for c in response.json()]
    assert len(names) == 10
    assert "Augustiner-Keller" in names


@pytest.mark.asyncio
async def test_candidates_live_requires_coordinates(client):
    response = await client.get("/api/v1/biergarten/candidates?source=live")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_map_page_renders(client):
    response = await client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "findBiergartenBtn" in html
    assert "center: [48.1351, 11.582]" in html
    assert "timeout: 10000" in html
    assert "/api/v1/biergarten/locate" in html


@pytest.mark.asyncio
async def test_map_page_custom_center(client):
    response = await client.get("/?lat=52.52&lon=13.405&zoom=12")
    assert "center: [52.52, 13.405]" in response.text
    assert "zoom: 12," in response.text


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.json() == {"status": "ok"}


def test_openstreetmap_link_encodes_route():
    links = walking_links(GeoPoint(48.1351, 11.582), GeoPoint(48.14, 11.58))
    assert links.openstreetmap == (
        "https://www.openstreetmap.org/directions?engine=fossgis_osrm"
        "&route=48.1351%2C11.582%3B48.14%2C11.58&transport=foot"
    )


def test_summary_omits_missing_cost_and_rating():
    result = NearestResult(candidate=Candidate(point=GeoPoint(48.14, 11.58), name="Live one", source="live"), distance_km=0.5)
    assert summary_lines(result) == [
        "Live one",
        "Latitude: 48.14, Longitude: 11.58",
        "Distance: 0.50 km",
    ]


def test_render_page_embeds_context_markers():
    ctx = MapContext(
        center=GeoPoint(48.0, 11.0),
        zoom=15,
        tile_url="https://tiles.example/{z}/{x}/{y}.png",
        attribution="test tiles",
        markers=[Marker(point=GeoPoint(48.01, 11.01), popup="<strong>Here</strong>")],
        default_source="live",
    )
    html = render_page(ctx)
    assert '"popup": "<strong>Here</strong>"' in html
    assert '"https://tiles.example/{z}/{x}/{y}.png"' in html
    assert '<option value="live" selected>' in html


@pytest.mark.asyncio
@patch("app.routers.health.get_redis")
async def test_readiness_reports_checks(mock_get_redis, client, static_data):
    mock_get_redis.return_value.ping = AsyncMock(return_value=True)
    response = await client.get("/api/v1/health/ready")
    assert response.json() == {"status": "ok", "checks": {"redis": "ok", "static_data": "ok"}}


@pytest.mark.asyncio
@patch("app.routers.health.get_redis")
async def test_readiness_degraded_when_redis_down(mock_get_redis, client, static_data):
    mock_get_redis.return_value.ping = AsyncMock(side_effect=ConnectionError("refused"))
    body = (await client.get("/api/v1/health/ready")).json()
    assert body["status"] == "degraded"
    assert body["checks"]["redis"].startswith("fail")


@pytest.mark.asyncio
@patch("app.routers.health.clear_prefix", new_callable=AsyncMock)
async def test_cache_clear_drops_overpass_keys(mock_clear_prefix, client):
    mock_clear_prefix.return_value = 3
    response = await client.post("/api/v1/cache/clear")
    assert response.json() == {"status": "ok", "cleared_keys": 3}
    mock_clear_prefix.assert_called_once_with("overpass:")


@pytest.mark.asyncio
async def test_map_page_reports_failed_responses(client):
    html = (await client.get("/")).text
    assert "r.ok ? r.json().then(show)" in html
    assert "res.detail" in html
    assert 'const FETCH_FAILED = "Could not load Biergarten data.";' in html


@pytest.mark.asyncio
async def test_map_page_centers_on_origin_before_checking_result(client):
    html = (await client.get("/")).text
    show = html[html.index("function show(res)"):html.index("function failed(res)")]
    assert show.index("map.setView([res.origin.lat") < show.index("if (!res.found)")
    assert show.index("drawMarkers(res.markers)") < show.index("if (!res.found)")


@pytest.mark.asyncio
async def test_rate_limited_locate_returns_detail_for_page(client):
    async def reject():
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="Too Many Requests")

    app.dependency_overrides[rate_limit] = reject
    response = await client.post("/api/v1/biergarten/locate", json={"error": {"code": 1}})
    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {"detail": "Too Many Requests"}
