import json
from dataclasses import dataclass, field
from typing import List, Optional

from app.config import settings
from app.core.errors import ErrorKind, USER_MESSAGES
from app.core.geo import GeoPoint


@dataclass
class Marker:
    point: GeoPoint
    popup: str


@dataclass
class MapContext:
    """Everything the page needs to draw the map; passed explicitly to the renderer."""
    center: GeoPoint
    zoom: int
    tile_url: str
    attribution: str
    markers: List[Marker] = field(default_factory=list)
    locate_url: str = "/api/v1/biergarten/locate"
    geolocation_timeout_ms: int = 10000
    default_source: str = "static"
    fetch_failed_message: str = USER_MESSAGES[ErrorKind.candidate_fetch_failed]


def default_context(center: Optional[GeoPoint] = None, zoom: Optional[int] = None) -> MapContext:
    return MapContext(
        center=center or GeoPoint(settings.DEFAULT_CENTER_LAT, settings.DEFAULT_CENTER_LON),
        zoom=zoom or settings.DEFAULT_ZOOM,
        tile_url=settings.TILE_URL,
        attribution=settings.TILE_ATTRIBUTION,
        geolocation_timeout_ms=settings.GEOLOCATION_TIMEOUT_MS,
        default_source=settings.DEFAULT_SOURCE,
    )


def render_page(ctx: MapContext) -> str:
    markers = json.dumps([{"lat": m.point.latitude, "lon": m.point.longitude, "popup": m.popup} for m in ctx.markers])
    static_selected = " selected" if ctx.default_source == "static" else ""
    live_selected = " selected" if ctx.default_source == "live" else ""
    return f"""
<!DOCTYPE html>
<html>
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\" />
  <title>Find the nearest Biergarten</title>
  <link rel=\"stylesheet\" href=\"https://unpkg.com/leaflet@1.9.4/dist/leaflet.css\" crossorigin=\"\" />
  <style>
    html, body {{ height: 100%; margin: 0; font-family: sans-serif; }}
    #map {{ height: 70%; }}
    #controls, #info {{ padding: 8px 12px; }}
  </style>
</head>
<body>
<div id=\"controls\">
  <button id=\"findBiergartenBtn\">Find nearest Biergarten</button>
  <select id=\"source\">
    <option value=\"static\"{static_selected}>Saved Biergärten</option>
    <option value=\"live\"{live_selected}>OpenStreetMap (live)</option>
  </select>
</div>
<div id=\"map\"></div>
<div id=\"info\"></div>
<script src=\"https://unpkg.com/leaflet@1.9.4/dist/leaflet.js\" crossorigin=\"\"></script>
<script>
  const ctx = {{
    center: [{ctx.center.latitude}, {ctx.center.longitude}],
    zoom: {ctx.zoom},
    tileUrl: {json.dumps(ctx.tile_url)},
    attribution: {json.dumps(ctx.attribution)},
    markers: {markers},
    locateUrl: {json.dumps(ctx.locate_url)},
    timeout: {ctx.geolocation_timeout_ms}
  }};
  const map = L.map('map').setView(ctx.center, ctx.zoom);
  L.tileLayer(ctx.tileUrl, {{ attribution: ctx.attribution }}).addTo(map);
  const layer = L.layerGroup().addTo(map);
  const btn = document.getElementById('findBiergartenBtn');
  const info = document.getElementById('info');
  let inFlight = false;
  const FETCH_FAILED = {json.dumps(ctx.fetch_failed_message)};

  function drawMarkers(list) {{
    layer.clearLayers();
    list.forEach(m => L.marker([m.lat, m.lon]).addTo(layer).bindPopup(m.popup).openPopup());
  }}
  drawMarkers(ctx.markers);

  function escapeHtml(s) {{
    return String(s).replace(/[&<>"']/g, c => ({{'&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'}})[c]);
  }}

  function show(res) {{
    if (res.origin) {{ map.setView([res.origin.lat, res.origin.lon], ctx.zoom); }}
    if (res.markers && res.markers.length) {{ drawMarkers(res.markers); }}
    if (!res.found) {{
      if (res.error && res.error.startsWith('location_')) {{ alert(res.message); }}
      else {{ info.textContent = res.message; }}
      return;
    }}
    info.innerHTML = res.summary.map(escapeHtml).join('<br>') +
      '<br><a href="' + res.links.google_maps + '" target="_blank">Navigate with Google Maps (Walking)</a> | ' +
      '<a href="' + res.links.openstreetmap + '" target="_blank">Navigate with OpenStreetMap (Walking)</a>';
  }}

  function failed(res) {{
    const detail = res && typeof res.detail === 'string' ? res.detail : FETCH_FAILED;
    info.textContent = detail;
  }}

  function report(body) {{
    body.source = document.getElementById('source').value;
    return fetch(ctx.locateUrl, {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify(body)
    }}).then(r => r.ok ? r.json().then(show) : r.json().catch(() => ({{}})).then(failed))
      .catch(err => {{ console.error('Lookup failed:', err); info.textContent = FETCH_FAILED; }});
  }}

  function settle() {{ inFlight = false; btn.disabled = false; }}

  btn.addEventListener('click', () => {{
    if (inFlight) {{ return; }}
    if (!navigator.geolocation) {{
      alert('Geolocation is not supported by this browser.');
      return;
    }}
    inFlight = true;
    btn.disabled = true;
    navigator.geolocation.getCurrentPosition(
      pos => report({{ position: {{ latitude: pos.coords.latitude, longitude: pos.coords.longitude, accuracy: pos.coords.accuracy }} }}).finally(settle),
      err => report({{ error: {{ code: err.code, message: err.message }} }}).finally(settle),
      {{ enableHighAccuracy: true, timeout: ctx.timeout, maximumAge: 0 }}
    );
  }});
</script>
</body>
</html>
"""
