#!/usr/bin/env python3
"""Create an interactive Leaflet map of a planned route and the pollen zones around it."""
from __future__ import annotations

import argparse
import json
from pathlib import Path

import requests

from pollen_router.render.geojson import FALLBACK_COLOR, SEVERITY_COLORS


def fetch_route(origin: tuple, destination: tuple, api_url: str = "http://127.0.0.1:8000") -> dict:
    """Fetch a route from the API. Origin/destination are (lat, lon)."""
    response = requests.post(
        f"{api_url}/route",
        json={"origin": list(origin), "destination": list(destination)},
        timeout=30,
    )
    response.raise_for_status()
    return response.json()


def fetch_zones(origin: tuple, api_url: str = "http://127.0.0.1:8000") -> list:
    response = requests.post(f"{api_url}/zones", json={"origin": list(origin)}, timeout=30)
    response.raise_for_status()
    return response.json()["zones"]


def create_html_map(route_data: dict, zones: list, output_path: Path) -> None:
    """Write a standalone HTML page with Leaflet."""
    path = route_data["path"]
    lats = [p[0] for p in path]
    lons = [p[1] for p in path]
    margin = 0.05
    bounds = [
        [min(lats) - margin, min(lons) - margin],
        [max(lats) + margin, max(lons) + margin],
    ]
    legend = "".join(
        f'<div><span style="background:{color}"></span>{sev.label}</div>'
        for sev, color in SEVERITY_COLORS.items()
    )

    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Pollen-aware route</title>
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css"/>
  <script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
  <style>
    html, body, #map {{ height: 100%; margin: 0; }}
    .legend {{ position: absolute; bottom: 16px; right: 16px; z-index: 1000;
               background: rgba(0,0,0,0.8); color: #fff; padding: 8px 12px;
               font: 12px sans-serif; border-radius: 6px; }}
    .legend span {{ display: inline-block; width: 12px; height: 12px;
                    border-radius: 50%; margin-right: 6px; }}
  </style>
</head>
<body>
<div id="map"></div>
<div class="legend"><b>Pollen Zones</b>{legend}
  <div style="margin-top:6px">{route_data['distance_miles']:.2f} mi, {route_data['duration_minutes']} min</div>
</div>
<script>
  const map = L.map('map');
  L.tileLayer('https://{{s}}.basemaps.cartocdn.com/dark_all/{{z}}/{{x}}/{{y}}{{r}}.png', {{maxZoom: 19}}).addTo(map);
  const zones = {json.dumps(zones)};
  zones.forEach(z => {{
    const color = z.color || '{FALLBACK_COLOR}';
    L.circle(z.center, {{radius: z.radius_meters, color: color, fillColor: color,
                          fillOpacity: 0.25, weight: 2, opacity: 0.7}})
      .bindPopup(`<b>${{z.name}}</b><br/>Pollen Level: ${{z.severity}}<br/>${{z.description}}`)
      .addTo(map);
  }});
  L.polyline({json.dumps(path)}, {{color: '#3b82f6', weight: 4, opacity: 0.8, dashArray: '10, 10'}}).addTo(map);
  L.marker({json.dumps(path[0])}).bindPopup('Start').addTo(map);
  L.marker({json.dumps(path[-1])}).bindPopup('Destination').addTo(map);
  map.fitBounds({json.dumps(bounds)});
</script>
</body>
</html>
"""
    output_path.write_text(html, encoding="utf-8")
    print(f"Saved map to {output_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--origin", required=True, help="lat,lon of the start point")
    parser.add_argument("--destination", required=True, help="lat,lon of the end point")
    parser.add_argument("--api-url", default="http://127.0.0.1:8000")
    parser.add_argument("--output", type=Path, default=Path("route_map.html"))
    args = parser.parse_args()

    origin = tuple(map(float, args.origin.split(',')))
    destination = tuple(map(float, args.destination.split(',')))
    print(f"Fetching route from {origin} to {destination}...")
    route_data = fetch_route(origin, destination, args.api_url)
    zones = fetch_zones(origin, args.api_url)

    print(f"Route has {len(route_data['path'])} waypoints, {route_data['distance_miles']:.2f} mi")
    if route_data.get('warnings'):
        print(f"Warnings: {route_data['warnings']}")

    create_html_map(route_data, zones, args.output)


if __name__ == "__main__":
    main()
