"""GeoJSON export of plans and zones for map widgets."""
from __future__ import annotations

from typing import Iterable, Optional

from pollen_router.data.zones import PollenZone, Severity
from pollen_router.routing.planner import RoutePlan


SEVERITY_COLORS = {
    Severity.LOW: "#10b981",
    Severity.MODERATE: "#f59e0b",
    Severity.HIGH: "#f97316",
    Severity.VERY_HIGH: "#ef4444",
}
FALLBACK_COLOR = "#6b7280"


def severity_color(severity: Optional[Severity]) -> str:
    return SEVERITY_COLORS.get(severity, FALLBACK_COLOR)


def plan_to_feature(plan: RoutePlan) -> dict:
    # GeoJSON positions are (lon, lat)
    return {
        "type": "Feature",
        "properties": {
            "kind": "route",
            "distance_miles": plan.distance_miles,
            "duration_minutes": plan.duration_minutes,
            "detour_zone": plan.detour_zone,
        },
        "geometry": {
            "type": "LineString",
            "coordinates": [[p.lon, p.lat] for p in plan.path],
        },
    }


def zone_to_feature(zone: PollenZone) -> dict:
    return {
        "type": "Feature",
        "properties": {
            "kind": "pollen_zone",
            "name": zone.name,
            "description": zone.description,
            "severity": zone.severity.label,
            "radius_meters": zone.radius_meters,
            "color": severity_color(zone.severity),
        },
        "geometry": {
            "type": "Point",
            "coordinates": [zone.center.lon, zone.center.lat],
        },
    }


def to_feature_collection(plan: Optional[RoutePlan] = None, zones: Iterable[PollenZone] = ()) -> dict:
    features = [zone_to_feature(z) for z in zones]
    if plan is not None:
        features.append(plan_to_feature(plan))
    return {"type": "FeatureCollection", "features": features}
