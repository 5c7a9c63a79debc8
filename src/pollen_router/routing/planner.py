"""Walking route planner that detours around severe pollen zones."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point

from pollen_router.core.config import PlannerConfig
from pollen_router.core.geodesy import (
    MILES_PER_DEGREE,
    Coordinate,
    midpoint,
    path_distance_miles,
    perpendicular_offset,
    planar_distance_deg,
    point_in_circle,
    walking_minutes,
)
from pollen_router.data.zones import PollenZone


@dataclass(frozen=True)
class RoutePlan:
    path: Tuple[Coordinate, ...]
    distance_miles: float
    duration_minutes: int
    detour_zone: Optional[str] = None

    @property
    def has_detour(self) -> bool:
        return len(self.path) > 2


def danger_zones(zones: Sequence[PollenZone]) -> List[PollenZone]:
    """High and Very High zones, in catalog order."""
    return [z for z in zones if z.severity.is_avoidance_worthy]


def find_detour_zone(mid: Coordinate, zones: Sequence[PollenZone], threshold_deg: float = 0.05) -> Optional[PollenZone]:
    """Return the first danger zone whose center is within ``threshold_deg`` of ``mid``."""
    for zone in danger_zones(zones):
        if planar_distance_deg(mid, zone.center) < threshold_deg:
            return zone
    return None


def plan_route(
    origin: Coordinate,
    destination: Coordinate,
    zones: Sequence[PollenZone],
    config: Optional[PlannerConfig] = None,
) -> RoutePlan:
    """Plan a walking route from ``origin`` to ``destination``.

    At most one detour waypoint is inserted, for the first danger zone
    (catalog order) near the straight-line midpoint. Distances use the
    flat-earth degree approximation.
    """
    cfg = config or PlannerConfig()
    mid = midpoint(origin, destination)
    zone = find_detour_zone(mid, zones, cfg.detour_threshold_deg)

    if zone is not None:
        waypoint = perpendicular_offset(mid, zone.center, cfg.offset_factor)
        path: Tuple[Coordinate, ...] = (origin, waypoint, destination)
    else:
        path = (origin, destination)

    distance = path_distance_miles(path, cfg.miles_per_degree)
    return RoutePlan(
        path=path,
        distance_miles=distance,
        duration_minutes=walking_minutes(distance, cfg.walking_speed_mph),
        detour_zone=zone.name if zone is not None else None,
    )


class RouteAvoidancePlanner:
    """Stateless planner bound to a set of planner constants."""

    def __init__(self, config: Optional[PlannerConfig] = None) -> None:
        self.config = config or PlannerConfig()

    def plan(self, origin: Coordinate, destination: Coordinate, zones: Sequence[PollenZone]) -> RoutePlan:
        return plan_route(origin, destination, zones, self.config)


def route_exposure(
    plan: RoutePlan,
    zones: Sequence[PollenZone],
    miles_per_degree: float = MILES_PER_DEGREE,
    danger_only: bool = True,
) -> List[str]:
    """Names of zones whose circle the route polyline passes through.

    Works on the same flat degree plane as the planner: the polyline-to-center
    distance in degrees is scaled to miles and compared with the zone radius.
    """
    candidates = danger_zones(zones) if danger_only else list(zones)
    if len(set(plan.path)) < 2:
        here = plan.path[0]
        return [z.name for z in candidates if point_in_circle(here, z.center, z.radius_miles, miles_per_degree)]

    line = LineString([(p.lon, p.lat) for p in plan.path])
    hits = []
    for zone in candidates:
        center = Point(zone.center.lon, zone.center.lat)
        if line.distance(center) * miles_per_degree <= zone.radius_miles:
            hits.append(zone.name)
    return hits
