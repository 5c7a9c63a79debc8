from __future__ import annotations

import math

import pytest

from pollen_router.core.config import PlannerConfig
from pollen_router.core.geodesy import Coordinate, planar_distance_deg
from pollen_router.data.zones import PollenZone, Severity, build_zones
from pollen_router.routing.planner import (
    RouteAvoidancePlanner,
    find_detour_zone,
    plan_route,
    route_exposure,
)

ORIGIN = Coordinate(0.0, 0.0)
DEST = Coordinate(0.0, 0.2)


def _zone(name: str, lat: float, lon: float, severity: Severity = Severity.HIGH, radius_m: float = 1609.34) -> PollenZone:
    return PollenZone(center=Coordinate(lat, lon), radius_meters=radius_m, severity=severity, name=name)


def test_no_zones_gives_direct_path() -> None:
    plan = plan_route(ORIGIN, DEST, [])
    assert plan.path == (ORIGIN, DEST)
    assert plan.detour_zone is None
    assert not plan.has_detour
    assert plan.distance_miles == pytest.approx(0.2 * 69)
    assert plan.duration_minutes == round(plan.distance_miles / 3 * 60)


def test_mild_zones_are_ignored() -> None:
    zones = [
        _zone("low", 0.0, 0.1, Severity.LOW),
        _zone("moderate", 0.01, 0.1, Severity.MODERATE),
    ]
    assert plan_route(ORIGIN, DEST, zones).path == (ORIGIN, DEST)


def test_high_zone_near_midpoint_inserts_waypoint() -> None:
    zone = _zone("blocker", 0.0, 0.13)
    plan = plan_route(ORIGIN, DEST, [zone])

    mid_lat, mid_lon = 0.0, 0.1
    expected = Coordinate(
        mid_lat + (zone.center.lon - mid_lon) * 0.1,
        mid_lon - (zone.center.lat - mid_lat) * 0.1,
    )
    assert len(plan.path) == 3
    assert plan.path[0] == ORIGIN
    assert plan.path[2] == DEST
    assert plan.path[1].lat == pytest.approx(expected.lat)
    assert plan.path[1].lon == pytest.approx(expected.lon)
    assert plan.detour_zone == "blocker"
    assert plan.distance_miles > plan_route(ORIGIN, DEST, []).distance_miles


def test_very_high_zone_also_triggers() -> None:
    plan = plan_route(ORIGIN, DEST, [_zone("vh", 0.02, 0.1, Severity.VERY_HIGH)])
    assert plan.detour_zone == "vh"


def test_danger_zone_outside_threshold_is_ignored() -> None:
    plan = plan_route(ORIGIN, DEST, [_zone("far", 0.0, 0.16)])
    assert plan.path == (ORIGIN, DEST)


def test_first_zone_in_catalog_order_wins() -> None:
    first = _zone("first", 0.0, 0.13)
    second = _zone("second", 0.0, 0.08)
    assert plan_route(ORIGIN, DEST, [first, second]).detour_zone == "first"
    assert plan_route(ORIGIN, DEST, [second, first]).detour_zone == "second"
    assert len(plan_route(ORIGIN, DEST, [first, second]).path) == 3


def test_duration_matches_distance() -> None:
    zones = build_zones(ORIGIN)
    for dest in [Coordinate(0.05, 0.05), Coordinate(-0.1, 0.3), Coordinate(0.16, -0.12)]:
        plan = plan_route(ORIGIN, dest, zones)
        assert plan.duration_minutes == math.floor(plan.distance_miles / 3 * 60 + 0.5)


def test_degenerate_route() -> None:
    plan = plan_route(ORIGIN, ORIGIN, [])
    assert plan.path == (ORIGIN, ORIGIN)
    assert plan.distance_miles == 0.0
    assert plan.duration_minutes == 0


def test_new_york_scenario_stays_direct() -> None:
    origin = Coordinate(40.7128, -74.0060)
    dest = Coordinate(40.7580, -73.9855)
    zones = build_zones(origin)

    riverside = zones[0]
    assert riverside.name == "Riverside Park Area"
    mid = Coordinate(40.7354, -73.99575)
    assert planar_distance_deg(mid, riverside.center) == pytest.approx(0.09072, abs=1e-4)
    assert find_detour_zone(mid, zones) is None

    plan = plan_route(origin, dest, zones)
    assert plan.path == (origin, dest)
    assert plan.distance_miles == pytest.approx(math.hypot(0.0452, 0.0205) * 69)
    assert plan.distance_miles == pytest.approx(3.42458, abs=1e-4)
    assert plan.duration_minutes == 68
    assert route_exposure(plan, zones) == []


def test_route_through_riverside_detours() -> None:
    origin = Coordinate(40.7128, -74.0060)
    zones = build_zones(origin)
    # midpoint lands 0.02 deg east of Riverside Park Area's center
    dest = Coordinate(40.8728, -74.0860)
    plan = plan_route(origin, dest, zones)
    assert plan.detour_zone == "Riverside Park Area"
    assert plan.path[1].lat == pytest.approx(40.7928 + (-74.0660 - -74.0460) * 0.1)
    assert plan.path[1].lon == pytest.approx(-74.0460)


def test_planner_uses_config() -> None:
    cfg = PlannerConfig(detour_threshold_deg=0.2, walking_speed_mph=6.0)
    planner = RouteAvoidancePlanner(cfg)
    plan = planner.plan(ORIGIN, DEST, [_zone("wide", 0.0, 0.25)])
    assert plan.detour_zone == "wide"
    assert plan.duration_minutes == math.floor(plan.distance_miles / 6 * 60 + 0.5)


def test_planner_does_not_mutate_zones() -> None:
    zones = [_zone("blocker", 0.0, 0.13)]
    snapshot = list(zones)
    plan_route(ORIGIN, DEST, zones)
    assert zones == snapshot


def test_exposure_reports_zone_the_detour_cannot_clear() -> None:
    # zone beside the midpoint: the single offset waypoint stays on the line
    zone = _zone("beside", 0.01, 0.1)
    plan = plan_route(ORIGIN, DEST, [zone])
    assert plan.detour_zone == "beside"
    assert route_exposure(plan, [zone]) == ["beside"]


def test_exposure_ignores_mild_zones_by_default() -> None:
    plan = plan_route(ORIGIN, DEST, [])
    mild = _zone("mild", 0.0, 0.05, Severity.MODERATE)
    assert route_exposure(plan, [mild]) == []
    assert route_exposure(plan, [mild], danger_only=False) == ["mild"]


def test_exposure_on_degenerate_route() -> None:
    plan = plan_route(ORIGIN, ORIGIN, [])
    assert route_exposure(plan, [_zone("here", 0.0, 0.0)]) == ["here"]


def test_exposure_on_degenerate_route_outside_zone() -> None:
    plan = plan_route(ORIGIN, ORIGIN, [])
    # one mile radius is about 0.0145 degrees
    assert route_exposure(plan, [_zone("away", 0.0, 0.02)]) == []
    assert route_exposure(plan, [_zone("near", 0.0, 0.01)]) == ["near"]
