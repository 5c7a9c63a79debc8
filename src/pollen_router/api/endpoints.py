"""API routers."""
from __future__ import annotations

import time
from typing import List, Sequence

from fastapi import APIRouter, Depends, HTTPException

from pollen_router.api.dependencies import get_app_config, get_catalog, get_planner, get_resolver
from pollen_router.api.schemas import (
    RouteRequest,
    RouteResponse,
    SearchRequest,
    ZoneModel,
    ZonesRequest,
    ZonesResponse,
)
from pollen_router.core.config import AppConfig
from pollen_router.core.geodesy import Coordinate
from pollen_router.data.zones import PollenZone, Severity, ZoneCatalog
from pollen_router.geocode.resolver import DestinationResolver, GeocodingError
from pollen_router.render.geojson import severity_color
from pollen_router.routing.planner import RouteAvoidancePlanner, RoutePlan, route_exposure


router = APIRouter()
zones_router = APIRouter()


def _zone_to_model(zone: PollenZone) -> ZoneModel:
    return ZoneModel(
        name=zone.name,
        center=(zone.center.lat, zone.center.lon),
        radius_meters=zone.radius_meters,
        severity=zone.severity.label,
        description=zone.description,
        color=severity_color(zone.severity),
    )


def _model_to_zone(model: ZoneModel) -> PollenZone:
    try:
        severity = Severity.parse(model.severity)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PollenZone(
        center=Coordinate(*model.center),
        radius_meters=model.radius_meters,
        severity=severity,
        name=model.name,
        description=model.description,
    )


def _plan_response(plan: RoutePlan, zones: Sequence[PollenZone], cfg: AppConfig) -> RouteResponse:
    warnings: List[str] = []
    for name in route_exposure(plan, zones, cfg.planner.miles_per_degree):
        warnings.append(f"Route passes through high pollen zone '{name}'")
    return RouteResponse(
        path=[(p.lat, p.lon) for p in plan.path],
        distance_miles=plan.distance_miles,
        duration_minutes=plan.duration_minutes,
        detour_zone=plan.detour_zone,
        destination=(plan.path[-1].lat, plan.path[-1].lon),
        warnings=warnings,
    )


@zones_router.post("/zones", response_model=ZonesResponse)
def zones(req: ZonesRequest, catalog: ZoneCatalog = Depends(get_catalog)) -> ZonesResponse:
    """Pollen zones laid out around the given origin."""
    return ZonesResponse(zones=[_zone_to_model(z) for z in catalog.zones_for(Coordinate(*req.origin))])


@router.post("/route", response_model=RouteResponse)
def route(
    req: RouteRequest,
    catalog: ZoneCatalog = Depends(get_catalog),
    planner: RouteAvoidancePlanner = Depends(get_planner),
    cfg: AppConfig = Depends(get_app_config),
) -> RouteResponse:
    """Plan a walking route between two coordinates.

    Coordinates are expected as [lat, lon] format.
    """
    t0 = time.perf_counter()
    origin = Coordinate(*req.origin)
    destination = Coordinate(*req.destination)
    if req.zones is not None:
        zone_list = [_model_to_zone(z) for z in req.zones]
    else:
        zone_list = catalog.zones_for(origin)

    plan = planner.plan(origin, destination, zone_list)
    print(
        f"[ROUTE] {len(plan.path)} points, {plan.distance_miles:.2f} mi, "
        f"{plan.duration_minutes} min, detour={plan.detour_zone} "
        f"({(time.perf_counter() - t0)*1000:.1f}ms)"
    )
    return _plan_response(plan, zone_list, cfg)


@router.post("/route/search", response_model=RouteResponse)
def route_search(
    req: SearchRequest,
    catalog: ZoneCatalog = Depends(get_catalog),
    planner: RouteAvoidancePlanner = Depends(get_planner),
    resolver: DestinationResolver = Depends(get_resolver),
    cfg: AppConfig = Depends(get_app_config),
) -> RouteResponse:
    """Geocode a free-text destination, then plan a route to it."""
    try:
        destination = resolver.resolve(req.query)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except GeocodingError as exc:
        print(f"[GEOCODE] {exc}")
        raise HTTPException(status_code=502, detail="Error finding location. Please try again.") from exc
    if destination is None:
        raise HTTPException(status_code=404, detail="Location not found. Please try a different address.")

    origin = Coordinate(*req.origin)
    zone_list = catalog.zones_for(origin)
    plan = planner.plan(origin, destination, zone_list)
    print(f"[ROUTE] '{req.query}' -> {destination.lat:.5f},{destination.lon:.5f}: {plan.distance_miles:.2f} mi")
    return _plan_response(plan, zone_list, cfg)
