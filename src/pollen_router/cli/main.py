"""Typer CLI for zone inspection and route planning."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from pollen_router.api.dependencies import get_catalog, get_planner, get_resolver
from pollen_router.core.config import get_config
from pollen_router.core.geodesy import Coordinate
from pollen_router.geocode.resolver import GeocodingError
from pollen_router.render.geojson import severity_color, to_feature_collection
from pollen_router.routing.planner import RoutePlan, route_exposure

app = typer.Typer(help="Pollen-aware walking routes")

# lat,lon arguments south of the equator start with "-"
_COORD_ARGS = {"ignore_unknown_options": True}


def _parse_latlon(text: str) -> Coordinate:
    try:
        lat, lon = map(float, text.split(","))
    except ValueError:
        raise typer.BadParameter(f"expected 'lat,lon', got '{text}'") from None
    point = Coordinate(lat, lon)
    if not point.is_valid():
        raise typer.BadParameter(f"coordinate out of range: '{text}'")
    return point


def _emit(collection: dict, output: Optional[Path]) -> None:
    if output:
        output.write_text(json.dumps(collection, indent=2))
        typer.echo(f"Saved route to {output}")
    else:
        typer.echo(json.dumps(collection, indent=2))


def _summarize(plan: RoutePlan, catalog_zones: list) -> None:
    typer.echo(f"Distance: {plan.distance_miles:.2f} mi", err=True)
    typer.echo(f"Est. time: {plan.duration_minutes} min", err=True)
    if plan.detour_zone:
        typer.echo(f"Detouring around: {plan.detour_zone}", err=True)
    for name in route_exposure(plan, catalog_zones, get_config().planner.miles_per_degree):
        typer.echo(f"Warning: route passes through {name}", err=True)


@app.command(context_settings=_COORD_ARGS)
def zones(origin: str = typer.Argument(..., help="origin lat,lon")) -> None:
    """List the pollen zones around an origin."""
    point = _parse_latlon(origin)
    for zone in get_catalog().zones_for(point):
        typer.echo(
            f"{zone.name:<24} {zone.severity.label:<10} {severity_color(zone.severity)} "
            f"({zone.center.lat:.4f}, {zone.center.lon:.4f}) r={zone.radius_miles:.1f} mi"
        )


@app.command(context_settings=_COORD_ARGS)
def route(
    start: str = typer.Argument(..., help="start lat,lon"),
    end: str = typer.Argument(..., help="end lat,lon"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
) -> None:
    """Plan a route between two coordinates and print it as GeoJSON."""
    origin = _parse_latlon(start)
    destination = _parse_latlon(end)
    zone_list = get_catalog().zones_for(origin)
    plan = get_planner().plan(origin, destination, zone_list)
    _summarize(plan, zone_list)
    _emit(to_feature_collection(plan, zone_list), output)


@app.command(context_settings=_COORD_ARGS)
def search(
    origin: str = typer.Argument(..., help="origin lat,lon"),
    query: str = typer.Argument(..., help="destination address or place name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
) -> None:
    """Geocode a destination and plan a route to it."""
    point = _parse_latlon(origin)
    try:
        destination = get_resolver().resolve(query)
    except (ValueError, GeocodingError) as exc:
        typer.echo(f"Error finding location: {exc}", err=True)
        raise typer.Exit(2)
    if destination is None:
        typer.echo("Location not found. Please try a different address.", err=True)
        raise typer.Exit(1)
    zone_list = get_catalog().zones_for(point)
    plan = get_planner().plan(point, destination, zone_list)
    _summarize(plan, zone_list)
    _emit(to_feature_collection(plan, zone_list), output)


@app.command()
def info() -> None:
    """Show the active planner and geocoder settings."""
    cfg = get_config()
    typer.echo("=== Pollen Router Configuration ===")
    typer.echo(f"Detour threshold: {cfg.planner.detour_threshold_deg} deg")
    typer.echo(f"Offset factor:    {cfg.planner.offset_factor}")
    typer.echo(f"Miles per degree: {cfg.planner.miles_per_degree}")
    typer.echo(f"Walking speed:    {cfg.planner.walking_speed_mph} mph")
    typer.echo(f"Geocoder:         {cfg.geocoder.base_url}")
    typer.echo(f"Zone layout:      {cfg.zones.layout_path or 'built-in'}")


if __name__ == "__main__":
    app()
