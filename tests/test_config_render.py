from __future__ import annotations

from pathlib import Path

from pollen_router.core.config import AppConfig, get_config, reload_config
from pollen_router.core.geodesy import Coordinate
from pollen_router.data.zones import Severity, build_zones
from pollen_router.render.geojson import (
    FALLBACK_COLOR,
    severity_color,
    to_feature_collection,
    zone_to_feature,
)
from pollen_router.routing.planner import plan_route


def test_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("planner:\n  walking_speed_mph: 4.0\ngeocoder:\n  timeout_s: 3\n")
    cfg = AppConfig.from_yaml(path)
    assert cfg.planner.walking_speed_mph == 4.0
    assert cfg.planner.detour_threshold_deg == 0.05
    assert cfg.geocoder.timeout_s == 3
    assert cfg.zones.layout_path is None


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    try:
        cfg = reload_config(tmp_path / "missing.yaml")
        assert cfg == AppConfig()
    finally:
        reload_config()


def test_env_var_selects_config(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("planner:\n  offset_factor: 0.2\n")
    monkeypatch.setenv("POLLEN_ROUTER_CONFIG", str(path))
    try:
        reload_config()
        assert get_config().planner.offset_factor == 0.2
    finally:
        monkeypatch.delenv("POLLEN_ROUTER_CONFIG")
        reload_config()


def test_severity_colors() -> None:
    assert severity_color(Severity.LOW) == "#10b981"
    assert severity_color(Severity.VERY_HIGH) == "#ef4444"
    assert severity_color(None) == FALLBACK_COLOR


def test_feature_collection() -> None:
    origin = Coordinate(40.7128, -74.0060)
    zones = build_zones(origin)
    plan = plan_route(origin, Coordinate(40.7580, -73.9855), zones)
    collection = to_feature_collection(plan, zones)
    assert len(collection["features"]) == len(zones) + 1

    feature = zone_to_feature(zones[0])
    assert feature["geometry"]["coordinates"] == [zones[0].center.lon, zones[0].center.lat]
    assert feature["properties"]["severity"] == "High"
    assert feature["properties"]["radius_meters"] == zones[0].radius_meters
