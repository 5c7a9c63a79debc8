"""Dependency wiring for API service."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pollen_router.core.config import AppConfig, get_config, project_root
from pollen_router.data.zones import ZoneCatalog, load_zone_layout
from pollen_router.geocode.resolver import DestinationResolver, NominatimResolver
from pollen_router.routing.planner import RouteAvoidancePlanner


def get_app_config() -> AppConfig:
    return get_config()


@lru_cache(maxsize=1)
def get_catalog() -> ZoneCatalog:
    cfg = get_config()
    if not cfg.zones.layout_path:
        return ZoneCatalog()
    path = Path(cfg.zones.layout_path)
    if not path.is_absolute():
        path = project_root() / path
    return ZoneCatalog(load_zone_layout(path))


@lru_cache(maxsize=1)
def get_planner() -> RouteAvoidancePlanner:
    return RouteAvoidancePlanner(get_config().planner)


@lru_cache(maxsize=1)
def get_resolver() -> DestinationResolver:
    return NominatimResolver(get_config().geocoder)
