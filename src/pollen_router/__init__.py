"""Pollen-aware walking route planner with zone catalog and geocoding helpers."""

__all__ = [
    "core",
    "data",
    "routing",
    "geocode",
    "render",
    "api",
    "cli",
]
