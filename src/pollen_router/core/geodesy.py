"""Flat-earth geometry helpers.

All distances are computed directly on (lat, lon) degree values. Degrees are
scaled to miles with a single constant; no spherical correction is applied.
"""
from __future__ import annotations

import math
from typing import NamedTuple, Sequence


MILES_PER_DEGREE = 69.0
METERS_PER_MILE = 1609.34
WALKING_SPEED_MPH = 3.0


class Coordinate(NamedTuple):
    """A (lat, lon) pair in decimal degrees."""

    lat: float
    lon: float

    def is_valid(self) -> bool:
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0


def planar_distance_deg(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance between two points in raw degree units."""
    return math.sqrt((a.lat - b.lat) ** 2 + (a.lon - b.lon) ** 2)


def degrees_to_miles(degrees: float, miles_per_degree: float = MILES_PER_DEGREE) -> float:
    return degrees * miles_per_degree


def planar_distance_miles(a: Coordinate, b: Coordinate, miles_per_degree: float = MILES_PER_DEGREE) -> float:
    return degrees_to_miles(planar_distance_deg(a, b), miles_per_degree)


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    return Coordinate((a.lat + b.lat) / 2, (a.lon + b.lon) / 2)


def perpendicular_offset(mid: Coordinate, center: Coordinate, factor: float = 0.1) -> Coordinate:
    """Return a point beside ``mid``, rotated a quarter turn away from ``center``.

    The offset vector is the (lat, lon) vector from ``mid`` to ``center``
    rotated by 90 degrees and scaled by ``factor``.
    """
    lat = mid.lat + (center.lon - mid.lon) * factor
    lon = mid.lon - (center.lat - mid.lat) * factor
    return Coordinate(lat, lon)


def path_distance_miles(path: Sequence[Coordinate], miles_per_degree: float = MILES_PER_DEGREE) -> float:
    """Sum of planar segment lengths along ``path``, in miles."""
    total = 0.0
    for prev, point in zip(path, path[1:]):
        total += planar_distance_miles(prev, point, miles_per_degree)
    return total


def walking_minutes(miles: float, speed_mph: float = WALKING_SPEED_MPH) -> int:
    """Walking time in whole minutes, halves rounded up."""
    return int(math.floor(miles / speed_mph * 60 + 0.5))


def point_in_circle(
    point: Coordinate,
    center: Coordinate,
    radius_miles: float,
    miles_per_degree: float = MILES_PER_DEGREE,
) -> bool:
    return planar_distance_miles(point, center, miles_per_degree) <= radius_miles
