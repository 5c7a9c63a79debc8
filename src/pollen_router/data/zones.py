"""Pollen zone catalog: fixed circular zones laid out around an origin."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import List, Optional, Sequence, Union

import yaml

from pollen_router.core.geodesy import METERS_PER_MILE, Coordinate, miles_to_meters


class Severity(IntEnum):
    LOW = 1
    MODERATE = 2
    HIGH = 3
    VERY_HIGH = 4

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_avoidance_worthy(self) -> bool:
        return self >= Severity.HIGH

    @classmethod
    def parse(cls, text: Union[str, "Severity"]) -> "Severity":
        """Parse a display label ("Very High") or enum name ("very_high")."""
        if isinstance(text, Severity):
            return text
        key = str(text).strip().upper().replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown severity '{text}'") from None

    @classmethod
    def from_count(cls, count: float) -> "Severity":
        """Classify a pollen grain count."""
        if count < 20:
            return cls.LOW
        if count < 50:
            return cls.MODERATE
        if count < 80:
            return cls.HIGH
        return cls.VERY_HIGH


_LABELS = {
    Severity.LOW: "Low",
    Severity.MODERATE: "Moderate",
    Severity.HIGH: "High",
    Severity.VERY_HIGH: "Very High",
}


@dataclass(frozen=True)
class ZoneTemplate:
    """A zone described relative to the origin."""
    name: str
    dlat: float
    dlon: float
    radius_miles: float
    severity: Severity
    description: str = ""


@dataclass(frozen=True)
class PollenZone:
    center: Coordinate
    radius_meters: float
    severity: Severity
    name: str
    description: str = ""

    @property
    def radius_miles(self) -> float:
        return self.radius_meters / METERS_PER_MILE


DEFAULT_ZONE_LAYOUT: tuple[ZoneTemplate, ...] = (
    ZoneTemplate("Riverside Park Area", 0.08, -0.06, 2.5, Severity.HIGH,
                 "Park with high grass and tree pollen"),
    ZoneTemplate("Industrial District", -0.1, 0.08, 3.0, Severity.VERY_HIGH,
                 "Factory emissions mixing with ragweed"),
    ZoneTemplate("Oak Grove Neighborhood", 0.05, 0.12, 2.8, Severity.MODERATE,
                 "Mature oak trees releasing pollen"),
    ZoneTemplate("Farmland Area", -0.06, -0.14, 4.0, Severity.VERY_HIGH,
                 "Agricultural fields with high weed pollen"),
    ZoneTemplate("Pine Forest Reserve", 0.13, 0.05, 3.5, Severity.MODERATE,
                 "Pine trees with moderate pollen levels"),
    ZoneTemplate("Downtown Metro", -0.04, -0.05, 2.0, Severity.LOW,
                 "Urban area with limited vegetation"),
    ZoneTemplate("Meadowlands Park", 0.03, -0.11, 2.5, Severity.HIGH,
                 "Open meadows with high grass pollen"),
)


class ZoneCatalog:
    """Places a zone layout around an origin.

    The same origin always produces the same zones in layout order.
    """

    def __init__(self, layout: Sequence[ZoneTemplate] = DEFAULT_ZONE_LAYOUT) -> None:
        self.layout = tuple(layout)

    def __len__(self) -> int:
        return len(self.layout)

    def zones_for(self, origin: Coordinate) -> List[PollenZone]:
        return [
            PollenZone(
                center=Coordinate(origin.lat + t.dlat, origin.lon + t.dlon),
                radius_meters=miles_to_meters(t.radius_miles),
                severity=t.severity,
                name=t.name,
                description=t.description,
            )
            for t in self.layout
        ]


def build_zones(origin: Coordinate, layout: Optional[Sequence[ZoneTemplate]] = None) -> List[PollenZone]:
    return ZoneCatalog(DEFAULT_ZONE_LAYOUT if layout is None else layout).zones_for(origin)


def _entry_severity(item: dict) -> Severity:
    # an explicit label wins over a measured grain count
    if "severity" in item:
        return Severity.parse(item["severity"])
    return Severity.from_count(float(item["count"]))


def load_zone_layout(path: Path) -> tuple[ZoneTemplate, ...]:
    """Read a zone layout from YAML; a missing file gives the built-in layout.

    Each entry needs either a ``severity`` label or a pollen ``count``.
    """
    if not path.exists():
        return DEFAULT_ZONE_LAYOUT
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    layout = []
    for i, item in enumerate(data.get("zones", [])):
        try:
            layout.append(
                ZoneTemplate(
                    name=str(item["name"]),
                    dlat=float(item["dlat"]),
                    dlon=float(item["dlon"]),
                    radius_miles=float(item["radius_miles"]),
                    severity=_entry_severity(item),
                    description=str(item.get("description", "")),
                )
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed zone entry #{i} in {path}: {exc}") from exc
    return tuple(layout)
