"""Per-user routing session: origin, zones and the latest plan."""
from __future__ import annotations

from typing import List, Optional

from pollen_router.core.geodesy import Coordinate
from pollen_router.data.zones import PollenZone, ZoneCatalog
from pollen_router.geocode.resolver import DestinationResolver, LookupSequencer
from pollen_router.routing.planner import RouteAvoidancePlanner, RoutePlan


class RouteSession:
    """Holds the caller-side state around the stateless planner.

    Zones are regenerated whenever the origin moves. A destination search
    replaces the current plan; results of superseded searches are dropped.
    """

    def __init__(
        self,
        origin: Coordinate,
        resolver: DestinationResolver,
        catalog: Optional[ZoneCatalog] = None,
        planner: Optional[RouteAvoidancePlanner] = None,
    ) -> None:
        self.resolver = resolver
        self.catalog = catalog or ZoneCatalog()
        self.planner = planner or RouteAvoidancePlanner()
        self.sequencer = LookupSequencer()
        self.plan: Optional[RoutePlan] = None
        self.destination: Optional[Coordinate] = None
        self.set_origin(origin)

    def set_origin(self, origin: Coordinate) -> None:
        self.origin = origin
        self.zones: List[PollenZone] = self.catalog.zones_for(origin)
        self.clear()

    def clear(self) -> None:
        self.plan = None
        self.destination = None

    def route_to(self, destination: Coordinate) -> RoutePlan:
        self.destination = destination
        self.plan = self.planner.plan(self.origin, destination, self.zones)
        return self.plan

    def search(self, query: str) -> Optional[RoutePlan]:
        """Resolve ``query`` and plan to it.

        Returns None when the location is not found or when a newer search
        started while this one was waiting on the resolver; the current plan
        is left untouched in both cases.
        """
        token = self.sequencer.begin()
        destination = self.resolver.resolve(query)
        if not self.sequencer.is_current(token):
            print(f"[ROUTE] Discarding stale lookup for '{query}'")
            return None
        if destination is None:
            return None
        return self.route_to(destination)
