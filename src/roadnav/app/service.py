# roadnav/app/service.py
import time
from dataclasses import dataclass, field

from roadnav.app.protocols import NearestVertexIndex, QueryHooks, RoutePlanner
from roadnav.domain.directions import NavigationDirection, route_directions
from roadnav.domain.entities.geography import Location, Route
from roadnav.domain.errors import EmptyIndexError, NoPathFound
from roadnav.domain.locations import LocationIndex
from roadnav.domain.road_graph import RoadGraph
from roadnav.io.query_logging import NoopHooks


def _ms(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000


@dataclass
class RoutingService:
    """
    Query façade over a built graph, index and router.
    Graph, index, router and places are read-only after construction; the
    hooks object may keep counters (QueryLogging samples per call), so give
    each serving thread its own hooks.
    """

    graph: RoadGraph
    index: NearestVertexIndex
    router: RoutePlanner
    places: LocationIndex = field(default_factory=LocationIndex)
    hooks: QueryHooks = field(default_factory=NoopHooks)

    def nearest_vertex(self, lon: float, lat: float) -> int:
        t0 = time.perf_counter()
        try:
            vid = self.index.nearest(lon, lat)
        except EmptyIndexError as exc:
            self.hooks.error(op="nearest", exc=exc, lon=lon, lat=lat)
            raise
        self.hooks.nearest(lon=lon, lat=lat, vid=vid, wall_ms=_ms(t0))
        return vid

    def route(self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float) -> Route:
        s = self.nearest_vertex(start_lon, start_lat)
        t = self.nearest_vertex(dest_lon, dest_lat)
        t0 = time.perf_counter()
        try:
            r = self.router.route(s, t)
        except NoPathFound:
            self.hooks.no_path(start=s, dest=t, wall_ms=_ms(t0))
            raise
        self.hooks.route(
            start=s,
            dest=t,
            hops=len(r.nodes) - 1,
            length_mi=r.length_mi,
            expanded=r.expanded,
            wall_ms=_ms(t0),
        )
        return r

    def shortest_path(self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float) -> list[int]:
        return self.route(start_lon, start_lat, dest_lon, dest_lat).nodes

    def distance(self, u: int, v: int) -> float:
        return self.graph.distance(u, v)

    def bearing(self, u: int, v: int) -> float:
        return self.graph.bearing(u, v)

    def directions(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> list[NavigationDirection]:
        return route_directions(self.graph, self.shortest_path(start_lon, start_lat, dest_lon, dest_lat))

    def locations_by_prefix(self, prefix: str) -> list[str]:
        return self.places.by_prefix(prefix)

    def locations(self, name: str) -> list[Location]:
        return self.places.by_name(name)
