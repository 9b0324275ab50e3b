from typing import Protocol, runtime_checkable

from roadnav.domain.entities.geography import Route


@runtime_checkable
class NearestVertexIndex(Protocol):
    """
    Responsibilities:
      • Map an arbitrary (lon, lat) to the id of the closest routable vertex.
      • Signal an empty index distinctly instead of returning a sentinel id.
    """

    def nearest(self, lon: float, lat: float) -> int: ...
    def __len__(self) -> int: ...


@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Compute the cheapest vertex path between two graph vertices.
      • Raise NoPathFound when the destination cannot be reached.
    Units: miles for distances.
    """

    def route(self, start: int, dest: int) -> Route: ...
    def distance_mi(self, start: int, dest: int) -> float: ...


@runtime_checkable
class QueryHooks(Protocol):
    def build_start(self, *, source: str): ...
    def build_end(self, *, vertices: int, edges: int, pruned: int, depth: int, wall_ms: float): ...
    def nearest(self, *, lon: float, lat: float, vid: int, wall_ms: float): ...
    def route(self, *, start: int, dest: int, hops: int, length_mi: float, expanded: int, wall_ms: float): ...
    def no_path(self, *, start: int, dest: int, wall_ms: float): ...
    def error(self, *, op: str, exc: BaseException, **kw): ...
