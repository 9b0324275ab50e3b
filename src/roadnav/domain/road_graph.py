# roadnav/domain/road_graph.py
from collections.abc import Iterable, Iterator, KeysView, Sequence

from roadnav.domain.entities.geography import Vertex
from roadnav.domain.errors import GraphBuildError
from roadnav.geo.distance import great_circle_miles, initial_bearing

_NO_EDGES: dict[int, str | None] = {}


class RoadGraph:
    """
    Intersections (vertices) and the roads between them (undirected edges).

    Edges carry no weight: cost is recomputed from vertex coordinates on every
    call to `distance`. Adjacency is stored symmetrically, each side keyed by the
    neighbour id and holding the name of the way the edge came from (or None).

    Lookups on unknown ids never raise: coordinates read as 0.0 and neighbour
    sets are empty.
    """

    def __init__(self):
        self._vertices: dict[int, Vertex] = {}
        self._adj: dict[int, dict[int, str | None]] = {}

    # ---------------- construction -----------------------

    def add_vertex(self, vid: int, lon: float, lat: float) -> Vertex:
        if vid in self._vertices:
            raise GraphBuildError(f"duplicate vertex id {vid}")
        v = Vertex(vid, float(lon), float(lat))
        self._vertices[vid] = v
        return v

    def add_edge(self, u: int, v: int, way: str | None = None) -> None:
        for end in (u, v):
            if end not in self._vertices:
                raise GraphBuildError(f"edge ({u}, {v}) references unknown vertex {end}")
        if u == v:
            raise GraphBuildError(f"self-loop on vertex {u}")
        a, b = self._adj.setdefault(u, {}), self._adj.setdefault(v, {})
        # re-adding an edge keeps an earlier name unless a new one is given
        a[v] = way if way is not None else a.get(v)
        b[u] = way if way is not None else b.get(u)

    def add_way(self, node_ids: Sequence[int], name: str | None = None) -> int:
        """Chain consecutive nodes of a road way with edges; returns edges added."""
        n = 0
        for u, v in zip(node_ids, node_ids[1:]):
            self.add_edge(u, v, way=name)
            n += 1
        return n

    def prune_isolated(self) -> int:
        """Drop every vertex without an incident edge. Run once before indexing."""
        isolated = [vid for vid in self._vertices if not self._adj.get(vid)]
        for vid in isolated:
            del self._vertices[vid]
            self._adj.pop(vid, None)
        return len(isolated)

    # ---------------- queries ------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vid) -> bool:
        return vid in self._vertices

    def vertices(self) -> Iterator[int]:
        return iter(self._vertices)

    def vertex(self, vid: int) -> Vertex | None:
        return self._vertices.get(vid)

    def iter_vertices(self) -> Iterable[Vertex]:
        return self._vertices.values()

    def neighbors(self, vid: int) -> KeysView[int]:
        return self._adj.get(vid, _NO_EDGES).keys()

    adjacent = neighbors

    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values()) // 2

    def lon(self, vid: int) -> float:
        v = self._vertices.get(vid)
        return v.lon if v is not None else 0.0

    def lat(self, vid: int) -> float:
        v = self._vertices.get(vid)
        return v.lat if v is not None else 0.0

    def way_name(self, u: int, v: int) -> str | None:
        return self._adj.get(u, _NO_EDGES).get(v)

    def distance(self, u: int, v: int) -> float:
        """Great-circle distance in miles; the only edge cost used for routing."""
        return great_circle_miles(self.lon(u), self.lat(u), self.lon(v), self.lat(v))

    def bearing(self, u: int, v: int) -> float:
        return initial_bearing(self.lon(u), self.lat(u), self.lon(v), self.lat(v))
