# roadnav/domain/routing/astar.py
import heapq
import math
from collections.abc import Callable, Sequence
from itertools import count

from roadnav.app.protocols import NearestVertexIndex, RoutePlanner
from roadnav.domain.entities.geography import Route
from roadnav.domain.errors import NoPathFound
from roadnav.domain.road_graph import RoadGraph

Heuristic = Callable[[RoadGraph, int, int], float]


def great_circle(graph: RoadGraph, v: int, goal: int) -> float:
    # edge costs are great-circle too, so this never overestimates and
    # satisfies h(v) <= cost(v, w) + h(w)
    return graph.distance(v, goal)


def zero(graph: RoadGraph, v: int, goal: int) -> float:
    return 0.0


def path_length(graph: RoadGraph, nodes: Sequence[int]) -> float:
    return sum(graph.distance(u, v) for u, v in zip(nodes, nodes[1:]))


def _reconstruct(parent: dict[int, int], start: int, dest: int) -> list[int]:
    nodes = [dest]
    while nodes[-1] != start:
        nodes.append(parent[nodes[-1]])
    nodes.reverse()
    return nodes


def _astar(
    graph: RoadGraph,
    start: int,
    dest: int,
    heuristic: Heuristic,
    skip_predecessor: bool,
) -> tuple[list[int], int]:
    g = {start: 0.0}
    parent = {start: start}
    visited: set[int] = set()
    seq = count()  # FIFO among equal priorities keeps runs reproducible
    fringe = [(heuristic(graph, start, dest), next(seq), start)]

    while fringe:
        _, _, v = heapq.heappop(fringe)
        if v == dest:
            return _reconstruct(parent, start, dest), len(visited)
        if v in visited:
            continue  # stale entry from an earlier, worse priority
        visited.add(v)
        gv, pv = g[v], parent[v]
        for w in graph.neighbors(v):
            if w in visited or (skip_predecessor and w == pv):
                continue
            gw = gv + graph.distance(v, w)
            if gw < g.get(w, math.inf):
                g[w], parent[w] = gw, v
                heapq.heappush(fringe, (gw + heuristic(graph, w, dest), next(seq), w))

    raise NoPathFound(start, dest)


def search(
    graph: RoadGraph,
    start: int,
    dest: int,
    heuristic: Heuristic = great_circle,
    *,
    skip_predecessor: bool = True,
) -> list[int]:
    """
    Best-first search from `start` to `dest`; returns vertex ids, both ends
    included. Stops when `dest` is popped, not when it is first reached.
    Raises NoPathFound when the frontier runs dry.
    """
    nodes, _ = _astar(graph, start, dest, heuristic, skip_predecessor)
    return nodes


def shortest_path(
    graph: RoadGraph,
    index: NearestVertexIndex,
    start_lon: float,
    start_lat: float,
    dest_lon: float,
    dest_lat: float,
) -> list[int]:
    s = index.nearest(start_lon, start_lat)
    t = index.nearest(dest_lon, dest_lat)
    return search(graph, s, t)


class AStarRouter(RoutePlanner):
    def __init__(self, graph: RoadGraph, *, skip_predecessor: bool = True, heuristic: Heuristic = great_circle):
        self.G, self.h, self.skip_predecessor = graph, heuristic, skip_predecessor

    def route(self, start: int, dest: int) -> Route:
        nodes, expanded = _astar(self.G, start, dest, self.h, self.skip_predecessor)
        return Route(nodes, path_length(self.G, nodes), expanded)

    def distance_mi(self, start: int, dest: int) -> float:
        return self.route(start, dest).length_mi


class DijkstraRouter(AStarRouter):
    """A* with a zero heuristic; the reference for optimality checks."""

    def __init__(self, graph: RoadGraph, *, skip_predecessor: bool = True):
        super().__init__(graph, skip_predecessor=skip_predecessor, heuristic=zero)
