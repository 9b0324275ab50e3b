# runtime/registries.py
from collections.abc import Callable

from roadnav.app.protocols import RoutePlanner
from roadnav.config.models import (
    GraphByPath,
    GraphInline,
    GraphRef,
    RouterAStarModel,
    RouterDijkstraModel,
    RouterUnion,
)
from roadnav.domain.locations import LocationIndex
from roadnav.domain.road_graph import RoadGraph
from roadnav.domain.routing.astar import AStarRouter, DijkstraRouter
from roadnav.io.resources import load_graph_from_path

RouterFactory = Callable[[RouterUnion, RoadGraph], RoutePlanner]

_router_registry: dict[str, RouterFactory] = {}


# ------------------- Router registry ---------------------------


def register_router(kind: str):
    def deco(fn: RouterFactory):
        _router_registry[kind] = fn
        return fn

    return deco


def make_router(cfg: RouterUnion, *, graph: RoadGraph) -> RoutePlanner:
    try:
        factory = _router_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown router kind {cfg.kind!r}") from None
    return factory(cfg, graph)


@register_router("astar")
def _make_astar(cfg: RouterAStarModel, graph: RoadGraph):
    return AStarRouter(graph, skip_predecessor=cfg.skip_predecessor)


@register_router("dijkstra")
def _make_dijkstra(cfg: RouterDijkstraModel, graph: RoadGraph):
    return DijkstraRouter(graph, skip_predecessor=cfg.skip_predecessor)


# ------------------- Graph sources ---------------------------


def resolve_graph(ref: GraphRef) -> tuple[RoadGraph, LocationIndex]:
    if isinstance(ref, GraphInline):
        graph, places = RoadGraph(), LocationIndex()
        for v in ref.vertices:
            graph.add_vertex(v.id, v.lon, v.lat)
            if v.name:
                places.add(v.name, v.id, v.lon, v.lat)
        for e in ref.edges:
            graph.add_edge(e.u, e.v, way=e.way)
        return graph, places
    if isinstance(ref, GraphByPath):
        try:
            return load_graph_from_path(ref.file, ref.fmt)
        except FileNotFoundError:
            if ref.must_exist:
                raise
            return RoadGraph(), LocationIndex()
    raise TypeError(ref)
