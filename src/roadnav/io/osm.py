# roadnav/io/osm.py
import os
from typing import IO

import osmium

from roadnav.domain.errors import GraphBuildError
from roadnav.domain.locations import LocationIndex
from roadnav.domain.road_graph import RoadGraph

ALLOWED_HIGHWAY_TYPES = frozenset(
    {
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
        "motorway_link",
        "trunk_link",
        "primary_link",
        "secondary_link",
        "tertiary_link",
    }
)


def dedupe_refs(refs: list[int]) -> list[int]:
    """Collapse consecutive repeats of the same node ref (a common OSM artifact)."""
    out: list[int] = []
    for ref in refs:
        if not out or out[-1] != ref:
            out.append(ref)
    return out


class RoadHandler(osmium.SimpleHandler):
    """
    Feeds a RoadGraph and a LocationIndex from OSM node/way callbacks.
    Nodes arrive before ways in a sorted extract, so every way can be chained
    against vertices already present.
    """

    def __init__(self, *, strict: bool = True, highway_types: frozenset[str] = ALLOWED_HIGHWAY_TYPES):
        super().__init__()
        self.graph, self.places = RoadGraph(), LocationIndex()
        self.strict, self.highway_types = strict, highway_types

    def node(self, n):
        lon, lat = n.location.lon, n.location.lat
        self.graph.add_vertex(n.id, lon, lat)
        name = n.tags.get("name")
        if name:
            self.places.add(name, n.id, lon, lat)

    def way(self, w):
        if w.tags.get("highway") not in self.highway_types:
            return
        name = w.tags.get("name")
        refs = dedupe_refs([nd.ref for nd in w.nodes])
        if self.strict:
            self.graph.add_way(refs, name=name)
            return
        run: list[int] = []
        for ref in refs + [None]:
            if ref is not None and ref in self.graph:
                run.append(ref)
                continue
            self.graph.add_way(run, name=name)
            run = []


def load_osm(
    source: str | os.PathLike | bytes | IO[bytes],
    *,
    strict: bool = True,
    highway_types: frozenset[str] = ALLOWED_HIGHWAY_TYPES,
) -> tuple[RoadGraph, LocationIndex]:
    """
    Build a road graph and a place-name index from an OSM extract (XML or PBF
    by file extension; raw bytes and binary streams are read as OSM XML).

    Every node becomes a vertex; every way tagged with an allowed highway type
    links its consecutive nodes. Named nodes are also registered as locations.
    The graph is returned already pruned of isolated vertices.

    With strict=False, ways referencing nodes missing from the extract are cut
    at the missing node instead of failing the whole load.
    """
    handler = RoadHandler(strict=strict, highway_types=highway_types)
    try:
        if isinstance(source, (str, os.PathLike)):
            if not os.path.exists(source):
                raise FileNotFoundError(source)
            handler.apply_file(os.fspath(source))
        else:
            data = source if isinstance(source, bytes) else source.read()
            handler.apply_buffer(data, "osm")
    except (RuntimeError, ValueError) as exc:
        # reader failures (malformed XML, bad ids) surface as build errors
        raise GraphBuildError(f"malformed OSM input: {exc}") from exc
    handler.graph.prune_isolated()
    return handler.graph, handler.places
