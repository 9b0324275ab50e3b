# roadnav/io/resources.py
import pickle
from functools import lru_cache

from roadnav.domain.locations import LocationIndex
from roadnav.domain.road_graph import RoadGraph
from roadnav.io.osm import load_osm


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> tuple[RoadGraph, LocationIndex]:
    if fmt == "osm":
        return load_osm(file)
    if fmt == "pickle":
        with open(file, "rb") as f:
            obj = pickle.load(f)
        if isinstance(obj, RoadGraph):
            return obj, LocationIndex()
        graph, places = obj
        return graph, places
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
