# synth/networks.py
from __future__ import annotations

from collections.abc import Iterable
from zlib import crc32

import numpy as np

from roadnav.domain.entities.geography import Vertex
from roadnav.domain.road_graph import RoadGraph
from roadnav.geo.projection import ROOT_LRLAT, ROOT_LRLON, ROOT_ULLAT, ROOT_ULLON

# (min_lon, min_lat, max_lon, max_lat)
DEFAULT_BOX = (ROOT_ULLON, ROOT_LRLAT, ROOT_LRLON, ROOT_ULLAT)


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def stream(seed: int, name: str) -> np.random.Generator:
    """
    Deterministic generator for a named purpose.
    Same (seed, name) gives the same draws regardless of what else was drawn.
    """
    ss = np.random.SeedSequence([_u32(seed), _u32(crc32(name.encode("utf-8")))])
    return np.random.Generator(np.random.PCG64(ss))


def random_vertices(n: int, *, seed: int = 0, box=DEFAULT_BOX, first_id: int = 1) -> list[Vertex]:
    rng = stream(seed, "vertices")
    x0, y0, x1, y1 = box
    lons = rng.uniform(x0, x1, size=n)
    lats = rng.uniform(y0, y1, size=n)
    return [Vertex(first_id + i, float(lon), float(lat)) for i, (lon, lat) in enumerate(zip(lons, lats))]


def random_points(n: int, *, seed: int = 0, box=DEFAULT_BOX) -> np.ndarray:
    """(n, 2) array of query (lon, lat) pairs."""
    rng = stream(seed, "queries")
    x0, y0, x1, y1 = box
    return np.column_stack([rng.uniform(x0, x1, size=n), rng.uniform(y0, y1, size=n)])


def graph_from(vertices: Iterable[Vertex], edges: Iterable[tuple[int, int]] = ()) -> RoadGraph:
    g = RoadGraph()
    for v in vertices:
        g.add_vertex(v.id, v.lon, v.lat)
    for u, v in edges:
        g.add_edge(u, v)
    return g


def grid_network(
    rows: int,
    cols: int,
    *,
    seed: int = 0,
    spacing_deg: float = 0.001,
    jitter_deg: float = 0.0,
    drop: float = 0.0,
    origin: tuple[float, float] = (DEFAULT_BOX[0], DEFAULT_BOX[1]),
) -> RoadGraph:
    """
    rows x cols street grid; vertex id = r * cols + c + 1.
    `jitter_deg` perturbs intersections, `drop` removes that fraction of edges
    (which may disconnect the grid; isolated vertices are pruned).
    """
    rng = stream(seed, "grid")
    lon0, lat0 = origin
    g = RoadGraph()
    for r in range(rows):
        for c in range(cols):
            dx, dy = rng.uniform(-jitter_deg, jitter_deg, size=2) if jitter_deg else (0.0, 0.0)
            g.add_vertex(r * cols + c + 1, lon0 + c * spacing_deg + dx, lat0 + r * spacing_deg + dy)
    for r in range(rows):
        for c in range(cols):
            vid = r * cols + c + 1
            if c + 1 < cols and rng.random() >= drop:
                g.add_edge(vid, vid + 1, way=f"row {r}")
            if r + 1 < rows and rng.random() >= drop:
                g.add_edge(vid, vid + cols, way=f"col {c}")
    g.prune_isolated()
    return g
