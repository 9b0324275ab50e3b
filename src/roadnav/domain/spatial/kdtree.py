# roadnav/domain/spatial/kdtree.py
from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter

from roadnav.domain.entities.geography import RoutePoint, Vertex
from roadnav.domain.errors import EmptyIndexError
from roadnav.domain.road_graph import RoadGraph
from roadnav.geo.projection import DEFAULT_PROJECTION, Projection

X, Y = 0, 1
_AXIS_KEY = (attrgetter("x"), attrgetter("y"))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in projected space (closed on every side)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def around(cls, points: Iterable[RoutePoint]) -> BoundingBox:
        pts = list(points)
        if not pts:
            raise ValueError("cannot bound an empty point set")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def split(self, axis: int, value: float) -> tuple[BoundingBox, BoundingBox]:
        """Return the (below-or-equal, above) halves at `value` along `axis`."""
        if axis == X:
            return (
                BoundingBox(self.min_x, self.min_y, value, self.max_y),
                BoundingBox(value, self.min_y, self.max_x, self.max_y),
            )
        return (
            BoundingBox(self.min_x, self.min_y, self.max_x, value),
            BoundingBox(self.min_x, value, self.max_x, self.max_y),
        )

    def dist2(self, x: float, y: float) -> float:
        """
        Squared distance from (x, y) to the nearest point of the rectangle:
        zero inside, perpendicular when within one axis' span, corner otherwise.
        """
        dx = max(self.min_x - x, 0.0, x - self.max_x)
        dy = max(self.min_y - y, 0.0, y - self.max_y)
        return dx * dx + dy * dy


@dataclass(frozen=True)
class KDNode:
    id: int
    x: float
    y: float
    axis: int  # X on even depths, Y on odd
    left: KDNode | None = None  # axis value <= split
    right: KDNode | None = None  # axis value > split

    @property
    def split(self) -> float:
        return self.x if self.axis == X else self.y


# (vertex id, squared distance); id None until a node has been visited
_Best = tuple[int | None, float]
_NO_BEST: _Best = (None, math.inf)


def _build(points: list[RoutePoint], depth: int) -> KDNode | None:
    if not points:
        return None
    axis = depth % 2
    key = _AXIS_KEY[axis]
    # stable sort: equal coordinates keep their incoming order, so a given
    # input order always yields the same tree
    ordered = sorted(points, key=key)
    m = len(ordered) // 2
    pivot = ordered[m]
    split = key(pivot)
    # members tied with the median after position m still belong below-or-equal
    hi = bisect_right(ordered, split, lo=m + 1, key=key)
    return KDNode(
        pivot.id,
        pivot.x,
        pivot.y,
        axis,
        left=_build(ordered[:m] + ordered[m + 1 : hi], depth + 1),
        right=_build(ordered[hi:], depth + 1),
    )


def _search(node: KDNode | None, x: float, y: float, box: BoundingBox, best: _Best) -> _Best:
    if node is None:
        return best
    d2 = (node.x - x) ** 2 + (node.y - y) ** 2
    # the first node visited always counts, even at infinite distance
    if d2 < best[1] or best[0] is None:
        best = (node.id, d2)

    below, above = box.split(node.axis, node.split)
    q = x if node.axis == X else y
    if q <= node.split:
        near, near_box, far, far_box = node.left, below, node.right, above
    else:
        near, near_box, far, far_box = node.right, above, node.left, below

    best = _search(near, x, y, near_box, best)
    if far is not None and far_box.dist2(x, y) < best[1]:
        best = _search(far, x, y, far_box, best)
    return best


def _depth(node: KDNode | None) -> int:
    if node is None:
        return 0
    return 1 + max(_depth(node.left), _depth(node.right))


class SpatialIndex:
    """
    Median-split 2-d tree over projected vertex coordinates.

    Built once, never mutated. Queries keep their whole state (current best,
    bounding box) on the call stack, so one index can serve concurrent readers.
    """

    def __init__(self, root: KDNode | None, bounds: BoundingBox | None, size: int, projection: Projection):
        self._root, self._bounds, self._size = root, bounds, size
        self.projection = projection

    @classmethod
    def build(cls, vertices: Iterable[Vertex], projection: Projection = DEFAULT_PROJECTION) -> SpatialIndex:
        points = [RoutePoint(v.id, *projection.xy(v.lon, v.lat)) for v in vertices]
        if not points:
            return cls(None, None, 0, projection)
        return cls(_build(points, 0), BoundingBox.around(points), len(points), projection)

    @classmethod
    def from_graph(cls, graph: RoadGraph, projection: Projection = DEFAULT_PROJECTION) -> SpatialIndex:
        return cls.build(graph.iter_vertices(), projection)

    @property
    def root(self) -> KDNode | None:
        return self._root

    @property
    def bounds(self) -> BoundingBox | None:
        """True extent of the indexed points; the root pruning box."""
        return self._bounds

    def __len__(self) -> int:
        return self._size

    def depth(self) -> int:
        return _depth(self._root)

    def nearest(self, lon: float, lat: float) -> int:
        """Id of the vertex closest to (lon, lat) in projected space."""
        return self.nearest_xy(*self.projection.xy(lon, lat))

    def nearest_xy(self, x: float, y: float) -> int:
        if self._root is None:
            raise EmptyIndexError("nearest-neighbour query on an empty index")
        vid, _ = _search(self._root, x, y, self._bounds, _NO_BEST)
        return vid
