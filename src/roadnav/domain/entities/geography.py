from dataclasses import dataclass


# Core map types shared by graph, index and search
@dataclass(frozen=True)
class Vertex:
    id: int
    lon: float  # degrees
    lat: float


@dataclass(frozen=True)
class Location:
    name: str  # display name, as found in the map data
    id: int
    lon: float
    lat: float


@dataclass(frozen=True)
class RoutePoint:
    """Projected coordinate of a vertex; what the spatial index stores."""

    id: int
    x: float
    y: float


@dataclass
class Route:
    nodes: list[int]  # vertex ids, start first
    length_mi: float
    expanded: int = 0  # vertices settled by the search
