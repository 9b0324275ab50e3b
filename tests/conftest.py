# tests/conftest.py
import pytest

from roadnav.domain.road_graph import RoadGraph
from roadnav.domain.spatial.kdtree import SpatialIndex
from roadnav.geo.projection import Projection

A, B, C, D = 1, 2, 3, 4


@pytest.fixture
def local_projection() -> Projection:
    # centred on the toy networks below rather than on the default map
    return Projection(ref_lon=0.5, ref_lat=0.5)


@pytest.fixture
def square_graph() -> RoadGraph:
    """A(0,0) B(0,1) C(1,1) D(1,0) as (lon, lat); A-B, B-C, C-D but no A-D."""
    g = RoadGraph()
    g.add_vertex(A, 0.0, 0.0)
    g.add_vertex(B, 0.0, 1.0)
    g.add_vertex(C, 1.0, 1.0)
    g.add_vertex(D, 1.0, 0.0)
    g.add_edge(A, B, way="West Road")
    g.add_edge(B, C, way="North Road")
    g.add_edge(C, D, way="East Road")
    return g


@pytest.fixture
def square_index(square_graph, local_projection) -> SpatialIndex:
    return SpatialIndex.from_graph(square_graph, local_projection)
