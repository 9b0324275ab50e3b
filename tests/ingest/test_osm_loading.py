# tests/ingest/test_osm_loading.py
import io
import pickle

import pytest

from roadnav.domain.errors import GraphBuildError
from roadnav.domain.road_graph import RoadGraph
from roadnav.io.osm import dedupe_refs, load_osm
from roadnav.io.resources import load_graph_from_path

OSM = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="37.8700" lon="-122.2600"/>
  <node id="2" lat="37.8710" lon="-122.2600"/>
  <node id="3" lat="37.8720" lon="-122.2600"/>
  <node id="4" lat="37.8720" lon="-122.2590"/>
  <node id="5" lat="37.8800" lon="-122.2500">
    <tag k="name" v="Top Dog"/>
    <tag k="amenity" v="fast_food"/>
  </node>
  <node id="6" lat="37.8730" lon="-122.2580"/>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="residential"/>
    <tag k="name" v="Bowditch Street"/>
  </way>
  <way id="101">
    <nd ref="3"/>
    <nd ref="4"/>
    <tag k="highway" v="tertiary"/>
  </way>
  <way id="102">
    <nd ref="4"/>
    <nd ref="6"/>
    <tag k="highway" v="footway"/>
  </way>
</osm>
"""


def test_loads_highways_prunes_isolated_and_indexes_names():
    graph, places = load_osm(io.BytesIO(OSM))
    # 5 (named, unconnected) and 6 (footway only) are pruned
    assert sorted(graph.vertices()) == [1, 2, 3, 4]
    assert set(graph.neighbors(2)) == {1, 3}
    assert graph.way_name(1, 2) == "Bowditch Street"
    assert graph.way_name(3, 4) is None
    assert graph.lat(3) == pytest.approx(37.872)
    # places survive pruning
    assert places.by_prefix("top") == ["Top Dog"]
    assert places.by_name("top dog")[0].id == 5


def test_way_with_missing_node_fails_in_strict_mode():
    bad = OSM.replace(b'<nd ref="4"/>\n    <nd ref="6"/>', b'<nd ref="4"/>\n    <nd ref="77"/>')
    bad = bad.replace(b'v="footway"', b'v="primary"')
    with pytest.raises(GraphBuildError, match="unknown vertex 77"):
        load_osm(io.BytesIO(bad))
    graph, _ = load_osm(io.BytesIO(bad), strict=False)
    assert sorted(graph.vertices()) == [1, 2, 3, 4]


def test_malformed_xml_is_a_build_error():
    with pytest.raises(GraphBuildError):
        load_osm(io.BytesIO(b"<osm><node id='1' lat='1' lon='2'></osm>"))


def test_way_without_node_ref_is_a_build_error():
    bad = OSM.replace(b'<nd ref="4"/>\n    <nd ref="6"/>', b'<nd ref="4"/>\n    <nd/>')
    bad = bad.replace(b'v="footway"', b'v="primary"')
    with pytest.raises(GraphBuildError):
        load_osm(io.BytesIO(bad))


def test_repeated_node_refs_in_a_way_are_collapsed():
    dup = OSM.replace(b'<nd ref="2"/>\n', b'<nd ref="2"/>\n    <nd ref="2"/>\n')
    graph, _ = load_osm(io.BytesIO(dup))
    assert sorted(graph.vertices()) == [1, 2, 3, 4]
    assert set(graph.neighbors(2)) == {1, 3}
    assert 2 not in graph.neighbors(2)


@pytest.mark.parametrize(
    "refs, expected",
    [
        ([1, 2, 2], [1, 2]),
        ([1, 1, 2, 3, 3, 3, 1], [1, 2, 3, 1]),
        ([5], [5]),
        ([], []),
    ],
)
def test_dedupe_refs_keeps_order_and_drops_only_adjacent_repeats(refs, expected):
    assert dedupe_refs(refs) == expected


def test_resource_loader_reads_osm_and_pickle(tmp_path):
    osm_file = tmp_path / "map.osm"
    osm_file.write_bytes(OSM)
    graph, places = load_graph_from_path(str(osm_file), "osm")
    assert len(graph) == 4 and len(places) == 1

    pkl = tmp_path / "graph.pkl"
    with open(pkl, "wb") as f:
        pickle.dump(graph, f)
    loaded, empty_places = load_graph_from_path(str(pkl), "pickle")
    assert isinstance(loaded, RoadGraph)
    assert sorted(loaded.vertices()) == sorted(graph.vertices())
    assert len(empty_places) == 0

    with pytest.raises(ValueError):
        load_graph_from_path(str(pkl), "graphml")
