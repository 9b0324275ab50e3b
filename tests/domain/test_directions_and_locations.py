# tests/domain/test_directions_and_locations.py
import pytest

from roadnav.domain.directions import UNKNOWN_ROAD, NavigationDirection, Turn, route_directions
from roadnav.domain.locations import LocationIndex, clean_name
from roadnav.domain.road_graph import RoadGraph

# ---------- Directions


@pytest.mark.parametrize("turn", list(Turn))
@pytest.mark.parametrize(
    "way",
    ["Telegraph Avenue", "Martin Luther King Jr. Way", "I-80", "Peet's Alley", "Fish & Chips Row", "Carry on Lane"],
)
def test_direction_string_round_trip(turn: Turn, way: str):
    nd = NavigationDirection(turn, way, 0.12345)
    text = str(nd)
    assert text == f"{turn.label} on {way} and continue for 0.123 miles."
    back = NavigationDirection.from_string(text)
    assert back == NavigationDirection(turn, way, 0.123)
    assert str(back) == text


@pytest.mark.parametrize(
    "text",
    [
        "Hover left on Main Street and continue for 1.000 miles.",
        "Start on Main Street and continue for many miles.",
        "Start on Main Street",
        "",
    ],
)
def test_unparseable_direction_is_none(text):
    assert NavigationDirection.from_string(text) is None


@pytest.mark.parametrize(
    "prev, cur, expected",
    [
        (0.0, 10.0, Turn.STRAIGHT),
        (0.0, -25.0, Turn.SLIGHT_LEFT),
        (0.0, 25.0, Turn.SLIGHT_RIGHT),
        (0.0, 90.0, Turn.RIGHT),
        (0.0, -90.0, Turn.LEFT),
        (0.0, 150.0, Turn.SHARP_RIGHT),
        (0.0, -150.0, Turn.SHARP_LEFT),
        (170.0, -170.0, Turn.SLIGHT_RIGHT),  # wraps through 180
    ],
)
def test_turn_from_bearings(prev, cur, expected):
    assert Turn.from_bearings(prev, cur) is expected


def test_route_directions_groups_ways():
    g = RoadGraph()
    g.add_vertex(1, 0.0, 0.000)
    g.add_vertex(2, 0.0, 0.001)
    g.add_vertex(3, 0.0, 0.002)
    g.add_vertex(4, 0.001, 0.002)
    g.add_vertex(5, 0.002, 0.002)
    g.add_way([1, 2, 3], name="Main Street")
    g.add_way([3, 4], name="Oak Avenue")
    g.add_edge(4, 5)

    dirs = route_directions(g, [1, 2, 3, 4, 5])
    assert [(d.turn, d.way) for d in dirs] == [
        (Turn.START, "Main Street"),
        (Turn.RIGHT, "Oak Avenue"),
        (Turn.STRAIGHT, UNKNOWN_ROAD),
    ]
    assert dirs[0].distance == pytest.approx(g.distance(1, 2) + g.distance(2, 3))
    assert route_directions(g, [3]) == []


# ---------- Locations


@pytest.fixture
def places() -> LocationIndex:
    idx = LocationIndex()
    idx.add("Top Dog", 1, -122.2585, 37.8676)
    idx.add("Top Dog", 2, -122.2600, 37.8650)
    idx.add("Tomate Cafe", 3, -122.2700, 37.8700)
    idx.add("Berkeley Bowl", 4, -122.2680, 37.8560)
    idx.add("Peet's Coffee", 5, -122.2690, 37.8790)
    return idx


def test_clean_name_strips_punctuation_and_case():
    assert clean_name("Peet's Coffee & Tea #2") == "peets coffee  tea "


def test_prefix_search_is_case_and_punctuation_insensitive(places):
    assert places.by_prefix("to") == ["Tomate Cafe", "Top Dog"]
    assert places.by_prefix("TOP") == ["Top Dog"]
    assert places.by_prefix("peets") == ["Peet's Coffee"]
    assert places.by_prefix("zz") == []


def test_exact_search_returns_every_match(places):
    found = places.by_name("top dog")
    assert sorted(loc.id for loc in found) == [1, 2]
    assert places.by_name("Peets Coffee")[0].lat == pytest.approx(37.8790)
    assert places.by_name("Top") == []
    assert len(places) == 5
