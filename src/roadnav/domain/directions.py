# roadnav/domain/directions.py
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from roadnav.domain.road_graph import RoadGraph

UNKNOWN_ROAD = "unknown road"

_DIRECTION_RE = re.compile(r"([a-zA-Z\s]+?) on (.*?) and continue for ([0-9.]+) miles\.")


class Turn(IntEnum):
    START = 0
    STRAIGHT = 1
    SLIGHT_LEFT = 2
    SLIGHT_RIGHT = 3
    RIGHT = 4
    LEFT = 5
    SHARP_LEFT = 6
    SHARP_RIGHT = 7

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> Turn | None:
        return _BY_LABEL.get(label)

    @classmethod
    def from_bearings(cls, prev: float, cur: float) -> Turn:
        """Classify the change from heading `prev` to heading `cur` (degrees)."""
        delta = (cur - prev + 180.0) % 360.0 - 180.0
        mag = abs(delta)
        if mag <= 15:
            return cls.STRAIGHT
        if mag <= 30:
            return cls.SLIGHT_RIGHT if delta > 0 else cls.SLIGHT_LEFT
        if mag <= 100:
            return cls.RIGHT if delta > 0 else cls.LEFT
        return cls.SHARP_RIGHT if delta > 0 else cls.SHARP_LEFT


_LABELS = {
    Turn.START: "Start",
    Turn.STRAIGHT: "Go straight",
    Turn.SLIGHT_LEFT: "Slight left",
    Turn.SLIGHT_RIGHT: "Slight right",
    Turn.RIGHT: "Turn right",
    Turn.LEFT: "Turn left",
    Turn.SHARP_LEFT: "Sharp left",
    Turn.SHARP_RIGHT: "Sharp right",
}
_BY_LABEL = {label: turn for turn, label in _LABELS.items()}


@dataclass
class NavigationDirection:
    turn: Turn
    way: str
    distance: float = 0.0  # miles

    def __str__(self) -> str:
        return f"{self.turn.label} on {self.way} and continue for {self.distance:.3f} miles."

    @classmethod
    def from_string(cls, text: str) -> NavigationDirection | None:
        """Parse the `str()` form back; None if the text does not fit the grammar."""
        m = _DIRECTION_RE.fullmatch(text)
        if m is None:
            return None
        turn = Turn.from_label(m.group(1))
        if turn is None:
            return None
        try:
            distance = float(m.group(3))
        except ValueError:
            return None
        return cls(turn, m.group(2), distance)


def route_directions(graph: RoadGraph, route: Sequence[int]) -> list[NavigationDirection]:
    """
    Collapse a vertex path into one direction per stretch of the same way.
    The turn of each stretch is judged from the bearing of its first edge
    against the bearing of the last edge of the previous stretch.
    """
    out: list[NavigationDirection] = []
    prev_bearing = None
    for u, v in zip(route, route[1:]):
        way = graph.way_name(u, v) or UNKNOWN_ROAD
        bearing = graph.bearing(u, v)
        if out and out[-1].way == way:
            out[-1].distance += graph.distance(u, v)
        else:
            turn = Turn.START if prev_bearing is None else Turn.from_bearings(prev_bearing, bearing)
            out.append(NavigationDirection(turn, way, graph.distance(u, v)))
        prev_bearing = bearing
    return out
