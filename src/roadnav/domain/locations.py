# roadnav/domain/locations.py
import re
from bisect import bisect_left
from collections import defaultdict

from roadnav.domain.entities.geography import Location

_NOT_LETTER_OR_SPACE = re.compile(r"[^a-zA-Z ]")


def clean_name(s: str) -> str:
    """Drop punctuation and digits, lower-case the rest."""
    return _NOT_LETTER_OR_SPACE.sub("", s).lower()


class LocationIndex:
    """
    Named places, looked up by exact or prefix match on their cleaned name.
    Kept apart from the spatial index; places need not be routable vertices.
    """

    def __init__(self):
        self._by_clean: dict[str, list[Location]] = defaultdict(list)
        self._sorted: list[str] | None = None

    def add(self, name: str, vid: int, lon: float, lat: float) -> Location:
        loc = Location(name, vid, float(lon), float(lat))
        self._by_clean[clean_name(name)].append(loc)
        self._sorted = None
        return loc

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_clean.values())

    def _keys(self) -> list[str]:
        if self._sorted is None:
            self._sorted = sorted(self._by_clean)
        return self._sorted

    def by_prefix(self, prefix: str) -> list[str]:
        """Full names (deduplicated, sorted) whose cleaned form starts with the cleaned prefix."""
        p = clean_name(prefix)
        keys = self._keys()
        names: set[str] = set()
        for key in keys[bisect_left(keys, p) :]:
            if not key.startswith(p):
                break
            names.update(loc.name for loc in self._by_clean[key])
        return sorted(names)

    def by_name(self, name: str) -> list[Location]:
        return list(self._by_clean.get(clean_name(name), ()))
