# roadnav/domain/errors.py


class RoadNavError(Exception):
    """Base class for everything raised by roadnav."""


class GraphBuildError(RoadNavError):
    """Malformed construction-time input (duplicate vertex, dangling edge, ...)."""


class EmptyIndexError(RoadNavError):
    """Nearest-neighbour query against an index with no vertices."""


class NoPathFound(RoadNavError):
    """Search frontier exhausted before the destination was reached."""

    def __init__(self, start: int, dest: int):
        super().__init__(f"no path from {start} to {dest}")
        self.start, self.dest = start, dest
