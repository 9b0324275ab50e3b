# roadnav/io/query_logging.py
import json
import logging
import sys


def _default_json_logger(name="roadnav", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class NoopHooks:
    def build_start(self, **_):
        pass

    def build_end(self, **_):
        pass

    def nearest(self, **_):
        pass

    def route(self, **_):
        pass

    def no_path(self, **_):
        pass

    def error(self, **_):
        pass


class QueryLogging(NoopHooks):
    """
    Structured logs for index/graph construction and query serving.
    Build and failure records are always emitted; per-query records only with
    debug=True, one in every `sample_every`.
    """

    def __init__(
        self,
        app: str = "roadnav",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.app, self.debug, self.sample_every = app, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._queries = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"app": self.app, **extra}})

    def _sampled(self) -> bool:
        self._queries += 1
        return self.debug and (self._queries % self.sample_every) == 0

    # --------------------------------------------------------

    def build_start(self, *, source: str):
        self._emit("INFO", "build_start", source=source)

    def build_end(self, *, vertices: int, edges: int, pruned: int, depth: int, wall_ms: float):
        self._emit(
            "INFO",
            "build_end",
            vertices=vertices,
            edges=edges,
            pruned=pruned,
            depth=depth,
            wall_ms=round(wall_ms, 3),
        )

    def nearest(self, *, lon: float, lat: float, vid: int, wall_ms: float):
        if self._sampled():
            self._emit("DEBUG", "nearest", lon=lon, lat=lat, vid=vid, wall_ms=round(wall_ms, 3))

    def route(self, *, start: int, dest: int, hops: int, length_mi: float, expanded: int, wall_ms: float):
        if self._sampled():
            self._emit(
                "DEBUG",
                "route",
                start=start,
                dest=dest,
                hops=hops,
                length_mi=round(length_mi, 6),
                expanded=expanded,
                wall_ms=round(wall_ms, 3),
            )

    def no_path(self, *, start: int, dest: int, wall_ms: float):
        self._emit("WARNING", "no_path", start=start, dest=dest, wall_ms=round(wall_ms, 3))

    def error(self, *, op: str, exc: BaseException, **kw):
        self._emit("ERROR", "query_error", op=op, error=str(exc), error_type=type(exc).__name__, **kw)
