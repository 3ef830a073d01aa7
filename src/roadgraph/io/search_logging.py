# io/search_logging.py
import json
import logging
import math
import sys

from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.io.recorder import Recorder
from roadgraph.sim.hooks import NoopHooks


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


def default_json_logger(name="roadgraph", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _coord(p):
    return [p.lat, p.lon] if isinstance(p, GeoPoint) else repr(p)


class SearchLogging(NoopHooks):
    """
    One place to shape and emit structured logs for graph searches.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self._searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "search": self._searches}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------- search lifecycle ----------------------

    def search_start(self, *, algorithm: str, start, goal, vertices: int):
        self._searches += 1
        self._emit(
            "INFO",
            "search_start",
            algorithm=algorithm,
            start=_coord(start),
            goal=_coord(goal),
            vertices=vertices,
        )

    def node_visited(self, point, *, algorithm: str, seq: int, frontier: int):
        if self.recorder:
            self.recorder.visit(point, algorithm=algorithm, seq=seq)
        if self.debug and (seq % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "node_visited",
                algorithm=algorithm,
                point=_coord(point),
                seq=seq,
                frontier=frontier,
            )

    def search_end(
        self, *, algorithm: str, found: bool, expanded: int, cost: float, wall_ms: float
    ):
        self._emit(
            "INFO",
            "search_end",
            algorithm=algorithm,
            found=found,
            expanded=expanded,
            cost=cost if math.isfinite(cost) else None,
            wall_ms=round(wall_ms, 3),
        )

    def error(self, *, algorithm: str, reason: str, **extra):
        self._emit(
            "ERROR",
            "search_error",
            algorithm=algorithm,
            reason=reason,
            **{k: _coord(v) for k, v in extra.items()},
        )
