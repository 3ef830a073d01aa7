# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict, dataclass
from itertools import count

from roadgraph.app.protocols import VisitSink
from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.sim.hooks import NoopHooks

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeVisited:
    algorithm: str
    seq: int  # 1-based finalization order within one search
    lat: float
    lon: float


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ev) -> None:
        self.fp.write(json.dumps(asdict(ev)) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)

    def points(self) -> list[GeoPoint]:
        return [GeoPoint(ev.lat, ev.lon) for ev in self.events]


class Recorder:
    """Fans node-visit events out to sinks; a failing sink never breaks a search."""

    def __init__(self, *sinks: VisitSink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                log.warning("sink %s failed on %r", type(s).__name__, ev, exc_info=True)

    def visit(self, point: GeoPoint, *, algorithm: str, seq: int) -> None:
        self.emit(NodeVisited(algorithm, seq, point.lat, point.lon))

    def callback(self, algorithm: str = "search"):
        """Plain ``on_visit`` callable numbering visits itself; use one per search."""
        seq = count(1)
        return lambda point: self.visit(point, algorithm=algorithm, seq=next(seq))


class RecordingHooks(NoopHooks):
    """Search hooks that only feed a Recorder (no log output)."""

    def __init__(self, recorder: Recorder):
        self.recorder = recorder

    def node_visited(self, point, *, algorithm: str, seq: int, frontier: int):
        self.recorder.visit(point, algorithm=algorithm, seq=seq)
