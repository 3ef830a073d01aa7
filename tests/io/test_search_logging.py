# tests/io/test_search_logging.py
import io
import json
import logging

import pytest

from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.domain.errors import PointNotInGraph
from roadgraph.domain.synthetic import grid_network
from roadgraph.io.recorder import JsonlSink, MemorySink, NodeVisited, Recorder, RecordingHooks
from roadgraph.io.search_logging import SearchLogging, _JsonFormatter

LOGGER = "roadgraph.tests.io"


@pytest.fixture
def grid():
    return grid_network(3, 3)


@pytest.fixture
def logger():
    return logging.getLogger(LOGGER)


def test_lifecycle_records(grid, logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    hooks = SearchLogging(run_id="r-7", logger=logger)
    grid.search(GeoPoint(0.0, 0.0), GeoPoint(2.0, 2.0), "astar", hooks=hooks)

    start, end = caplog.records
    assert start.getMessage() == "search_start"
    assert start.extra["start"] == [0.0, 0.0]
    assert start.extra["goal"] == [2.0, 2.0]
    assert start.extra["vertices"] == 9
    assert end.getMessage() == "search_end"
    assert end.extra["found"] is True
    assert end.extra["cost"] == 4.0
    assert end.extra["search"] == 1
    assert end.extra["run_id"] == "r-7"


def test_no_path_cost_is_null(logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    g = grid_network(1, 2)
    island = GeoPoint(9.0, 9.0)
    g.add_vertex(island)
    g.search(GeoPoint(0.0, 0.0), island, "dijkstra", hooks=SearchLogging(logger=logger))
    assert caplog.records[-1].extra["found"] is False
    assert caplog.records[-1].extra["cost"] is None


def test_debug_visits_are_sampled(grid, logger, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    hooks = SearchLogging(logger=logger, debug=True, sample_every=2)
    out = grid.search(GeoPoint(0.0, 0.0), GeoPoint(2.0, 2.0), "bfs", hooks=hooks)
    visits = [r for r in caplog.records if r.getMessage() == "node_visited"]
    assert len(visits) == out.expanded // 2
    assert all(r.extra["seq"] % 2 == 0 for r in visits)


def test_visits_silent_without_debug(grid, logger, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    grid.search(GeoPoint(0.0, 0.0), GeoPoint(2.0, 2.0), "bfs", hooks=SearchLogging(logger=logger))
    assert [r.getMessage() for r in caplog.records] == ["search_start", "search_end"]


def test_unknown_point_logged_as_error(grid, logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    hooks = SearchLogging(logger=logger)
    with pytest.raises(PointNotInGraph):
        grid.search(GeoPoint(0.0, 0.0), GeoPoint(7.0, 7.0), "dijkstra", hooks=hooks)
    (rec,) = caplog.records
    assert rec.levelno == logging.ERROR
    assert rec.extra["reason"] == "point_not_in_graph"
    assert rec.extra["point"] == [7.0, 7.0]


def test_json_formatter_merges_extra():
    rec = logging.LogRecord(LOGGER, logging.INFO, __file__, 1, "search_end", None, None)
    rec.extra = {"found": True, "expanded": 3}
    payload = json.loads(_JsonFormatter().format(rec))
    assert payload == {
        "level": "INFO",
        "msg": "search_end",
        "logger": LOGGER,
        "found": True,
        "expanded": 3,
    }


# ---------- recorder


def test_recorder_via_logging_hooks(grid, logger):
    sink = MemorySink()
    hooks = SearchLogging(logger=logger, recorder=Recorder(sink))
    seen = []
    grid.search(GeoPoint(0.0, 0.0), GeoPoint(0.0, 2.0), "dijkstra", seen.append, hooks=hooks)
    assert sink.points() == seen
    assert [ev.seq for ev in sink.events] == list(range(1, len(seen) + 1))


def test_recorder_callback_numbers_visits(grid):
    sink = MemorySink()
    cb = Recorder(sink).callback("bfs")
    grid.bfs(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0), cb)
    assert sink.events[0] == NodeVisited("bfs", 1, 0.0, 0.0)
    assert sink.events[-1].seq == len(sink.events)


def test_jsonl_sink_writes_one_object_per_visit(grid):
    buf = io.StringIO()
    hooks = RecordingHooks(Recorder(JsonlSink(buf)))
    grid.search(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), "dijkstra", hooks=hooks)
    lines = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert lines[0] == {"algorithm": "dijkstra", "seq": 1, "lat": 0.0, "lon": 0.0}
    assert lines[-1]["lon"] == 1.0


class _Broken:
    def write(self, ev):
        raise RuntimeError("disk full")


def test_failing_sink_does_not_break_search(grid, caplog):
    caplog.set_level(logging.WARNING, logger="roadgraph.io.recorder")
    sink = MemorySink()
    hooks = RecordingHooks(Recorder(_Broken(), sink))
    out = grid.search(GeoPoint(0.0, 0.0), GeoPoint(2.0, 2.0), "dijkstra", hooks=hooks)
    assert out.found
    assert len(sink.events) == out.expanded
    assert any("_Broken" in r.getMessage() for r in caplog.records)
