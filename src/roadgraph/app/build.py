# roadgraph/app/build.py
import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field

from roadgraph.config.models import RoadMapModel, ScenarioModel
from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.domain.errors import RejectReason
from roadgraph.domain.graph import RoadGraph
from roadgraph.domain.routers import NetworkRouter
from roadgraph.io.recorder import Recorder, RecordingHooks
from roadgraph.io.search_logging import SearchLogging, default_json_logger
from roadgraph.runtime.registries import make_route_planner
from roadgraph.sim.hooks import NoopHooks, SearchHooks


@dataclass
class LoadReport:
    vertices_added: int = 0
    edges_added: int = 0
    rejected: Counter = field(default_factory=Counter)  # RejectReason -> count

    @property
    def edges_rejected(self) -> int:
        return sum(self.rejected.values())


@dataclass
class App:
    graph: RoadGraph
    router: NetworkRouter
    hooks: SearchHooks
    recorder: Recorder | None
    report: LoadReport


def load_road_map(graph: RoadGraph, road_map: RoadMapModel) -> LoadReport:
    """Vertices first, then roads; bad roads are counted, not raised."""
    report = LoadReport()
    for lat, lon in road_map.intersections:
        report.vertices_added += graph.add_vertex(GeoPoint(lat, lon))
    for r in road_map.roads:
        res = graph.add_edge(
            GeoPoint(*r.start),
            GeoPoint(*r.end),
            r.name,
            r.category,
            r.length,
            shape=[GeoPoint(*c) for c in r.shape],
        )
        if res:
            report.edges_added += 1
        else:
            report.rejected[res.reason] += 1
    return report


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    logger: logging.Logger | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Graph
    graph = RoadGraph()
    report = load_road_map(graph, model.road_map)

    # 2) Hooks
    if use_logging:
        log = logger or default_json_logger(level=model.log.level)
        hooks: SearchHooks = SearchLogging(
            run_id=model.run_id,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            logger=log,
            recorder=recorder,
        )
        extra = {
            "run_id": model.run_id,
            "vertices": graph.vertex_count(),
            "edges": graph.edge_count(),
            "rejected": {RejectReason(k).value: v for k, v in report.rejected.items()},
        }
        level = logging.WARNING if report.edges_rejected else logging.INFO
        log.log(level, "road_map_loaded", extra={"extra": extra})
    else:
        hooks = RecordingHooks(recorder) if recorder else NoopHooks()

    # 3) Router
    router = make_route_planner(model.search, graph=graph, hooks=hooks)

    return App(graph, router, hooks, recorder, report)
