# runtime/registries.py
from collections.abc import Callable

from roadgraph.config.models import (
    HeuristicEuclideanModel,
    HeuristicHaversineModel,
    HeuristicUnion,
    HeuristicZeroModel,
    SearchModel,
)
from roadgraph.domain.graph import RoadGraph
from roadgraph.domain.routers import NetworkRouter
from roadgraph.domain.search import heuristics
from roadgraph.domain.search.heuristics import Heuristic
from roadgraph.domain.search.traversal import Visitor
from roadgraph.sim.hooks import SearchHooks

HeuristicFactory = Callable[[HeuristicUnion], Heuristic]

_heuristic_registry: dict[str, HeuristicFactory] = {}


# ------------------- Heuristic registry ---------------------------


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_heuristic(cfg: HeuristicUnion) -> Heuristic:
    try:
        factory = _heuristic_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {cfg.kind!r}") from None
    return factory(cfg)


@register_heuristic("euclidean")
def _make_euclidean(cfg: HeuristicEuclideanModel):
    return heuristics.euclidean


@register_heuristic("haversine")
def _make_haversine(cfg: HeuristicHaversineModel):
    return heuristics.haversine


@register_heuristic("zero")
def _make_zero(cfg: HeuristicZeroModel):
    return heuristics.zero


# --------------------- Route planner  ---------------------


def make_route_planner(
    cfg: SearchModel,
    *,
    graph: RoadGraph,
    hooks: SearchHooks | None = None,
    on_visit: Visitor | None = None,
) -> NetworkRouter:
    h = make_heuristic(cfg.heuristic) if cfg.algorithm == "astar" else None
    return NetworkRouter(
        graph, algorithm=cfg.algorithm, heuristic=h, hooks=hooks, snap=cfg.snap, on_visit=on_visit
    )
