import math

from roadgraph.app.protocols import RoutePlanner
from roadgraph.domain.entities.geography import GeoPoint, Path
from roadgraph.domain.graph import RoadGraph
from roadgraph.domain.search.heuristics import Heuristic
from roadgraph.domain.search.traversal import Visitor
from roadgraph.sim.hooks import SearchHooks

ALGORITHMS = ("bfs", "dijkstra", "astar")


class NetworkRouter(RoutePlanner):
    def __init__(
        self,
        graph: RoadGraph,
        algorithm: str = "astar",
        heuristic: Heuristic | None = None,
        hooks: SearchHooks | None = None,
        snap: bool = True,
        on_visit: Visitor | None = None,
    ):
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown search algorithm {algorithm!r}")
        self.G, self.algorithm, self.h = graph, algorithm, heuristic
        self.hooks, self.snap, self.on_visit = hooks, snap, on_visit

    def route(self, a: GeoPoint, b: GeoPoint) -> Path | None:
        na, nb = (self.G.nearest_vertex(a), self.G.nearest_vertex(b)) if self.snap else (a, b)
        out = self.G.search(
            na, nb, self.algorithm, self.on_visit, hooks=self.hooks, heuristic=self.h
        )
        if out.path is None:
            return None
        roads = [self.G.road(u, v) for u, v in zip(out.path, out.path[1:])]
        return Path(roads, sum(r.length for r in roads), origin=na)

    def distance(self, a: GeoPoint, b: GeoPoint) -> float:
        p = self.route(a, b)
        return math.inf if p is None else p.total_length
