# domain/graph.py
import math
import numbers
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from roadgraph.domain.entities.geography import GeoPoint, Road
from roadgraph.domain.entities.intersection import Intersection
from roadgraph.domain.errors import PointNotInGraph, RejectReason
from roadgraph.domain.search import traversal
from roadgraph.domain.search.heuristics import Heuristic
from roadgraph.domain.search.traversal import SearchOutcome, Visitor
from roadgraph.sim.hooks import SearchHooks


@dataclass(frozen=True)
class EdgeInsert:
    accepted: bool
    reason: RejectReason | None = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = EdgeInsert(True)


class RoadGraph:
    """
    Directed road network: one Intersection per GeoPoint, roads stored on the
    Intersection they leave from.

    Edge insertion is permissive: malformed or duplicate roads are skipped and
    reported through the returned EdgeInsert rather than raised, so bulk loads
    of noisy map data keep going.
    """

    def __init__(self):
        self._index: dict[GeoPoint, Intersection] = {}
        self._order: list[GeoPoint] | None = None
        self._coords: np.ndarray | None = None

    # ------------------ construction ------------------------

    def add_vertex(self, point: GeoPoint | None) -> bool:
        if point is None or point in self._index:
            return False
        self._index[point] = Intersection(point)
        self._order = self._coords = None
        return True

    def add_edge(
        self,
        start: GeoPoint | None,
        end: GeoPoint | None,
        name: str | None,
        category: str | None,
        length: float | None,
        shape: Iterable[GeoPoint] = (),
    ) -> EdgeInsert:
        if start is None or end is None or name is None or category is None or length is None:
            return EdgeInsert(False, RejectReason.MISSING_FIELD)
        if not isinstance(length, numbers.Real) or isinstance(length, bool):
            return EdgeInsert(False, RejectReason.INVALID_LENGTH)
        if not math.isfinite(length) or length < 0:
            return EdgeInsert(False, RejectReason.INVALID_LENGTH)
        src, dst = self._index.get(start), self._index.get(end)
        if src is None or dst is None:
            return EdgeInsert(False, RejectReason.UNKNOWN_ENDPOINT)
        if src.has_neighbor(dst):
            return EdgeInsert(False, RejectReason.DUPLICATE)
        src.add_neighbor(dst, Road(start, end, tuple(shape), name, category, float(length)))
        return ACCEPTED

    # ------------------ inspection --------------------------

    def vertex_count(self) -> int:
        return len(self._index)

    def edge_count(self) -> int:
        return sum(node.degree for node in self._index.values())

    def vertices(self) -> set[GeoPoint]:
        return set(self._index)

    def roads(self) -> Iterator[Road]:
        for node in self._index.values():
            yield from node.neighbors.values()

    def has_vertex(self, point: GeoPoint) -> bool:
        return point in self._index

    def intersection(self, point: GeoPoint) -> Intersection:
        try:
            return self._index[point]
        except (KeyError, TypeError):
            raise PointNotInGraph(point) from None

    def neighbors(self, point: GeoPoint) -> list[GeoPoint]:
        return [nbr.point for nbr in self.intersection(point).neighbors]

    def road(self, start: GeoPoint, end: GeoPoint) -> Road | None:
        src, dst = self._index.get(start), self._index.get(end)
        if src is None or dst is None:
            return None
        return src.neighbors.get(dst)

    def path_length(self, points: Sequence[GeoPoint]) -> float:
        total = 0.0
        for a, b in zip(points, points[1:]):
            r = self.road(a, b)
            if r is None:
                raise ValueError(f"no road from {a} to {b}")
            total += r.length
        return total

    def nearest_vertex(self, point: GeoPoint) -> GeoPoint:
        if not self._index:
            raise ValueError("graph has no vertices")
        if self._coords is None:
            self._order = list(self._index)
            self._coords = np.array([(p.lat, p.lon) for p in self._order], dtype=float)
        d2 = ((self._coords - np.array([point.lat, point.lon])) ** 2).sum(axis=1)
        return self._order[int(np.argmin(d2))]

    # ------------------ search -----------------------------

    def search(
        self,
        start: GeoPoint,
        goal: GeoPoint,
        algorithm: str = "dijkstra",
        on_visit: Visitor | None = None,
        *,
        hooks: SearchHooks | None = None,
        heuristic: Heuristic | None = None,
    ) -> SearchOutcome:
        if algorithm == "bfs":
            return traversal.bfs(self, start, goal, on_visit, hooks=hooks)
        if algorithm == "dijkstra":
            return traversal.dijkstra(self, start, goal, on_visit, hooks=hooks)
        if algorithm == "astar":
            return traversal.a_star(self, start, goal, on_visit, hooks=hooks, heuristic=heuristic)
        raise ValueError(f"Unknown search algorithm {algorithm!r}")

    def bfs(self, start, goal, on_visit: Visitor | None = None) -> list[GeoPoint] | None:
        return traversal.bfs(self, start, goal, on_visit).path

    def dijkstra(self, start, goal, on_visit: Visitor | None = None) -> list[GeoPoint] | None:
        return traversal.dijkstra(self, start, goal, on_visit).path

    def a_star(
        self, start, goal, on_visit: Visitor | None = None, heuristic: Heuristic | None = None
    ) -> list[GeoPoint] | None:
        return traversal.a_star(self, start, goal, on_visit, heuristic=heuristic).path
