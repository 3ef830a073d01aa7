# domain/search/traversal.py
"""
Graph traversal: breadth-first search plus one weighted skeleton shared by
Dijkstra and A*.

Every piece of per-search state (cost, visited, predecessors) is owned by the
call, so searches never leak into each other and need no reset step.
"""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.domain.entities.intersection import Intersection
from roadgraph.domain.errors import PointNotInGraph
from roadgraph.domain.search.frontier import Frontier
from roadgraph.domain.search.heuristics import Heuristic, euclidean
from roadgraph.sim.hooks import NoopHooks, SearchHooks

if TYPE_CHECKING:
    from roadgraph.domain.graph import RoadGraph

Visitor = Callable[[GeoPoint], None]
Priority = Callable[[Intersection, float], float]


@dataclass
class SearchOutcome:
    path: list[GeoPoint] | None
    cost: float  # summed length (weighted) or hop count (bfs); inf when not found
    expanded: int  # nodes finalized

    @property
    def found(self) -> bool:
        return self.path is not None


def reconstruct_path(came_from: dict[GeoPoint, GeoPoint], goal: GeoPoint) -> list[GeoPoint]:
    path = [goal]
    cur = goal
    while cur in came_from:
        cur = came_from[cur]
        path.append(cur)
    path.reverse()
    return path


def _resolve(graph: RoadGraph, start, goal, algorithm: str, hooks: SearchHooks):
    try:
        return graph.intersection(start), graph.intersection(goal)
    except PointNotInGraph as exc:
        hooks.error(algorithm=algorithm, reason="point_not_in_graph", point=exc.point)
        raise


def _finish(
    hooks: SearchHooks, algorithm: str, outcome: SearchOutcome, t0: float
) -> SearchOutcome:
    hooks.search_end(
        algorithm=algorithm,
        found=outcome.found,
        expanded=outcome.expanded,
        cost=outcome.cost,
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return outcome


def bfs(
    graph: RoadGraph,
    start: GeoPoint,
    goal: GeoPoint,
    on_visit: Visitor | None = None,
    *,
    hooks: SearchHooks | None = None,
) -> SearchOutcome:
    """Fewest-hop path; road lengths are ignored."""
    hooks = hooks or NoopHooks()
    src, dst = _resolve(graph, start, goal, "bfs", hooks)
    t0 = time.perf_counter()
    hooks.search_start(algorithm="bfs", start=start, goal=goal, vertices=graph.vertex_count())

    visited = {src}
    came_from: dict[GeoPoint, GeoPoint] = {}
    queue = deque([src])
    expanded = 0
    while queue:
        cur = queue.popleft()
        expanded += 1
        if on_visit is not None:
            on_visit(cur.point)
        hooks.node_visited(cur.point, algorithm="bfs", seq=expanded, frontier=len(queue))

        if cur is dst:
            path = reconstruct_path(came_from, dst.point)
            return _finish(hooks, "bfs", SearchOutcome(path, len(path) - 1, expanded), t0)

        for nbr in cur.neighbors:
            if nbr not in visited:
                visited.add(nbr)
                came_from[nbr.point] = cur.point
                queue.append(nbr)

    return _finish(hooks, "bfs", SearchOutcome(None, math.inf, expanded), t0)


def weighted_search(
    graph: RoadGraph,
    start: GeoPoint,
    goal: GeoPoint,
    priority: Priority,
    on_visit: Visitor | None = None,
    *,
    hooks: SearchHooks | None = None,
    algorithm: str = "weighted",
) -> SearchOutcome:
    """
    Best-first search ordered by ``priority(node, cost)``.

    Stale frontier entries are never removed; they are skipped when popped
    because their node is already finalized.
    """
    hooks = hooks or NoopHooks()
    src, dst = _resolve(graph, start, goal, algorithm, hooks)
    t0 = time.perf_counter()
    hooks.search_start(algorithm=algorithm, start=start, goal=goal, vertices=graph.vertex_count())

    cost: dict[Intersection, float] = {src: 0.0}
    came_from: dict[GeoPoint, GeoPoint] = {}
    visited: set[Intersection] = set()
    frontier = Frontier()
    frontier.push(src, 0.0, priority(src, 0.0))

    expanded = 0
    while frontier:
        cur = frontier.pop().node
        if cur in visited:
            continue
        visited.add(cur)
        expanded += 1
        if on_visit is not None:
            on_visit(cur.point)
        hooks.node_visited(cur.point, algorithm=algorithm, seq=expanded, frontier=len(frontier))

        if cur is dst:
            path = reconstruct_path(came_from, dst.point)
            return _finish(hooks, algorithm, SearchOutcome(path, cost[dst], expanded), t0)

        g = cost[cur]
        for nbr, length in cur.weighted_neighbors():
            if nbr in visited:
                continue
            candidate = g + length
            if candidate < cost.get(nbr, math.inf):
                cost[nbr] = candidate
                came_from[nbr.point] = cur.point
                frontier.push(nbr, candidate, priority(nbr, candidate))

    return _finish(hooks, algorithm, SearchOutcome(None, math.inf, expanded), t0)


def dijkstra(
    graph: RoadGraph,
    start: GeoPoint,
    goal: GeoPoint,
    on_visit: Visitor | None = None,
    *,
    hooks: SearchHooks | None = None,
) -> SearchOutcome:
    return weighted_search(
        graph, start, goal, lambda node, g: g, on_visit, hooks=hooks, algorithm="dijkstra"
    )


def a_star(
    graph: RoadGraph,
    start: GeoPoint,
    goal: GeoPoint,
    on_visit: Visitor | None = None,
    *,
    hooks: SearchHooks | None = None,
    heuristic: Heuristic | None = None,
) -> SearchOutcome:
    """Dijkstra ordered by cost plus ``heuristic``; optimal when the heuristic is admissible."""
    h = heuristic or euclidean
    return weighted_search(
        graph,
        start,
        goal,
        lambda node, g: g + h(node.point, goal),
        on_visit,
        hooks=hooks,
        algorithm="astar",
    )
