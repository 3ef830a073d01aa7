# domain/synthetic.py
"""
Reproducible synthetic road networks for tests and benchmarks.

Road lengths are never shorter than the straight line between their ends, so
the euclidean heuristic stays admissible on every network built here.
"""

import numpy as np

from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.domain.graph import RoadGraph


def _detour(rng: np.random.Generator | None, detour: float) -> float:
    if rng is None or detour <= 0:
        return 1.0
    return 1.0 + float(rng.uniform(0.0, detour))


def _two_way(g: RoadGraph, a: GeoPoint, b: GeoPoint, name: str, category: str, rng, detour):
    base = a.distance(b)
    g.add_edge(a, b, name, category, base * _detour(rng, detour))
    g.add_edge(b, a, name, category, base * _detour(rng, detour))


def grid_network(
    rows: int,
    cols: int,
    spacing: float = 1.0,
    *,
    rng: np.random.Generator | None = None,
    detour: float = 0.0,
) -> RoadGraph:
    if rows < 1 or cols < 1:
        raise ValueError(f"grid needs at least one row and column, got {rows}x{cols}")
    if detour > 0 and rng is None:
        raise ValueError("detour > 0 needs an rng to draw detour factors")
    g = RoadGraph()
    pts = [[GeoPoint(r * spacing, c * spacing) for c in range(cols)] for r in range(rows)]
    for row in pts:
        for p in row:
            g.add_vertex(p)
    for r in range(rows):
        for c in range(cols):
            if c + 1 < cols:
                _two_way(g, pts[r][c], pts[r][c + 1], f"row {r}", "residential", rng, detour)
            if r + 1 < rows:
                _two_way(g, pts[r][c], pts[r + 1][c], f"col {c}", "residential", rng, detour)
    return g


def random_network(
    n: int,
    *,
    rng: np.random.Generator,
    radius: float,
    detour: float = 0.5,
) -> RoadGraph:
    """n uniform points in the unit square joined both ways when closer than ``radius``."""
    g = RoadGraph()
    xy = rng.uniform(0.0, 1.0, size=(n, 2))
    pts = [GeoPoint(float(x), float(y)) for x, y in xy]
    for p in pts:
        g.add_vertex(p)
    d = np.sqrt(((xy[:, None, :] - xy[None, :, :]) ** 2).sum(axis=-1))
    for i, j in zip(*np.nonzero(np.triu(d < radius, k=1))):
        _two_way(g, pts[i], pts[j], f"link {i}-{j}", "unclassified", rng, detour)
    return g
