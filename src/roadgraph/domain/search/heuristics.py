# domain/search/heuristics.py
from collections.abc import Callable

from roadgraph.domain.entities.geography import GeoPoint

Heuristic = Callable[[GeoPoint, GeoPoint], float]


def euclidean(p: GeoPoint, goal: GeoPoint) -> float:
    return p.distance(goal)


def haversine(p: GeoPoint, goal: GeoPoint) -> float:
    # admissible only when road lengths are kilometres
    return p.haversine_km(goal)


def zero(p: GeoPoint, goal: GeoPoint) -> float:
    return 0.0
