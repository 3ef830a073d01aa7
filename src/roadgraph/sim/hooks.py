# sim/hooks.py
from typing import Protocol

from roadgraph.domain.entities.geography import GeoPoint


class SearchHooks(Protocol):
    def search_start(self, *, algorithm: str, start: GeoPoint, goal: GeoPoint, vertices: int): ...
    def node_visited(self, point: GeoPoint, *, algorithm: str, seq: int, frontier: int): ...
    def search_end(
        self, *, algorithm: str, found: bool, expanded: int, cost: float, wall_ms: float
    ): ...
    def error(self, *, algorithm: str, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def node_visited(self, *_, **__):
        pass

    def search_end(self, **_):
        pass

    def error(self, *_, **__):
        pass
