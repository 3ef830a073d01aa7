from typing import Protocol, runtime_checkable

from roadgraph.domain.entities.geography import GeoPoint, Path


@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Compute a route between two points (snapped to the network or exact vertices).
      • Compute the network distance between points.
    Units: whatever the road lengths use (km for real maps).
    """

    def route(self, a: GeoPoint, b: GeoPoint) -> Path | None: ...
    def distance(self, a: GeoPoint, b: GeoPoint) -> float: ...


@runtime_checkable
class VisitSink(Protocol):
    def write(self, ev) -> None: ...
