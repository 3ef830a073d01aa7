from collections.abc import Iterator
from dataclasses import dataclass, field

from roadgraph.domain.entities.geography import GeoPoint, Road


@dataclass(eq=False)
class Intersection:
    """
    Graph node: a point plus the roads leaving it, keyed by the neighbor they lead to.
    Hashed by identity; the graph guarantees one Intersection per GeoPoint.
    Holds no search state - costs live in the search that computes them.
    """

    point: GeoPoint
    neighbors: dict["Intersection", Road] = field(default_factory=dict)

    def has_neighbor(self, other: "Intersection") -> bool:
        return other in self.neighbors

    def add_neighbor(self, other: "Intersection", road: Road) -> bool:
        if other in self.neighbors:
            return False
        self.neighbors[other] = road
        return True

    def weighted_neighbors(self) -> Iterator[tuple["Intersection", float]]:
        for nbr, road in self.neighbors.items():
            yield nbr, road.length

    @property
    def degree(self) -> int:
        return len(self.neighbors)

    def __repr__(self) -> str:
        return f"Intersection({self.point.lat}, {self.point.lon}, out={self.degree})"
