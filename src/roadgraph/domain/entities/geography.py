import math
from dataclasses import dataclass, field

EARTH_RADIUS_KM = 6371.0


# Core geometry types used by the road graph
@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    def distance(self, other: "GeoPoint") -> float:
        """Straight-line distance in coordinate units (default A* heuristic)."""
        return math.hypot(other.lat - self.lat, other.lon - self.lon)

    def haversine_km(self, other: "GeoPoint") -> float:
        """Great-circle distance in kilometres."""
        phi1, phi2 = math.radians(self.lat), math.radians(other.lat)
        dphi = phi2 - phi1
        dlmb = math.radians(other.lon - self.lon)
        a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


@dataclass(frozen=True)
class Road:
    start: GeoPoint
    end: GeoPoint
    shape: tuple[GeoPoint, ...]  # intermediate geometry, not used by search
    name: str
    category: str  # free-form road type ("residential", "primary", ...)
    length: float  # edge weight, same units as the map (km for real maps)


@dataclass
class Path:
    roads: list[Road] = field(default_factory=list)
    total_length: float = 0.0
    origin: GeoPoint | None = None  # set when the path has no roads (a == b)

    @property
    def points(self) -> list[GeoPoint]:
        if not self.roads:
            return [] if self.origin is None else [self.origin]
        return [self.roads[0].start, *(r.end for r in self.roads)]
