# main.py
from roadgraph.app.build import build
from roadgraph.domain.entities.geography import GeoPoint


def run(cfg: dict, start: tuple[float, float], goal: tuple[float, float]):
    app = build(cfg)
    path = app.router.route(GeoPoint(*start), GeoPoint(*goal))
    if path is None:
        print("no path")
        return None
    print(" -> ".join(f"({p.lat}, {p.lon})" for p in path.points), f"[{path.total_length:g}]")
    return path


if __name__ == "__main__":
    demo = {
        "name": "triangle",
        "search": {"algorithm": "dijkstra"},
        "road_map": {
            "intersections": [(0, 0), (0, 1), (1, 1)],
            "roads": [
                {"start": (0, 0), "end": (0, 1), "name": "A St", "category": "res", "length": 1},
                {"start": (0, 1), "end": (1, 1), "name": "B St", "category": "res", "length": 1},
                {"start": (0, 0), "end": (1, 1), "name": "Diag", "category": "pri", "length": 5},
            ],
        },
    }
    run(demo, (0, 0), (1, 1))
