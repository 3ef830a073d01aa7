# tests/domain/test_routers_and_networks.py
import math

import pytest

from roadgraph.app.protocols import RoutePlanner
from roadgraph.domain.entities.geography import GeoPoint
from roadgraph.domain.errors import PointNotInGraph
from roadgraph.domain.routers import NetworkRouter
from roadgraph.domain.synthetic import grid_network, random_network
from roadgraph.sim.rng import RNGRegistry

# ---------- Fixtures


@pytest.fixture
def grid():
    return grid_network(4, 6, spacing=2.0, rng=RNGRegistry(11).stream("detour"), detour=0.4)


# ---------- Synthetic networks


def test_grid_shape_and_two_way_roads():
    g = grid_network(3, 4)
    assert g.vertex_count() == 12
    # horizontal: 3 rows * 3 links, vertical: 2 * 4 links, both directions
    assert g.edge_count() == 2 * (3 * 3 + 2 * 4)
    a, b = GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)
    assert g.road(a, b).length == g.road(b, a).length == 1.0


def test_grid_lengths_never_shorter_than_straight_line(grid):
    for r in grid.roads():
        assert r.length >= r.start.distance(r.end)
        assert r.length <= r.start.distance(r.end) * 1.4 + 1e-12


def test_grid_detour_needs_rng():
    with pytest.raises(ValueError):
        grid_network(3, 3, detour=0.3)
    assert grid_network(3, 3, detour=0.0).edge_count() == 24


def test_grid_rejects_empty_shape():
    with pytest.raises(ValueError):
        grid_network(0, 3)


def test_random_network_is_reproducible():
    g1 = random_network(30, rng=RNGRegistry(5).stream("net"), radius=0.3)
    g2 = random_network(30, rng=RNGRegistry(5).stream("net"), radius=0.3)
    assert g1.vertices() == g2.vertices()
    assert sorted((r.start.lat, r.end.lat, r.length) for r in g1.roads()) == sorted(
        (r.start.lat, r.end.lat, r.length) for r in g2.roads()
    )


def test_random_network_only_links_nearby_points():
    g = random_network(25, rng=RNGRegistry(9).stream("net"), radius=0.25)
    assert g.vertex_count() == 25
    for r in g.roads():
        assert r.start.distance(r.end) < 0.25 + 1e-9
        assert g.road(r.end, r.start) is not None


# ---------- Router


def test_router_satisfies_protocol(grid):
    assert isinstance(NetworkRouter(grid), RoutePlanner)


@pytest.mark.parametrize("algorithm", ["dijkstra", "astar"])
def test_route_snaps_and_totals_lengths(grid, algorithm):
    router = NetworkRouter(grid, algorithm=algorithm)
    path = router.route(GeoPoint(0.3, -0.2), GeoPoint(5.7, 10.4))
    assert path.points[0] == GeoPoint(0.0, 0.0)
    assert path.points[-1] == GeoPoint(6.0, 10.0)
    assert path.total_length == pytest.approx(grid.path_length(path.points))
    best = grid.search(path.points[0], path.points[-1], "dijkstra")
    assert path.total_length == pytest.approx(best.cost)
    for r1, r2 in zip(path.roads, path.roads[1:]):
        assert r1.end == r2.start


def test_weighted_routers_agree_on_distance(grid):
    a, b = GeoPoint(0.0, 0.0), GeoPoint(6.0, 10.0)
    d1 = NetworkRouter(grid, algorithm="dijkstra").distance(a, b)
    d2 = NetworkRouter(grid, algorithm="astar").distance(a, b)
    assert d1 == pytest.approx(d2)


def test_bfs_router_counts_hops_not_length(grid):
    path = NetworkRouter(grid, algorithm="bfs").route(GeoPoint(0.0, 0.0), GeoPoint(6.0, 10.0))
    assert len(path.roads) == 3 + 5


def test_route_to_same_point(grid):
    path = NetworkRouter(grid).route(GeoPoint(2.1, 2.0), GeoPoint(1.9, 2.2))
    assert path.roads == []
    assert path.total_length == 0.0
    assert path.points == [GeoPoint(2.0, 2.0)]


def test_unreachable_route_and_distance():
    g = grid_network(2, 2)
    island = GeoPoint(50.0, 50.0)
    g.add_vertex(island)
    router = NetworkRouter(g)
    assert router.route(GeoPoint(0.0, 0.0), island) is None
    assert router.distance(GeoPoint(0.0, 0.0), island) == math.inf


def test_exact_routing_requires_known_points(grid):
    router = NetworkRouter(grid, snap=False)
    with pytest.raises(PointNotInGraph):
        router.route(GeoPoint(0.3, 0.0), GeoPoint(0.0, 2.0))
    assert router.route(GeoPoint(0.0, 0.0), GeoPoint(0.0, 2.0)) is not None


def test_router_rejects_unknown_algorithm(grid):
    with pytest.raises(ValueError):
        NetworkRouter(grid, algorithm="greedy")


def test_router_forwards_visits(grid):
    seen = []
    router = NetworkRouter(grid, algorithm="dijkstra", on_visit=seen.append)
    router.route(GeoPoint(0.0, 0.0), GeoPoint(0.0, 2.0))
    assert seen[0] == GeoPoint(0.0, 0.0)
    assert seen[-1] == GeoPoint(0.0, 2.0)
    assert len(seen) == len(set(seen))
