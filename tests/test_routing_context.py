"""Tests for the routing context loader and the route optimizer."""

import threading
import time

import pytest

from safety_aware_routing.algorithms.optimization.route_optimizer import (
    NoNearbyNodesError,
    RouteOptimizer,
    anchor_coordinates
)
from safety_aware_routing.algorithms.optimization.routing_context import ContextLoader, RoutingContext
from safety_aware_routing.config.routing_config import RoutingConfig
from helpers import make_segment

A = (49.2800, -123.1200)
C = (49.2800, -123.1180)


@pytest.fixture
def grid_context(grid_segments):
    return RoutingContext.from_segments(grid_segments)


@pytest.fixture
def optimizer(grid_context):
    return RouteOptimizer(grid_context)


def test_context_stats(grid_context):
    stats = grid_context.stats()
    assert stats['nodes'] == 5
    assert stats['edges'] == 5
    assert stats['segments'] == 5
    assert stats['components'] == 1
    assert stats['bounds']['lat_min'] == pytest.approx(49.279)


def test_context_rejects_invalid_config(grid_segments):
    with pytest.raises(ValueError):
        RoutingContext.from_segments(grid_segments, RoutingConfig(min_edge_cost=-1))


def test_loader_builds_once_for_concurrent_callers(grid_segments):
    calls = []
    release = threading.Event()

    def build():
        calls.append(1)
        release.wait(5)
        return RoutingContext.from_segments(grid_segments)

    loader = ContextLoader(build)
    results = []
    threads = [threading.Thread(target=lambda: results.append(loader.get(timeout=10)))
               for _ in range(8)]
    for thread in threads:
        thread.start()
    time.sleep(0.1)
    assert not loader.is_loaded
    release.set()
    for thread in threads:
        thread.join(10)

    assert len(calls) == 1
    assert len(results) == 8
    assert all(r is results[0] for r in results)
    assert loader.is_loaded
    assert loader.get() is results[0]


def test_loader_retries_after_failure(grid_segments):
    attempts = []

    def build():
        attempts.append(1)
        if len(attempts) == 1:
            raise FileNotFoundError("bikeways.csv")
        return RoutingContext.from_segments(grid_segments)

    loader = ContextLoader(build)
    with pytest.raises(FileNotFoundError):
        loader.get()
    assert not loader.is_loaded

    context = loader.get()
    assert isinstance(context, RoutingContext)
    assert len(attempts) == 2


def test_loader_interrupted_build_releases_waiters(grid_segments):
    attempts = []
    started = threading.Event()
    release = threading.Event()

    def build():
        attempts.append(1)
        if len(attempts) == 1:
            started.set()
            release.wait(5)
            raise SystemExit(1)
        return RoutingContext.from_segments(grid_segments)

    loader = ContextLoader(build)
    outcome = []

    def builder():
        try:
            loader.get()
        except SystemExit:
            outcome.append('builder')

    def waiter():
        try:
            loader.get(timeout=10)
        except SystemExit:
            outcome.append('waiter')

    first = threading.Thread(target=builder)
    first.start()
    started.wait(5)
    second = threading.Thread(target=waiter)
    second.start()
    time.sleep(0.1)
    release.set()
    first.join(10)
    second.join(10)

    assert sorted(outcome) == ['builder', 'waiter']
    assert not loader.is_loaded
    assert isinstance(loader.get(timeout=10), RoutingContext)
    assert len(attempts) == 2


def test_anchor_coordinates():
    start, end = (1.0, 1.0), (2.0, 2.0)
    assert anchor_coordinates([], start, end) == []
    assert anchor_coordinates([(5.0, 5.0)], start, end) == [start, end]
    assert anchor_coordinates([(0, 0), (3, 3), (4, 4)], start, end) == [start, (3, 3), end]


def test_find_routes_night(optimizer):
    start = (49.28001, -123.12001)
    end = (49.27999, -123.11799)
    result = optimizer.find_routes(start, end, time_of_day=23)

    fastest = result['routes']['fastest']
    safest = result['routes']['safest']
    assert fastest.segment_ids == ['ab', 'bc']
    assert safest.segment_ids == ['ad', 'de', 'ec']
    assert fastest.coordinates[0] == start and fastest.coordinates[-1] == end
    assert safest.coordinates[0] == start and safest.coordinates[-1] == end
    assert safest.total_distance > fastest.total_distance

    metadata = result['metadata']
    assert metadata['start_node'] == 'node_0'
    assert metadata['end_node'] == 'node_2'
    assert metadata['hour'] == 23
    assert metadata['regime'] == 'night'


def test_route_summary(optimizer):
    safest = optimizer.find_routes(A, C, time_of_day="12")['routes']['safest']
    summary = safest.get_summary()
    assert summary['algorithm'] == 'safest'
    assert summary['node_count'] == 4
    assert summary['segment_count'] == 3
    assert summary['total_distance_km'] == pytest.approx(0.37)
    assert summary['min_safety_score'] == pytest.approx(32.4)


def test_same_point_route_is_anchored(optimizer):
    result = optimizer.find_routes(A, A, time_of_day=12)
    fastest = result['routes']['fastest']
    assert fastest.nodes == ['node_0']
    assert fastest.coordinates == [A, A]
    assert fastest.total_distance == 0


def test_disconnected_points_have_no_routes():
    context = RoutingContext.from_segments([
        make_segment('island_a', [(49.0, -123.0), (49.001, -123.0)]),
        make_segment('island_b', [(49.1, -123.1), (49.101, -123.1)]),
    ])
    result = RouteOptimizer(context).find_routes((49.0, -123.0), (49.1, -123.1))
    assert result['routes'] == {}
    assert result['metadata']['hour'] == 12


def test_empty_network_raises_no_nearby_nodes():
    optimizer = RouteOptimizer(RoutingContext.from_segments([]))
    with pytest.raises(NoNearbyNodesError):
        optimizer.find_routes(A, C)


def test_nearest_street(optimizer):
    info = optimizer.nearest_street((49.28005, -123.1195))
    assert info['street_name'] == 'ab street'
    assert info['point'][1] == pytest.approx(-123.1195)
    assert info['distance_km'] == pytest.approx(0.0056, abs=1e-3)


def test_find_routes_reports_nearest_streets(optimizer):
    start = (49.28005, -123.1193)
    metadata = optimizer.find_routes(start, C, time_of_day=8)['metadata']

    start_street = metadata['start_street']
    assert start_street['street_name'] == 'ab street'
    assert start_street['point'] == pytest.approx((49.28, -123.1193))
    assert start_street['distance_km'] == pytest.approx(0.0056, abs=1e-3)

    assert metadata['end_street']['street_name'] in ('bc street', 'ec street')
    assert metadata['end_street']['distance_km'] == 0
