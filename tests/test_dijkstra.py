"""Tests for the fastest and safety-weighted shortest-path searches."""

import math

import pytest

from safety_aware_routing.algorithms.routing.cost_functions import distance_cost
from safety_aware_routing.algorithms.routing.dijkstra import (
    RoutePath,
    find_fastest_path,
    find_safest_path,
    shortest_path
)
from safety_aware_routing.config.routing_config import RoutingConfig


def test_same_start_and_end(grid_graph):
    path = find_fastest_path(grid_graph, 'node_2', 'node_2')
    assert path == ['node_2']
    assert path.cost == 0
    assert path.edges == []

    assert find_safest_path(grid_graph, 'node_2', 'node_2', time=23) == ['node_2']


def test_fastest_takes_the_short_way(grid_graph):
    path = find_fastest_path(grid_graph, 'node_0', 'node_2')
    assert path == ['node_0', 'node_1', 'node_2']
    assert [s.id for s in path.segments] == ['ab', 'bc']
    assert path.cost == pytest.approx(0.14)
    assert path.total_distance == pytest.approx(0.14)
    assert path.algorithm == 'fastest'


def test_safest_takes_the_lit_detour(grid_graph):
    for hour in (2, 12, 22):
        path = find_safest_path(grid_graph, 'node_0', 'node_2', time=hour)
        assert path == ['node_0', 'node_3', 'node_4', 'node_2']
        assert path.total_distance == pytest.approx(0.37)
        assert path.algorithm == 'safest'


def test_routes_are_reversible(grid_graph):
    forward = find_fastest_path(grid_graph, 'node_0', 'node_2')
    backward = find_fastest_path(grid_graph, 'node_2', 'node_0')
    assert list(backward) == list(reversed(forward))
    assert backward.cost == pytest.approx(forward.cost)


def test_path_cost_is_sum_of_edge_costs(grid_graph):
    path = find_safest_path(grid_graph, 'node_0', 'node_2', time=22)
    night_safe = 0.001 + 0.11 * math.exp(-48 / 20)
    expected = 2 * night_safe + 0.001 + 0.15 * math.exp(-48 / 20)
    assert path.cost == pytest.approx(expected)


def test_parallel_edges_pick_by_cost(parallel_graph):
    night = find_safest_path(parallel_graph, 'node_0', 'node_1', time=22)
    fastest = find_fastest_path(parallel_graph, 'node_0', 'node_1')

    assert list(night) == list(fastest) == ['node_0', 'node_1']
    assert night.edges[0].segment.id == 'safe'
    assert fastest.edges[0].segment.id == 'risky'
    assert night.cost == pytest.approx(0.001 + 0.12 * math.exp(-2.4))
    assert fastest.cost == pytest.approx(0.10)


def test_night_costs_risky_streets_more_than_day(parallel_graph):
    day = find_safest_path(parallel_graph, 'node_0', 'node_1', time=12)
    night = find_safest_path(parallel_graph, 'node_0', 'node_1', time=22)
    assert day.edges[0].segment.id == night.edges[0].segment.id == 'safe'
    assert day.cost != night.cost


def test_disconnected_nodes_give_empty_paths(disconnected_graph):
    assert find_fastest_path(disconnected_graph, 'node_0', 'node_2') == []
    safest = find_safest_path(disconnected_graph, 'node_0', 'node_2', time=1)
    assert safest == []
    assert len(safest) == 0
    assert not safest


def test_unknown_nodes_give_empty_path(grid_graph):
    assert find_fastest_path(grid_graph, 'node_0', 'node_99') == []
    assert find_safest_path(grid_graph, 'missing', 'node_0') == []


def test_custom_cost_strategy(grid_graph):
    # make the risky street free
    def cost(segment, distance):
        return 0.0 if segment.id == 'ab' else distance_cost(segment, distance)

    path = shortest_path(grid_graph, 'node_0', 'node_2', cost)
    assert path == ['node_0', 'node_1', 'node_2']
    assert path.cost == pytest.approx(0.07)
    assert path.algorithm == 'dijkstra'


def test_legacy_bonus_mode_still_routes(grid_graph):
    config = RoutingConfig.create_legacy_config()
    path = find_safest_path(grid_graph, 'node_0', 'node_2', time=22, config=config)
    # safe edges collapse onto the 0.1 floor, risky ones pay for their negative score
    assert path == ['node_0', 'node_3', 'node_4', 'node_2']
    assert path.cost == pytest.approx(0.3)


def test_route_path_behaves_like_a_sequence():
    path = RoutePath(['a', 'b', 'c'])
    assert path[0] == 'a'
    assert path[-1] == 'c'
    assert list(path) == ['a', 'b', 'c']
    assert 'b' in path
    assert path == ('a', 'b', 'c')
    assert path != ['a', 'c']
