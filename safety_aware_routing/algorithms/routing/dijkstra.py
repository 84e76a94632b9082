"""
Dijkstra shortest-path search parameterised by an edge cost strategy.

One generic search (``shortest_path``) backs both route variants:

- ``find_fastest_path``: cost = physical distance
- ``find_safest_path``: cost = time-of-day safety-weighted distance

Unreachable or unknown nodes produce an empty ``RoutePath``, never an
exception: disconnected components are an expected outcome.
"""

import logging
from collections.abc import Sequence
from typing import Iterable, List, Optional

import networkx as nx

from ...config.routing_config import RoutingConfig
from ...config.weight_profile_factory import TimeOfDay, weight_profile_for_time
from ...data.distance_utils import calculate_route_distance
from ...mapping.network.graph_builder import Edge
from .cost_functions import EdgeCost, distance_cost, make_safety_cost

logger = logging.getLogger(__name__)


class RoutePath(Sequence):
    """
    Ordered node ids of a route, with the edges the search chose.

    Behaves like a read-only list of node ids. ``edges[i]`` is the edge
    traversed from ``nodes[i]`` to ``nodes[i + 1]`` which disambiguates
    parallel segments between the same pair of nodes.
    """

    def __init__(self, nodes: Iterable[str] = (), edges: Iterable[Edge] = (),
                 cost: float = 0.0, algorithm: str = 'dijkstra'):
        self.nodes: List[str] = list(nodes)
        self.edges: List[Edge] = list(edges)
        self.cost = cost
        self.algorithm = algorithm

    def __getitem__(self, index):
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other) -> bool:
        if isinstance(other, RoutePath):
            return self.nodes == other.nodes and self.edges == other.edges
        if isinstance(other, (list, tuple)):
            return self.nodes == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"RoutePath({self.nodes!r}, cost={self.cost:.4f}, algorithm={self.algorithm!r})"

    @property
    def segments(self):
        return [edge.segment for edge in self.edges]

    @property
    def total_distance(self) -> float:
        """Sum of the traversed edges' physical distances in km."""
        return calculate_route_distance(self.edges)


def _edge_weight(edge_cost: EdgeCost):
    """Adapt an edge cost to networkx's MultiGraph weight callback."""
    def weight(u, v, keyed_data):
        # parallel edges: the search uses the cheapest one
        return min(edge_cost(d['segment'], d['length']) for d in keyed_data.values())
    return weight


def _cheapest_edge(graph: nx.MultiGraph, u: str, v: str, edge_cost: EdgeCost) -> Edge:
    data = min(graph[u][v].values(), key=lambda d: edge_cost(d['segment'], d['length']))
    return Edge(v, data['segment'], data['length'])


def shortest_path(graph: nx.MultiGraph, source: str, target: str,
                  edge_cost: EdgeCost, algorithm: str = 'dijkstra') -> RoutePath:
    """
    Single-source Dijkstra that stops once ``target`` is finalised.

    Args:
        graph: Street graph
        source: Start node id
        target: Destination node id
        edge_cost: Strategy returning a non-negative cost per edge
        algorithm: Label stored on the result

    Returns:
        RoutePath with nodes, chosen edges and accumulated cost; empty when
        the target is unreachable or either node is unknown
    """
    if source not in graph or target not in graph:
        logger.warning(f"Unknown node in route request: {source} -> {target}")
        return RoutePath(algorithm=algorithm)

    try:
        cost, nodes = nx.single_source_dijkstra(
            graph, source, target=target, weight=_edge_weight(edge_cost)
        )
    except nx.NetworkXNoPath:
        logger.warning(f"No path found from {source} to {target}")
        return RoutePath(algorithm=algorithm)

    edges = [_cheapest_edge(graph, u, v, edge_cost) for u, v in zip(nodes, nodes[1:])]
    logger.debug(f"{algorithm} path: {len(nodes)} nodes, cost {cost:.4f}")
    return RoutePath(nodes, edges, cost, algorithm)


def find_fastest_path(graph: nx.MultiGraph, start_node: str, end_node: str) -> RoutePath:
    """Minimum-distance route between two nodes."""
    return shortest_path(graph, start_node, end_node, distance_cost, algorithm='fastest')


def find_safest_path(graph: nx.MultiGraph, start_node: str, end_node: str,
                     time: TimeOfDay = None,
                     config: Optional[RoutingConfig] = None) -> RoutePath:
    """
    Safety-weighted route between two nodes.

    Args:
        graph: Street graph
        start_node: Start node id
        end_node: Destination node id
        time: Hour of day (int/str) or datetime; None uses the default hour
        config: Routing configuration

    Returns:
        RoutePath, empty when unreachable
    """
    config = config or RoutingConfig()
    profile = weight_profile_for_time(time, config)
    logger.debug(f"Safest path using {profile.regime.value} profile")
    return shortest_path(graph, start_node, end_node,
                         make_safety_cost(profile, config), algorithm='safest')
