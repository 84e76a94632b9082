"""
Street graph construction from street segments.

Segment endpoints are canonicalised by rounding to a fixed precision so that
segments sharing a physical endpoint meet at one node. Each segment becomes a
single undirected edge of an ``nx.MultiGraph`` keyed by the segment id, which
gives one traversable half in each direction with the same weight and segment.
Parallel segments between the same two nodes are kept as parallel edges.

Node attributes follow the OSMnx convention: ``y`` = latitude, ``x`` = longitude.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

import networkx as nx

from ...config.routing_config import RoutingConfig
from ...data.models import Coordinate, StreetSegment
from ..enrichment.spatial_grid import grid_key

logger = logging.getLogger(__name__)


class Edge(NamedTuple):
    """One directed half of a bidirectional street connection."""
    target: str
    segment: StreetSegment
    distance: float


def canonical_node_key(coord: Coordinate, precision: int = 6) -> str:
    """Key identifying the node a coordinate collapses to."""
    return grid_key(coord, precision)


def node_coordinates(graph: nx.MultiGraph, node_id: str) -> Coordinate:
    data = graph.nodes[node_id]
    return (data['y'], data['x'])


def build_graph(segments: Iterable[StreetSegment],
                config: Optional[RoutingConfig] = None) -> nx.MultiGraph:
    """
    Build the bidirectional street graph.

    Node ids are allocated as ``node_<n>`` the first time a canonical key is
    seen, in segment order. The first coordinate seen for a key becomes the
    node's coordinate. Edge weight ``length`` is the segment length in km.

    Args:
        segments: Street segments in load order
        config: Routing configuration (node precision)

    Returns:
        Undirected MultiGraph; ``graph.graph['node_keys']`` maps canonical
        keys to node ids
    """
    config = config or RoutingConfig()
    graph = nx.MultiGraph(name='street_network')
    node_keys = {}

    def _node_for(coord: Coordinate) -> str:
        key = canonical_node_key(coord, config.node_precision)
        node_id = node_keys.get(key)
        if node_id is None:
            node_id = f"node_{len(node_keys)}"
            node_keys[key] = node_id
            graph.add_node(node_id, y=coord[0], x=coord[1], key=key)
        return node_id

    segment_count = 0
    for segment in segments:
        start_node = _node_for(segment.start)
        end_node = _node_for(segment.end)
        graph.add_edge(
            start_node,
            end_node,
            key=segment.id,
            segment=segment,
            length=segment.length
        )
        segment_count += 1

    graph.graph['node_keys'] = node_keys
    graph.graph['node_precision'] = config.node_precision

    logger.info(f"Built graph with {graph.number_of_nodes()} nodes, "
                f"{graph.number_of_edges()} edges from {segment_count} segments")
    # queries only read the graph
    return nx.freeze(graph)


def neighbors(graph: nx.MultiGraph, node_id: str) -> List[Edge]:
    """
    Outgoing edges of a node in insertion order.

    A self-loop segment appears twice, once per direction.
    """
    edges = []
    for target, keyed in graph.adj[node_id].items():
        for data in keyed.values():
            edge = Edge(target, data['segment'], data['length'])
            edges.append(edge)
            if target == node_id:
                edges.append(edge)
    return edges


def connecting_edges(graph: nx.MultiGraph, source: str, target: str) -> List[Edge]:
    """All parallel edges from ``source`` to ``target``, in insertion order."""
    if not graph.has_node(source) or not graph.has_edge(source, target):
        return []
    return [Edge(target, data['segment'], data['length'])
            for data in graph[source][target].values()]


def lookup_node(graph: nx.MultiGraph, coord: Coordinate) -> Optional[str]:
    """Node id whose canonical key matches ``coord`` exactly, if any."""
    precision = graph.graph.get('node_precision', 6)
    return graph.graph.get('node_keys', {}).get(canonical_node_key(coord, precision))


def graph_stats(graph: nx.MultiGraph) -> dict:
    """Node/edge counts and connectivity summary."""
    components: Tuple = ()
    if graph.number_of_nodes():
        components = tuple(nx.connected_components(graph))
    return {
        'nodes': graph.number_of_nodes(),
        'edges': graph.number_of_edges(),
        'components': len(components),
        'largest_component': max((len(c) for c in components), default=0)
    }
