"""
Conversion of node-id routes back into continuous coordinate polylines.
"""

import logging
from typing import List, Optional, Sequence

import networkx as nx

from ...data.distance_utils import coordinate_distance
from ...data.models import Coordinate
from ...mapping.network.graph_builder import Edge, connecting_edges, node_coordinates

logger = logging.getLogger(__name__)

# km; closer than this counts as already ending at the final node
END_TOLERANCE_KM = 0.001


def _hop_edge(graph: nx.MultiGraph, path: Sequence[str], index: int) -> Optional[Edge]:
    """Edge used for hop ``index``: the one the search chose, else the first connecting one."""
    chosen = getattr(path, 'edges', None)
    if chosen and index < len(chosen):
        return chosen[index]
    edges = connecting_edges(graph, path[index], path[index + 1])
    return edges[0] if edges else None


def path_to_coordinates(path: Sequence[str], graph: nx.MultiGraph) -> List[Coordinate]:
    """
    Expand a node path into the full street geometry it follows.

    Each hop contributes its segment's coordinates, reversed when the segment
    was digitised in the opposite direction; shared endpoints are emitted
    once. A hop with no connecting segment becomes a straight connector.
    The result always ends at the last node's coordinate.

    Args:
        path: Ordered node ids (a ``RoutePath`` or plain list)
        graph: Street graph the path was computed on

    Returns:
        Ordered (lat, lon) list; empty for an empty path, the node's own
        coordinate for a single-node path
    """
    if not path:
        return []
    if len(path) == 1:
        return [node_coordinates(graph, path[0])] if path[0] in graph else []

    full_path: List[Coordinate] = []

    for i in range(len(path) - 1):
        current_node, next_node = path[i], path[i + 1]
        if current_node not in graph:
            logger.warning(f"Path node {current_node} not in graph, skipping hop")
            continue

        current_coords = node_coordinates(graph, current_node)
        edge = _hop_edge(graph, path, i)

        if edge is not None:
            coords = list(edge.segment.coordinates)
            start_dist = coordinate_distance(coords[0], current_coords)
            end_dist = coordinate_distance(coords[-1], current_coords)
            if end_dist < start_dist:
                coords.reverse()
            full_path.extend(coords if not full_path else coords[1:])
        elif next_node in graph:
            logger.debug(f"No segment between {current_node} and {next_node}, using straight line")
            if not full_path:
                full_path.append(current_coords)
            full_path.append(node_coordinates(graph, next_node))

    last_node = path[-1]
    if full_path and last_node in graph:
        final_coord = node_coordinates(graph, last_node)
        if coordinate_distance(full_path[-1], final_coord) > END_TOLERANCE_KM:
            full_path.append(final_coord)

    return full_path
