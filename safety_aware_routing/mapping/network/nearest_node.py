"""
Nearest graph node lookup for arbitrary query coordinates.
"""

import logging
from typing import List, Optional

import networkx as nx
import numpy as np

from ...data.distance_utils import haversine_distance_array
from ...data.models import Coordinate

logger = logging.getLogger(__name__)


class NodeLocator:
    """
    Exact nearest-node search by great-circle distance.

    Node coordinates are packed into numpy arrays once; each query is a
    vectorised full scan. Ties go to the node inserted first.
    """

    def __init__(self, graph: nx.MultiGraph):
        """
        Initialize the locator.

        Args:
            graph: Street graph with ``y``/``x`` node attributes
        """
        self.node_ids: List[str] = list(graph.nodes)
        self.lats = np.array([graph.nodes[n]['y'] for n in self.node_ids], dtype=float)
        self.lons = np.array([graph.nodes[n]['x'] for n in self.node_ids], dtype=float)

    def __len__(self) -> int:
        return len(self.node_ids)

    def distances(self, coord: Coordinate) -> np.ndarray:
        """Distances in km from ``coord`` to every node, in node order."""
        return haversine_distance_array(coord[0], coord[1], self.lats, self.lons)

    def nearest(self, coord: Coordinate) -> Optional[str]:
        """Id of the closest node, or None when the graph has no nodes."""
        if not self.node_ids:
            logger.warning(f"No nodes available to snap {coord}")
            return None
        # argmin returns the first minimum
        return self.node_ids[int(np.argmin(self.distances(coord)))]

    def nearest_with_distance(self, coord: Coordinate):
        """(node_id, distance_km) of the closest node, or (None, inf)."""
        if not self.node_ids:
            return None, float('inf')
        dists = self.distances(coord)
        idx = int(np.argmin(dists))
        return self.node_ids[idx], float(dists[idx])


def find_closest_node(coordinate: Coordinate, graph: nx.MultiGraph) -> Optional[str]:
    """
    Find the graph node nearest to a coordinate.

    Builds a throwaway ``NodeLocator``; hold on to one instead when issuing
    many queries against the same graph.

    Returns:
        Node id, or None if the graph is empty
    """
    return NodeLocator(graph).nearest(coordinate)
