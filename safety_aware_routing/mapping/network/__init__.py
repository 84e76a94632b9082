"""
Street graph building and nearest node lookup.
"""

from .graph_builder import Edge, build_graph, canonical_node_key, neighbors
from .nearest_node import NodeLocator, find_closest_node

__all__ = [
    'Edge',
    'build_graph',
    'canonical_node_key',
    'neighbors',
    'NodeLocator',
    'find_closest_node'
]
