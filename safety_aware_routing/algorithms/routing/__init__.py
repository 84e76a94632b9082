"""
Shortest-path search, edge cost strategies and path reconstruction.
"""

from .dijkstra import RoutePath, find_fastest_path, find_safest_path, shortest_path
from .path_reconstruction import path_to_coordinates

__all__ = [
    'RoutePath',
    'find_fastest_path',
    'find_safest_path',
    'shortest_path',
    'path_to_coordinates'
]
