"""
Grid-based enrichment joins between street segments and auxiliary datasets.
"""

from .spatial_grid import SpatialGridIndex, grid_key
from .segment_enricher import condition_score, enrich_with_conditions, enrich_with_lighting

__all__ = [
    'SpatialGridIndex',
    'grid_key',
    'condition_score',
    'enrich_with_conditions',
    'enrich_with_lighting'
]
