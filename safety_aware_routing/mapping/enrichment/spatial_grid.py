"""
Rounded-coordinate hash grid used for approximate proximity joins.
"""

import math
from collections import defaultdict
from typing import Any, Dict, Generic, Iterator, List, Tuple, TypeVar

from ...data.models import Coordinate

T = TypeVar('T')

KM_PER_DEGREE_LAT = 111.32


def grid_key(coord: Coordinate, precision: int) -> str:
    """
    Bucket key for a coordinate rounded to ``precision`` decimal places.

    Precision 6 is ~0.1m, 4 is ~10m, 3 is ~100m of latitude.
    """
    lat = round(coord[0], precision) + 0.0  # normalise -0.0
    lon = round(coord[1], precision) + 0.0
    return f"{lat:.{precision}f},{lon:.{precision}f}"


class SpatialGridIndex(Generic[T]):
    """
    Hash map from rounded-coordinate buckets to records.

    Only lives for the duration of an enrichment pass.
    """

    def __init__(self, precision: int):
        """
        Initialize an empty grid.

        Args:
            precision: Decimal places kept when bucketing coordinates
        """
        self.precision = precision
        self.cell_size_deg = 10.0 ** -precision
        self._buckets: Dict[str, List[Tuple[Coordinate, T]]] = defaultdict(list)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def key(self, coord: Coordinate) -> str:
        return grid_key(coord, self.precision)

    def insert(self, coord: Coordinate, record: T) -> None:
        """Add a record under the bucket containing ``coord``."""
        self._buckets[self.key(coord)].append((coord, record))
        self._count += 1

    def query(self, coord: Coordinate) -> List[T]:
        """Records sharing the bucket of ``coord``."""
        return [record for _, record in self._buckets.get(self.key(coord), [])]

    def query_neighborhood(self, coord: Coordinate,
                           rings: int = 1) -> Iterator[Tuple[Coordinate, T]]:
        """
        Yield (coordinate, record) pairs from the bucket of ``coord`` and the
        ``rings`` layers of buckets around it.
        """
        step = self.cell_size_deg
        for i in range(-rings, rings + 1):
            for j in range(-rings, rings + 1):
                neighbour = (coord[0] + i * step, coord[1] + j * step)
                yield from self._buckets.get(self.key(neighbour), [])

    def rings_for_radius(self, coord: Coordinate, radius_km: float) -> int:
        """
        Number of neighbour rings that fully cover ``radius_km`` around ``coord``.

        Longitude cells shrink with latitude, so the narrower side decides.
        Capped at half the cells around a parallel, which already wraps the globe.
        """
        cell_lat_km = KM_PER_DEGREE_LAT * self.cell_size_deg
        cell_lon_km = cell_lat_km * max(math.cos(math.radians(coord[0])), 1e-6)
        rings = max(1, math.ceil(radius_km / min(cell_lat_km, cell_lon_km)))
        return min(rings, math.ceil(180.0 / self.cell_size_deg))

    def candidates(self, coord: Coordinate,
                   radius_km: float) -> Iterator[Tuple[Coordinate, T]]:
        """
        Yield every (coordinate, record) pair that may lie within ``radius_km``.

        Walks the neighbour rings, or scans all buckets when that touches
        fewer cells (high latitudes, large radii).
        """
        rings = self.rings_for_radius(coord, radius_km)
        if (2 * rings + 1) ** 2 > len(self._buckets):
            for bucket in self._buckets.values():
                yield from bucket
            return
        yield from self.query_neighborhood(coord, rings)

    def stats(self) -> Dict[str, Any]:
        return {
            'precision': self.precision,
            'buckets': len(self._buckets),
            'records': self._count
        }
