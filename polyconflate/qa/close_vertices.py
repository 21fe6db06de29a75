"""Close vertex detection between two feature collections.

Vertices that are close but not coincident usually mean two datasets
describe the same corner slightly differently. Each such pair yields a line
indicator joining the two vertices and carrying its length.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
from shapely.geometry import LineString, Point, box
from shapely.strtree import STRtree

from ..core.errors import ConfigurationError
from ..core.feature import SIZE_ATTRIBUTE, Feature, indicator_features, sort_by_id
from ..core.geometry_utils import iter_rings
from ..core.progress import NullTaskMonitor, TaskMonitor
from ..core.segment import Coordinate, as_coordinate, coordinate_distance

FEATURES_UNIT = "features"


def _unique_vertices(feature: Feature) -> List[Coordinate]:
    seen: Dict[Coordinate, None] = {}
    for ring in iter_rings(feature.geometry):
        for point in ring:
            seen.setdefault(as_coordinate(point), None)
    return list(seen)


class CloseVertexFinder:
    """Finds vertex pairs from two collections closer than a tolerance.

    A pair qualifies when its distance is strictly less than
    ``distance_tolerance`` and greater than zero. Each unordered pair of
    coordinates is reported once, so passing the same collection twice
    finds close vertices within it.

    Args:
        features0: First collection
        features1: Second collection
        distance_tolerance: Exclusive upper bound on the pair distance
        length_attribute: Name of the attribute holding each indicator's length

    Raises:
        ConfigurationError: If ``distance_tolerance`` is not positive
    """

    def __init__(
        self,
        features0: Sequence[Feature],
        features1: Sequence[Feature],
        distance_tolerance: float,
        length_attribute: str = SIZE_ATTRIBUTE,
    ):
        if distance_tolerance <= 0:
            raise ConfigurationError(
                f"distance_tolerance must be positive, got {distance_tolerance}"
            )
        self._features0 = sort_by_id(features0)
        self._features1 = sort_by_id(features1)
        self.distance_tolerance = distance_tolerance
        self.length_attribute = length_attribute
        self.cancelled = False
        self._is_computed = False
        self._indicators: List[Feature] = []

    @property
    def indicators(self) -> List[Feature]:
        self.compute()
        return list(self._indicators)

    def compute(self, monitor: Optional[TaskMonitor] = None) -> None:
        if self._is_computed:
            return
        monitor = monitor if monitor is not None else NullTaskMonitor()

        targets: Dict[Coordinate, None] = {}
        for feature in self._features1:
            for coord in _unique_vertices(feature):
                targets.setdefault(coord, None)
        target_coords = list(targets)
        tree = STRtree([Point(c) for c in target_coords]) if target_coords else None

        tol = self.distance_tolerance
        seen: Set[Tuple[Coordinate, Coordinate]] = set()
        lines: List[LineString] = []
        total = len(self._features0)

        for processed, feature in enumerate(self._features0, start=1):
            if monitor.is_cancel_requested():
                self.cancelled = True
                break
            monitor.report(processed, total, FEATURES_UNIT)
            if tree is None:
                continue
            for coord in _unique_vertices(feature):
                x, y = coord
                hits = tree.query(box(x - tol, y - tol, x + tol, y + tol))
                for j in np.sort(hits):
                    other = target_coords[int(j)]
                    distance = coordinate_distance(coord, other)
                    if not 0.0 < distance < tol:
                        continue
                    key = (coord, other) if coord < other else (other, coord)
                    if key in seen:
                        continue
                    seen.add(key)
                    lines.append(LineString([coord, other]))

        self._indicators = indicator_features(lines, self.length_attribute)
        self._is_computed = True


__all__ = ['CloseVertexFinder']
