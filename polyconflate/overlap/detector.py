"""Overlap detection within one feature collection or between two.

Candidate pairs come from an envelope index; each candidate pair is then
tested exactly with a DE-9IM relate. The test is "interiors intersect", not
the OGC ``overlaps`` predicate: containment counts as an overlap.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from shapely.geometry.base import BaseGeometry

from ..core.config import OverlapConfig
from ..core.feature import Envelope, Feature, indicator_features, sort_by_id
from ..core.progress import NullTaskMonitor, TaskMonitor
from ..core.spatial_utils import FeatureIndex, filter_by_fence
from .indicators import DEFAULT_STRATEGIES, IndicatorStep, build_overlap_indicators

FEATURES_UNIT = "features"


def interiors_intersect(geom_a: BaseGeometry, geom_b: BaseGeometry) -> bool:
    """True if the interiors of the two geometries share at least one point.

    Examples:
        >>> outer = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> inner = Polygon([(2, 2), (4, 2), (4, 4), (2, 4)])
        >>> outer.overlaps(inner), interiors_intersect(outer, inner)
        (False, True)
    """
    return geom_a.relate(geom_b)[0] != "F"


class _OverlapAccumulator:
    """Shared indicator bookkeeping for the detectors."""

    def __init__(
        self,
        monitor: Optional[TaskMonitor],
        config: Optional[OverlapConfig],
        strategies: Sequence[IndicatorStep],
        verbose: bool,
    ):
        self.monitor = monitor if monitor is not None else NullTaskMonitor()
        self.config = config if config is not None else OverlapConfig()
        self.strategies = tuple(strategies)
        self.verbose = verbose
        self.cancelled = False
        self.unresolved = 0
        self._is_computed = False
        self._location_geoms: List[BaseGeometry] = []
        self._size_geoms: List[BaseGeometry] = []
        self._overlap_indicators: List[Feature] = []
        self._size_indicators: List[Feature] = []

    @property
    def is_computed(self) -> bool:
        return self._is_computed

    @property
    def overlap_indicators(self) -> List[Feature]:
        """Lines locating each overlap."""
        self.compute_overlaps()
        return list(self._overlap_indicators)

    @property
    def size_indicators(self) -> List[Feature]:
        """Lines measuring each overlap, carrying their length as an attribute."""
        self.compute_overlaps()
        return list(self._size_indicators)

    def _add_indicators(self, f0: Feature, f1: Feature) -> None:
        result = build_overlap_indicators(
            f0.geometry, f1.geometry, self.config, self.strategies
        )
        if not result.resolved:
            self.unresolved += 1
            return
        self._location_geoms.extend(result.location)
        self._size_geoms.extend(result.size)

    def _materialize_indicators(self) -> None:
        self._overlap_indicators = indicator_features(self._location_geoms)
        self._size_indicators = indicator_features(
            self._size_geoms, self.config.size_attribute
        )

    def _cancel_requested(self, monitor: TaskMonitor) -> bool:
        if monitor.is_cancel_requested():
            self.cancelled = True
            return True
        return False


class OverlapDetector(_OverlapAccumulator):
    """Finds the features of one collection whose interiors overlap.

    Results are computed on first access and cached; later calls to
    :meth:`compute_overlaps` do nothing.

    Args:
        features: Input features, each with a unique ID
        monitor: Progress sink checked for cancellation between features
        fence: Optional envelope; only features whose envelope intersects it
            are candidates for overlapping the input features
        config: Indicator settings
        strategies: Ordered indicator strategies
        verbose: Print a summary when the computation finishes

    Examples:
        >>> detector = OverlapDetector(features_from_geometries([r1, r2]))
        >>> [f.id for f in detector.overlapping_features]
        [1, 2]
    """

    def __init__(
        self,
        features: Sequence[Feature],
        monitor: Optional[TaskMonitor] = None,
        fence: Optional[Envelope] = None,
        config: Optional[OverlapConfig] = None,
        strategies: Sequence[IndicatorStep] = DEFAULT_STRATEGIES,
        verbose: bool = False,
    ):
        super().__init__(monitor, config, strategies, verbose)
        self._features = sort_by_id(features)
        self.fence = fence
        self._overlapping: Dict[int, Feature] = {}
        self._overlapping_features: List[Feature] = []

    def set_fence(self, fence: Optional[Envelope]) -> None:
        self.fence = fence

    @property
    def overlapping_features(self) -> List[Feature]:
        """Features overlapping at least one other feature, ordered by ID."""
        self.compute_overlaps()
        return list(self._overlapping_features)

    def compute_overlaps(self, monitor: Optional[TaskMonitor] = None) -> None:
        """Run the overlap search once.

        If the monitor requests cancellation the search stops before the next
        feature; overlaps found so far are kept and published.
        """
        if self._is_computed:
            return
        monitor = monitor if monitor is not None else self.monitor

        total = len(self._features)
        index = FeatureIndex(filter_by_fence(self._features, self.fence))

        for processed, feature in enumerate(self._features, start=1):
            if self._cancel_requested(monitor):
                break
            candidates = index.query_feature(feature)
            monitor.report(processed, total, FEATURES_UNIT)
            for candidate in candidates:
                # Each unordered pair once, never a feature with itself
                if feature.id >= candidate.id:
                    continue
                if interiors_intersect(feature.geometry, candidate.geometry):
                    self._record(feature, candidate)

        self._overlapping_features = sort_by_id(self._overlapping.values())
        self._materialize_indicators()
        self._is_computed = True

        if self.verbose:
            print(
                f"Found {len(self._overlapping_features)} overlapping features, "
                f"{len(self._size_indicators)} size indicators"
                + (" (cancelled)" if self.cancelled else "")
            )

    def _record(self, f0: Feature, f1: Feature) -> None:
        self._overlapping[id(f0)] = f0
        self._overlapping[id(f1)] = f1
        self._add_indicators(f0, f1)


class TwoCollectionOverlapDetector(_OverlapAccumulator):
    """Finds overlaps between the features of two collections.

    Every feature of the first collection is tested against the features of
    the second; pairs within one collection are never tested. Overlapping
    features are reported per collection.

    Examples:
        >>> detector = TwoCollectionOverlapDetector(parcels, buildings)
        >>> detector.compute_overlaps(monitor)
        >>> len(detector.overlapping_features(1))
        3
    """

    def __init__(
        self,
        features0: Sequence[Feature],
        features1: Sequence[Feature],
        monitor: Optional[TaskMonitor] = None,
        config: Optional[OverlapConfig] = None,
        strategies: Sequence[IndicatorStep] = DEFAULT_STRATEGIES,
        verbose: bool = False,
    ):
        super().__init__(monitor, config, strategies, verbose)
        self._collections = (sort_by_id(features0), sort_by_id(features1))
        self._overlapping: Tuple[Dict[int, Feature], Dict[int, Feature]] = ({}, {})
        self._overlapping_features: List[List[Feature]] = [[], []]

    def overlapping_features(self, collection: int) -> List[Feature]:
        """Overlapping features of collection 0 or 1, ordered by ID."""
        if collection not in (0, 1):
            raise IndexError(f"collection must be 0 or 1, got {collection}")
        self.compute_overlaps()
        return list(self._overlapping_features[collection])

    def compute_overlaps(self, monitor: Optional[TaskMonitor] = None) -> None:
        if self._is_computed:
            return
        monitor = monitor if monitor is not None else self.monitor

        subjects, references = self._collections
        total = len(subjects)
        index = FeatureIndex(references)

        for processed, feature in enumerate(subjects, start=1):
            if self._cancel_requested(monitor):
                break
            candidates = index.query_feature(feature)
            monitor.report(processed, total, FEATURES_UNIT)
            for candidate in candidates:
                if interiors_intersect(feature.geometry, candidate.geometry):
                    self._overlapping[0][id(feature)] = feature
                    self._overlapping[1][id(candidate)] = candidate
                    self._add_indicators(feature, candidate)

        self._overlapping_features = [
            sort_by_id(self._overlapping[0].values()),
            sort_by_id(self._overlapping[1].values()),
        ]
        self._materialize_indicators()
        self._is_computed = True

        if self.verbose:
            print(
                f"Found {len(self._overlapping_features[0])} and "
                f"{len(self._overlapping_features[1])} overlapping features"
                + (" (cancelled)" if self.cancelled else "")
            )


__all__ = [
    'interiors_intersect',
    'OverlapDetector',
    'TwoCollectionOverlapDetector',
    'FEATURES_UNIT',
]
