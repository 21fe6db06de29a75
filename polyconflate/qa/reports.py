"""One-call quality checks returning summary reports.

These functions wrap the detectors for hosts that only need the resulting
feature lists and the size range.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.config import OverlapConfig
from ..core.feature import Envelope, Feature, SIZE_ATTRIBUTE
from ..core.progress import TaskMonitor
from ..metrics import min_max_value
from ..overlap.detector import OverlapDetector, TwoCollectionOverlapDetector
from .close_vertices import CloseVertexFinder


@dataclass
class OverlapReport:
    """Result of an overlap check.

    Attributes:
        overlapping: Overlapping features per input collection; one list for
            an internal check, two for a check between collections
        overlap_indicators: Lines locating the overlaps
        size_indicators: Lines measuring the overlaps
        min_size: Shortest size indicator, nan if there is none
        max_size: Longest size indicator, nan if there is none
        unresolved: Overlapping pairs for which no indicator could be built
        cancelled: True if the run stopped early on request
    """

    overlapping: List[List[Feature]] = field(default_factory=list)
    overlap_indicators: List[Feature] = field(default_factory=list)
    size_indicators: List[Feature] = field(default_factory=list)
    min_size: float = math.nan
    max_size: float = math.nan
    unresolved: int = 0
    cancelled: bool = False

    @property
    def count(self) -> int:
        """Total number of overlapping features over all collections."""
        return sum(len(features) for features in self.overlapping)

    @property
    def has_overlaps(self) -> bool:
        return self.count > 0


@dataclass
class CloseVertexReport:
    indicators: List[Feature] = field(default_factory=list)
    min_distance: float = math.nan
    max_distance: float = math.nan
    cancelled: bool = False

    @property
    def count(self) -> int:
        return len(self.indicators)


def find_internal_overlaps(
    features: Sequence[Feature],
    monitor: Optional[TaskMonitor] = None,
    fence: Optional[Envelope] = None,
    config: Optional[OverlapConfig] = None,
    verbose: bool = False,
) -> OverlapReport:
    """Check one collection for features overlapping each other.

    Examples:
        >>> report = find_internal_overlaps(features_from_geometries([r1, r2]))
        >>> report.count, report.max_size
        (2, 5.0)
    """
    detector = OverlapDetector(features, fence=fence, config=config, verbose=verbose)
    detector.compute_overlaps(monitor)

    size_indicators = detector.size_indicators
    min_size, max_size = min_max_value(size_indicators, detector.config.size_attribute)
    return OverlapReport(
        overlapping=[detector.overlapping_features],
        overlap_indicators=detector.overlap_indicators,
        size_indicators=size_indicators,
        min_size=min_size,
        max_size=max_size,
        unresolved=detector.unresolved,
        cancelled=detector.cancelled,
    )


def find_overlaps(
    features0: Sequence[Feature],
    features1: Sequence[Feature],
    monitor: Optional[TaskMonitor] = None,
    config: Optional[OverlapConfig] = None,
    verbose: bool = False,
) -> OverlapReport:
    """Check two collections for features of one overlapping the other."""
    detector = TwoCollectionOverlapDetector(
        features0, features1, config=config, verbose=verbose
    )
    detector.compute_overlaps(monitor)

    size_indicators = detector.size_indicators
    min_size, max_size = min_max_value(size_indicators, detector.config.size_attribute)
    return OverlapReport(
        overlapping=[detector.overlapping_features(0), detector.overlapping_features(1)],
        overlap_indicators=detector.overlap_indicators,
        size_indicators=size_indicators,
        min_size=min_size,
        max_size=max_size,
        unresolved=detector.unresolved,
        cancelled=detector.cancelled,
    )


def find_close_vertices(
    features0: Sequence[Feature],
    features1: Sequence[Feature],
    distance_tolerance: float,
    monitor: Optional[TaskMonitor] = None,
    length_attribute: str = SIZE_ATTRIBUTE,
) -> CloseVertexReport:
    finder = CloseVertexFinder(
        features0, features1, distance_tolerance, length_attribute=length_attribute
    )
    finder.compute(monitor)

    indicators = finder.indicators
    min_distance, max_distance = min_max_value(indicators, length_attribute)
    return CloseVertexReport(
        indicators=indicators,
        min_distance=min_distance,
        max_distance=max_distance,
        cancelled=finder.cancelled,
    )


__all__ = [
    'OverlapReport',
    'CloseVertexReport',
    'find_internal_overlaps',
    'find_overlaps',
    'find_close_vertices',
]
