"""Spatial indexing utilities.

This module wraps :class:`shapely.strtree.STRtree` so that the detectors and
matching passes can ask for "everything whose envelope intersects this
envelope" in terms of features and segments rather than array positions.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
from shapely.strtree import STRtree

from .feature import Envelope, Feature, envelope_geometry
from .segment import Segment


class FeatureIndex:
    """Envelope index over a collection of features.

    Built once; queries return the features whose envelope intersects the
    query envelope, in ascending ID order.

    Examples:
        >>> index = FeatureIndex(features)
        >>> index.query((0, 0, 10, 10))
        [Feature(id=1, ...), Feature(id=4, ...)]
    """

    def __init__(self, features: Iterable[Feature]):
        self._features: List[Feature] = list(features)
        self._tree: Optional[STRtree] = None
        if self._features:
            self._tree = STRtree([f.geometry for f in self._features])

    def __len__(self) -> int:
        return len(self._features)

    @property
    def features(self) -> List[Feature]:
        return list(self._features)

    def query(self, envelope: Envelope) -> List[Feature]:
        """Return the features whose envelope intersects ``envelope``."""
        if self._tree is None:
            return []
        indices = self._tree.query(envelope_geometry(envelope))
        return self._collect(indices)

    def query_feature(self, feature: Feature) -> List[Feature]:
        """Return the features whose envelope intersects ``feature``'s envelope."""
        return self.query(feature.envelope)

    def _collect(self, indices: Sequence[int]) -> List[Feature]:
        found = [self._features[int(i)] for i in np.unique(indices)]
        found.sort(key=lambda f: f.id)
        return found


class SegmentIndex:
    """Envelope index over line segments, queried with a search distance."""

    def __init__(self, segments: Iterable[Segment]):
        self.segments: List[Segment] = list(segments)
        self._tree: Optional[STRtree] = None
        if self.segments:
            self._tree = STRtree([seg.to_line() for seg in self.segments])

    def query(self, segment: Segment, distance: float = 0.0) -> List[int]:
        """Return indices of segments whose envelope lies within ``distance``
        of ``segment``'s envelope."""
        if self._tree is None:
            return []
        minx = min(segment.p0[0], segment.p1[0]) - distance
        miny = min(segment.p0[1], segment.p1[1]) - distance
        maxx = max(segment.p0[0], segment.p1[0]) + distance
        maxy = max(segment.p0[1], segment.p1[1]) + distance
        indices = self._tree.query(envelope_geometry((minx, miny, maxx, maxy)))
        return sorted(int(i) for i in indices)


def filter_by_fence(
    features: Iterable[Feature],
    fence: Optional[Envelope],
) -> List[Feature]:
    """Return the features whose envelope intersects ``fence``.

    With no fence, every feature is returned.
    """
    features = list(features)
    if fence is None:
        return features
    return FeatureIndex(features).query(fence)


__all__ = [
    'FeatureIndex',
    'SegmentIndex',
    'filter_by_fence',
]
