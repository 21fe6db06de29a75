"""Boundary matching between feature collections."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.feature import Feature
from ..core.geometry_utils import feature_segments
from ..core.segment import FeatureSegment
from ..core.spatial_utils import SegmentIndex
from .segment_matcher import SegmentMatcher


def match_boundary_segments(
    features: Sequence[Feature],
    matcher: SegmentMatcher,
    other_features: Optional[Sequence[Feature]] = None,
) -> Tuple[List[FeatureSegment], List[FeatureSegment]]:
    """Find matching boundary segments and record the matches.

    With ``other_features`` the segments of ``features`` are matched against
    the segments of ``other_features``. Without it, segments are matched
    between distinct features of the same collection and each pair is only
    tested once.

    Every matched pair is recorded on both segments through
    :meth:`FeatureSegment.add_match`.

    Args:
        features: Subject features
        matcher: Segment matcher holding the tolerances
        other_features: Optional reference features

    Returns:
        Tuple of (matched subject segments, matched reference segments), each
        in enumeration order. In single collection mode both lists draw from
        the same segments.
    """
    subject = [seg for f in features for seg in feature_segments(f)]
    if other_features is None:
        reference = subject
    else:
        reference = [seg for f in other_features for seg in feature_segments(f)]

    index = SegmentIndex(reference)
    single_collection = other_features is None

    for i, seg in enumerate(subject):
        for j in index.query(seg, matcher.distance_tolerance):
            candidate = reference[j]
            if single_collection and (j <= i or candidate.feature is seg.feature):
                continue
            if matcher.is_match(seg, candidate):
                seg.add_match(candidate)
                candidate.add_match(seg)

    matched_subject = [seg for seg in subject if seg.matches]
    matched_reference = [seg for seg in reference if seg.matches]
    return matched_subject, matched_reference


def unmatched_segments(segments: Sequence[FeatureSegment]) -> List[FeatureSegment]:
    """Return the segments that have no recorded match."""
    return [seg for seg in segments if not seg.matches]


__all__ = ['match_boundary_segments', 'unmatched_segments']
