"""Segment matching predicates and the boundary matching pass."""

from .segment_matcher import (
    SegmentMatcher,
    normalized_angle,
    angle_diff,
    is_close_to,
    projects_onto,
    has_mutual_overlap,
)
from .boundary import match_boundary_segments, unmatched_segments

__all__ = [
    'SegmentMatcher',
    'normalized_angle',
    'angle_diff',
    'is_close_to',
    'projects_onto',
    'has_mutual_overlap',
    'match_boundary_segments',
    'unmatched_segments',
]
