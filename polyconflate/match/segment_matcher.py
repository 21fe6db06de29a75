"""Boundary segment matching.

A :class:`SegmentMatcher` decides whether two line segments represent the
same boundary element. Two segments match when

- their directions agree within the angle tolerance, for the configured
  relative orientation,
- they have a mutual overlap, i.e. each has a non-empty projection on the
  other,
- the discrete Hausdorff distance between those mutual projections is less
  than the distance tolerance, so they are close along their whole shared
  length.

The relation is symmetric. Matchers hold no per-call state and can be
shared freely.
"""

from __future__ import annotations

import math
from typing import Sequence, Union

from ..core.config import SegmentMatchConfig
from ..core.geometry_utils import discrete_hausdorff_distance
from ..core.segment import Segment, coordinate_distance, as_coordinate
from ..core.types import OrientationMode

PI2 = 2.0 * math.pi


def normalized_angle(angle: float) -> float:
    """Return the equivalent angle in the range [0, 2*pi).

    Raises:
        ValueError: If ``angle`` is not finite

    Examples:
        >>> normalized_angle(-math.pi / 2)
        4.71238898038469
        >>> normalized_angle(2 * math.pi)
        0.0
    """
    if not math.isfinite(angle):
        raise ValueError(f"Cannot normalize non-finite angle: {angle}")
    result = math.fmod(angle, PI2)
    if result < 0.0:
        result += PI2
    # Adding 2*pi to a tiny negative remainder can round up to 2*pi itself
    if result >= PI2:
        result -= PI2
    return result


def angle_diff(seg0: Segment, seg1: Segment) -> float:
    """Minimum rotation between the directions of two segments, in [0, pi]."""
    a0 = normalized_angle(seg0.angle)
    a1 = normalized_angle(seg1.angle)
    return min(normalized_angle(a0 - a1), normalized_angle(a1 - a0))


def is_close_to(point: Sequence[float], segment: Segment, tolerance: float) -> bool:
    """True if ``point`` is strictly within ``tolerance`` of either endpoint."""
    pt = as_coordinate(point)
    return (
        coordinate_distance(pt, segment.p0) < tolerance
        or coordinate_distance(pt, segment.p1) < tolerance
    )


def projects_onto(seg: Segment, target: Segment) -> bool:
    """True if ``seg`` has a non-empty projection on ``target``."""
    if seg.is_degenerate or target.is_degenerate:
        return False
    pos0 = target.projection_factor(seg.p0)
    pos1 = target.projection_factor(seg.p1)
    if pos0 >= 1.0 and pos1 >= 1.0:
        return False
    if pos0 <= 0.0 and pos1 <= 0.0:
        return False
    return True


def has_mutual_overlap(src: Segment, tgt: Segment) -> bool:
    """True if either segment projects onto the other."""
    return projects_onto(src, tgt) or projects_onto(tgt, src)


def _same_endpoints(seg1: Segment, seg2: Segment) -> bool:
    return seg1.p0 == seg2.p0 and seg1.p1 == seg2.p1


class SegmentMatcher:
    """Decides whether pairs of boundary segments match.

    Args:
        distance_tolerance: Segments match only if the Hausdorff distance
            between their mutual projections is strictly less than this
        angle_tolerance: Maximum angle between the segments, in degrees
            (a difference exactly equal to the tolerance still matches)
        orientation: Required relative orientation (enum or string value),
            OPPOSITE by default since adjacent polygon rings traverse their
            shared edge in opposite directions

    Examples:
        >>> matcher = SegmentMatcher(distance_tolerance=2.0, angle_tolerance=5.0)
        >>> matcher.is_match(Segment((0, 0), (10, 0)), Segment((10, 1), (0, 1)))
        True
    """

    def __init__(
        self,
        distance_tolerance: float,
        angle_tolerance: float,
        orientation: Union[OrientationMode, str] = OrientationMode.OPPOSITE,
    ):
        self.config = SegmentMatchConfig(distance_tolerance, angle_tolerance, orientation)

    @classmethod
    def from_config(cls, config: SegmentMatchConfig) -> "SegmentMatcher":
        return cls(config.distance_tolerance, config.angle_tolerance, config.orientation)

    @property
    def distance_tolerance(self) -> float:
        return self.config.distance_tolerance

    @property
    def angle_tolerance(self) -> float:
        return self.config.angle_tolerance

    @property
    def orientation(self) -> OrientationMode:
        return self.config.orientation

    def is_match_coords(self, p00, p01, p10, p11) -> bool:
        """Match the segments ``p00 -> p01`` and ``p10 -> p11``."""
        return self.is_match(Segment(p00, p01), Segment(p10, p11))

    def is_match(self, seg1: Segment, seg2: Segment) -> bool:
        """Return True if the two segments match under this matcher's tolerances."""
        if seg1.is_degenerate or seg2.is_degenerate:
            return False
        # Identical segments match even where the orientation gate would reject them
        if _same_endpoints(seg1, seg2):
            return True
        if not self._orientation_matches(seg1, seg2):
            return False

        proj_seg1 = seg2.project(seg1)
        proj_seg2 = seg1.project(seg2)
        if proj_seg1 is None or proj_seg2 is None:
            return False

        distance = discrete_hausdorff_distance(proj_seg1.as_array(), proj_seg2.as_array())
        return distance < self.distance_tolerance

    def _orientation_matches(self, seg1: Segment, seg2: Segment) -> bool:
        tolerance = self.config.angle_tolerance_rad
        d_angle = angle_diff(seg1, seg2)
        d_angle_inv = angle_diff(seg1.reversed(), seg2)

        if self.orientation == OrientationMode.OPPOSITE:
            return d_angle_inv <= tolerance
        if self.orientation == OrientationMode.SAME:
            return d_angle <= tolerance
        return d_angle <= tolerance or d_angle_inv <= tolerance

    def has_mutual_overlap(self, src: Segment, tgt: Segment) -> bool:
        return has_mutual_overlap(src, tgt)

    def __repr__(self) -> str:
        return (
            f"SegmentMatcher(distance_tolerance={self.distance_tolerance}, "
            f"angle_tolerance={self.angle_tolerance}, "
            f"orientation={self.orientation.value!r})"
        )


__all__ = [
    'SegmentMatcher',
    'normalized_angle',
    'angle_diff',
    'is_close_to',
    'projects_onto',
    'has_mutual_overlap',
]
