"""Line segment value types.

A :class:`Segment` is an ordered pair of 2-D coordinates. Direction matters
for orientation tests but, for :class:`FeatureSegment`, not for identity: a
feature segment equals its own reversal so that the shared edge of two
adjacent polygons is found whichever ring it was read from.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence, Set, Tuple

import numpy as np
from shapely.geometry import LineString

if TYPE_CHECKING:
    from .feature import Feature

Coordinate = Tuple[float, float]


def as_coordinate(point: Sequence[float]) -> Coordinate:
    """Return the first two ordinates of ``point`` as a float tuple."""
    return (float(point[0]), float(point[1]))


def coordinate_distance(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass(frozen=True)
class Segment:
    """An oriented segment from ``p0`` to ``p1``."""

    p0: Coordinate
    p1: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "p0", as_coordinate(self.p0))
        object.__setattr__(self, "p1", as_coordinate(self.p1))

    @property
    def dx(self) -> float:
        return self.p1[0] - self.p0[0]

    @property
    def dy(self) -> float:
        return self.p1[1] - self.p0[1]

    @property
    def angle(self) -> float:
        """Direction angle in radians, in the range [-pi, pi]."""
        return math.atan2(self.dy, self.dx)

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def is_degenerate(self) -> bool:
        return self.p0 == self.p1

    def reversed(self) -> Segment:
        return Segment(self.p1, self.p0)

    def projection_factor(self, point: Sequence[float]) -> float:
        """Parametric position of the projection of ``point`` on this line.

        0 is ``p0``, 1 is ``p1``; values outside [0, 1] lie beyond the
        endpoints. Degenerate segments return NaN.
        """
        pt = as_coordinate(point)
        if pt == self.p0:
            return 0.0
        if pt == self.p1:
            return 1.0
        dx, dy = self.dx, self.dy
        len_sq = dx * dx + dy * dy
        if len_sq <= 0.0:
            return math.nan
        return ((pt[0] - self.p0[0]) * dx + (pt[1] - self.p0[1]) * dy) / len_sq

    def project_point(self, point: Sequence[float]) -> Coordinate:
        """Orthogonal projection of ``point`` on the supporting line."""
        pt = as_coordinate(point)
        if pt == self.p0 or pt == self.p1:
            return pt
        r = self.projection_factor(pt)
        return (self.p0[0] + r * self.dx, self.p0[1] + r * self.dy)

    def project(self, other: Segment) -> Optional[Segment]:
        """Project ``other`` onto this segment, clipped to its extent.

        Returns ``None`` when the projection does not overlap this segment
        or when either segment is degenerate.
        """
        if self.is_degenerate or other.is_degenerate:
            return None
        pf0 = self.projection_factor(other.p0)
        pf1 = self.projection_factor(other.p1)
        if pf0 >= 1.0 and pf1 >= 1.0:
            return None
        if pf0 <= 0.0 and pf1 <= 0.0:
            return None

        new_p0 = self._clipped_projection(other.p0, pf0)
        new_p1 = self._clipped_projection(other.p1, pf1)
        return Segment(new_p0, new_p1)

    def _clipped_projection(self, point: Coordinate, factor: float) -> Coordinate:
        if factor < 0.0:
            return self.p0
        if factor > 1.0:
            return self.p1
        return self.project_point(point)

    def as_array(self) -> np.ndarray:
        return np.array([self.p0, self.p1], dtype=float)

    def to_line(self) -> LineString:
        return LineString([self.p0, self.p1])


@dataclass(frozen=True, eq=False)
class FeatureSegment(Segment):
    """A segment read from a ring of a feature's boundary.

    ``shell`` and ``segment`` record where the segment came from and play no
    part in equality. Equality and hashing ignore orientation.
    """

    feature: Optional["Feature"] = None
    shell: int = 0
    segment: int = 0
    _matches: Set["FeatureSegment"] = field(
        default_factory=set, init=False, repr=False
    )

    def add_match(self, match: FeatureSegment) -> None:
        self._matches.add(match)

    @property
    def matches(self) -> Set[FeatureSegment]:
        return self._matches

    def __eq__(self, other):
        if not isinstance(other, FeatureSegment):
            return NotImplemented
        # Opposite direction first, the usual case for adjacent polygons
        if self.p0 == other.p1 and self.p1 == other.p0:
            return True
        return self.p0 == other.p0 and self.p1 == other.p1

    def __hash__(self):
        return hash((
            min(self.p0[0], self.p1[0]),
            max(self.p0[0], self.p1[0]),
            min(self.p0[1], self.p1[1]),
            max(self.p0[1], self.p1[1]),
        ))

    def __repr__(self) -> str:
        feature_id = self.feature.id if self.feature is not None else None
        return f"FeatureSegment {feature_id}/{self.shell}/{self.segment}"


__all__ = [
    'Coordinate',
    'Segment',
    'FeatureSegment',
    'as_coordinate',
    'coordinate_distance',
]
