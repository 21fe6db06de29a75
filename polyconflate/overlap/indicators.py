"""Overlap indicator construction.

For a pair of overlapping geometries two kinds of indicator lines are built:

- *location* indicators: boundary linework of one geometry lying inside the
  other, showing where the overlap is,
- *size* indicators: for each location line, a line from its point deepest
  inside the other geometry to the nearest point of that geometry's
  boundary, whose length measures how large the overlap is.

Strategies are tried in order. The boundary strategy is fast but depends on
whole-geometry overlay operations, which can fail on nearly degenerate
input or return nothing when the overlap has collapsed to zero width. The
segment strategy then works segment by segment.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import shapely
from shapely.errors import GEOSException
from shapely.geometry import LineString, Point
from shapely.geometry.base import BaseGeometry
from shapely.ops import linemerge, nearest_points

from ..core.config import OverlapConfig
from ..core.errors import UnresolvedOverlapWarning
from ..core.geometry_utils import boundary_segments, line_parts, polygon_parts
from ..core.types import IndicatorStrategy

IndicatorLists = Tuple[List[LineString], List[LineString]]
IndicatorFunc = Callable[[BaseGeometry, BaseGeometry, OverlapConfig], IndicatorLists]


@dataclass
class IndicatorResult:
    """Indicators computed for one overlapping pair."""

    location: List[LineString] = field(default_factory=list)
    size: List[LineString] = field(default_factory=list)
    strategy: Optional[IndicatorStrategy] = None

    @property
    def resolved(self) -> bool:
        return self.strategy is not None


@dataclass
class IndicatorStep:
    """One entry of the ordered strategy list.

    Attributes:
        strategy: Which method this is
        func: ``(geom_a, geom_b, config) -> (location, size)``
        require_both: Accept the result only if both lists are non-empty;
            otherwise either non-empty list is enough
    """

    strategy: IndicatorStrategy
    func: IndicatorFunc
    require_both: bool = False

    def accepts(self, location: Sequence, size: Sequence) -> bool:
        if self.require_both:
            return bool(location) and bool(size)
        return bool(location) or bool(size)


def boundary_indicators(
    geom_a: BaseGeometry,
    geom_b: BaseGeometry,
    config: OverlapConfig,
) -> IndicatorLists:
    """Indicators from the part of each boundary lying inside the other geometry."""
    location: List[LineString] = []
    size: List[LineString] = []
    try:
        for geom, other in ((geom_a, geom_b), (geom_b, geom_a)):
            other_boundary = other.boundary
            for line in _inner_boundary(geom, other, other_boundary):
                location.append(line)
                indicator = size_indicator(line, other_boundary, config.size_samples)
                if indicator is not None:
                    size.append(indicator)
    except GEOSException:
        return [], []
    return location, size


def segment_indicators(
    geom_a: BaseGeometry,
    geom_b: BaseGeometry,
    config: OverlapConfig,
) -> IndicatorLists:
    """Indicators from individual boundary segments crossing the other interior.

    A segment qualifies when its interior meets the other geometry's interior
    along a line. The part inside the other geometry is used, or the whole
    segment if clipping fails. When no segment qualifies (identical
    geometries, for instance) the boundary segments of the intersection
    itself are used as location indicators.
    """
    location: List[LineString] = []
    size: List[LineString] = []

    for geom, other in ((geom_a, geom_b), (geom_b, geom_a)):
        other_boundary = other.boundary
        for seg in boundary_segments(geom):
            line = seg.to_line()
            try:
                if not line.relate_pattern(other, "1********"):
                    continue
            except GEOSException:
                continue
            for piece in _clip_segment(line, other, other_boundary):
                location.append(piece)
                indicator = size_indicator(piece, other_boundary, config.size_samples)
                if indicator is not None:
                    size.append(indicator)

    if not location:
        location = _intersection_outline(geom_a, geom_b)
    return location, size


def size_indicator(
    line: LineString,
    boundary: BaseGeometry,
    samples: int = 16,
) -> Optional[LineString]:
    """Line from the point of ``line`` farthest from ``boundary`` to ``boundary``.

    The vertices of ``line`` plus ``samples`` evenly spaced points along it are
    considered. Returns None when every candidate lies on the boundary.

    Examples:
        >>> corner = LineString([(5, 10), (10, 10), (10, 5)])
        >>> other = Polygon([(5, 5), (15, 5), (15, 15), (5, 15)])
        >>> size_indicator(corner, other.boundary).length
        5.0
    """
    if line.is_empty or boundary.is_empty:
        return None
    vertices = np.asarray(line.coords)[:, :2]
    fractions = np.linspace(0.0, 1.0, samples + 1)
    sampled = shapely.get_coordinates(shapely.line_interpolate_point(line, fractions, normalized=True))
    candidates = np.vstack([vertices, sampled])

    distances = shapely.distance(shapely.points(candidates), boundary)
    k = int(np.argmax(distances))
    if not distances[k] > 0.0:
        return None

    deepest = Point(candidates[k])
    _, nearest = nearest_points(deepest, boundary)
    return LineString([deepest, nearest])


def _inner_boundary(
    geom: BaseGeometry,
    other: BaseGeometry,
    other_boundary: BaseGeometry,
) -> List[LineString]:
    """Linework of ``geom``'s boundary strictly inside ``other``."""
    inside = geom.boundary.intersection(other).difference(other_boundary)
    lines = line_parts(inside)
    if len(lines) > 1:
        lines = line_parts(linemerge(lines))
    return lines


def _clip_segment(
    line: LineString,
    other: BaseGeometry,
    other_boundary: BaseGeometry,
) -> List[LineString]:
    try:
        pieces = line_parts(line.intersection(other).difference(other_boundary))
    except GEOSException:
        pieces = []
    return pieces or [line]


def _intersection_outline(geom_a: BaseGeometry, geom_b: BaseGeometry) -> List[LineString]:
    try:
        overlap = geom_a.intersection(geom_b)
    except GEOSException:
        return []
    outline: List[LineString] = []
    for poly in polygon_parts(overlap):
        if poly.area > 0.0:
            outline.extend(seg.to_line() for seg in boundary_segments(poly))
    return outline


DEFAULT_STRATEGIES: Tuple[IndicatorStep, ...] = (
    IndicatorStep(IndicatorStrategy.BOUNDARY, boundary_indicators, require_both=True),
    IndicatorStep(IndicatorStrategy.SEGMENT, segment_indicators),
)


def build_overlap_indicators(
    geom_a: BaseGeometry,
    geom_b: BaseGeometry,
    config: Optional[OverlapConfig] = None,
    strategies: Sequence[IndicatorStep] = DEFAULT_STRATEGIES,
) -> IndicatorResult:
    """Compute overlap indicators for two overlapping geometries.

    Each strategy is tried in order and the first accepted result is returned.
    If none is accepted an :class:`UnresolvedOverlapWarning` is emitted and an
    unresolved, empty result is returned; the caller still treats the pair as
    overlapping.

    Examples:
        >>> r1 = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> r2 = Polygon([(5, 5), (15, 5), (15, 15), (5, 15)])
        >>> result = build_overlap_indicators(r1, r2)
        >>> result.strategy
        <IndicatorStrategy.BOUNDARY: 'boundary'>
        >>> [round(line.length, 6) for line in result.size]
        [5.0, 5.0]
    """
    if config is None:
        config = OverlapConfig()

    for step in strategies:
        location, size = step.func(geom_a, geom_b, config)
        if step.accepts(location, size):
            return IndicatorResult(location, size, step.strategy)

    warnings.warn(
        UnresolvedOverlapWarning(
            f"Could not compute overlap indicators for {geom_a.wkt} and {geom_b.wkt}",
            geom_a,
            geom_b,
        ),
        stacklevel=2,
    )
    return IndicatorResult()


__all__ = [
    'IndicatorResult',
    'IndicatorStep',
    'DEFAULT_STRATEGIES',
    'boundary_indicators',
    'segment_indicators',
    'size_indicator',
    'build_overlap_indicators',
]
