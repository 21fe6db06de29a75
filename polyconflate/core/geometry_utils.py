"""Common geometry decomposition utilities.

This module provides reusable helpers that break shapely geometries into
the pieces the matching and overlap code works on: polygons, rings,
linework and boundary segments.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence

import numpy as np
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from .feature import Feature
from .segment import FeatureSegment, Segment


def polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    """Return the non-empty polygons contained in ``geometry``.

    Examples:
        >>> multi = MultiPolygon([poly1, poly2])
        >>> len(polygon_parts(multi))
        2
        >>> polygon_parts(LineString([(0, 0), (1, 1)]))
        []
    """
    if geometry is None or geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        parts: List[Polygon] = []
        for geom in geometry.geoms:
            parts.extend(polygon_parts(geom))
        return parts
    return []


def line_parts(geometry: BaseGeometry, min_length: float = 0.0) -> List[LineString]:
    """Return the LineStrings in ``geometry`` longer than ``min_length``.

    Rings are returned as plain LineStrings. Points and polygons are ignored,
    which drops the zero-dimensional leftovers boolean operations produce.
    """
    if geometry is None or geometry.is_empty:
        return []
    if isinstance(geometry, LinearRing):
        geometry = LineString(geometry.coords)
    if isinstance(geometry, LineString):
        return [geometry] if geometry.length > min_length else []
    if isinstance(geometry, (MultiLineString, GeometryCollection)):
        lines: List[LineString] = []
        for geom in geometry.geoms:
            lines.extend(line_parts(geom, min_length))
        return lines
    return []


def iter_rings(geometry: BaseGeometry) -> Iterator[np.ndarray]:
    """Yield the coordinate arrays of every ring or line in ``geometry``.

    Polygons yield their exterior followed by their holes. Only the first
    two ordinates are kept.
    """
    if geometry is None or geometry.is_empty:
        return
    if isinstance(geometry, Polygon):
        yield np.asarray(geometry.exterior.coords)[:, :2]
        for interior in geometry.interiors:
            yield np.asarray(interior.coords)[:, :2]
    elif isinstance(geometry, (LineString, LinearRing)):
        yield np.asarray(geometry.coords)[:, :2]
    elif hasattr(geometry, "geoms"):
        for geom in geometry.geoms:
            yield from iter_rings(geom)


def ring_segments(coords: Sequence[Sequence[float]]) -> List[Segment]:
    """Return the non-degenerate segments joining consecutive coordinates."""
    segments = []
    for i in range(len(coords) - 1):
        seg = Segment(coords[i], coords[i + 1])
        if not seg.is_degenerate:
            segments.append(seg)
    return segments


def boundary_segments(geometry: BaseGeometry) -> List[Segment]:
    """Return every non-degenerate boundary segment of ``geometry``."""
    segments: List[Segment] = []
    for ring in iter_rings(geometry):
        segments.extend(ring_segments(ring))
    return segments


def feature_segments(feature: Feature) -> List[FeatureSegment]:
    """Enumerate the boundary segments of ``feature`` as FeatureSegments.

    Shell indices count rings across the whole geometry (exterior first,
    then holes, part after part). Segment indices are positions within the
    ring, so they stay stable when degenerate segments are skipped.

    Examples:
        >>> square = Feature(1, Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]))
        >>> [s.segment for s in feature_segments(square)]
        [0, 1, 2, 3]
    """
    result: List[FeatureSegment] = []
    for shell_index, ring in enumerate(iter_rings(feature.geometry)):
        for seg_index in range(len(ring) - 1):
            p0 = ring[seg_index]
            p1 = ring[seg_index + 1]
            if p0[0] == p1[0] and p0[1] == p1[1]:
                continue
            result.append(
                FeatureSegment(p0, p1, feature=feature, shell=shell_index, segment=seg_index)
            )
    return result


def discrete_hausdorff_distance(
    coords_a: np.ndarray,
    coords_b: np.ndarray,
) -> float:
    """Discrete Hausdorff distance between two vertex sets.

    The maximum, over the vertices of each set, of the distance to the
    nearest vertex of the other set, taken in both directions.

    Examples:
        >>> a = np.array([[0.0, 0.0], [10.0, 0.0]])
        >>> b = np.array([[0.0, 1.0], [10.0, 1.0]])
        >>> discrete_hausdorff_distance(a, b)
        1.0
    """
    a = np.asarray(coords_a, dtype=float)[:, :2]
    b = np.asarray(coords_b, dtype=float)[:, :2]
    if len(a) == 0 or len(b) == 0:
        return float("inf")
    distances = np.linalg.norm(a[:, np.newaxis, :] - b[np.newaxis, :, :], axis=2)
    return float(max(distances.min(axis=1).max(), distances.min(axis=0).max()))


__all__ = [
    'polygon_parts',
    'line_parts',
    'iter_rings',
    'ring_segments',
    'boundary_segments',
    'feature_segments',
    'discrete_hausdorff_distance',
]
