"""Vertex snapping across the shells of a polygon coverage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from shapely.geometry import Point, Polygon, box
from shapely.strtree import STRtree

from ..core.errors import ConfigurationError
from ..core.segment import coordinate_distance
from .vertex import VertexSnapNetwork


@dataclass
class SnapResult:
    """Outcome of :func:`snap_shells`."""

    polygons: List[Polygon]
    network: VertexSnapNetwork
    snapped: int = 0
    failed: int = 0

    @property
    def conflicts(self) -> int:
        return len(self.network.conflicts())


def snap_shells(
    polygons: Sequence[Polygon],
    distance_tolerance: float,
) -> SnapResult:
    """Snap nearly coincident vertices of different shells together.

    Every ring of every polygon is registered in a :class:`VertexSnapNetwork`.
    Each vertex gets an adjustment tolerance of half its shortest incident
    segment. Pairs of vertices on disjoint sets of shells that lie strictly
    closer than ``distance_tolerance`` are snapped, closest pairs first. The
    polygons are then rebuilt from the effective vertex coordinates.

    Args:
        polygons: Input polygons
        distance_tolerance: Maximum (exclusive) distance between snapped vertices

    Returns:
        SnapResult with the rebuilt polygons, in input order

    Raises:
        ConfigurationError: If ``distance_tolerance`` is not positive
        TypeError: If an input is not a Polygon

    Examples:
        >>> left = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> right = Polygon([(10.05, 0), (20, 0), (20, 10), (10.05, 10)])
        >>> result = snap_shells([left, right], distance_tolerance=0.1)
        >>> result.snapped
        2
    """
    if distance_tolerance <= 0:
        raise ConfigurationError(
            f"distance_tolerance must be positive, got {distance_tolerance}"
        )
    for poly in polygons:
        if not isinstance(poly, Polygon):
            raise TypeError("Input geometries must be Polygons.")

    network = VertexSnapNetwork()
    layout: List[Tuple[int, List[int]]] = []
    for poly in polygons:
        if poly.is_empty:
            layout.append((-1, []))
            continue
        exterior = network.add_shell(np.asarray(poly.exterior.coords)[:, :2])
        holes = [network.add_shell(np.asarray(r.coords)[:, :2]) for r in poly.interiors]
        layout.append((exterior, holes))

    result = SnapResult(polygons=[], network=network)
    for i, j in _close_vertex_pairs(network, distance_tolerance):
        if network.snap(i, j):
            result.snapped += 1
        else:
            result.failed += 1

    for exterior, holes in layout:
        if exterior < 0:
            result.polygons.append(Polygon())
            continue
        result.polygons.append(
            Polygon(
                network.shell_coordinates(exterior),
                [network.shell_coordinates(h) for h in holes],
            )
        )
    return result


def _close_vertex_pairs(
    network: VertexSnapNetwork,
    tolerance: float,
) -> List[Tuple[int, int]]:
    """Pairs (i, j), i < j, of vertices on disjoint shells closer than tolerance,
    sorted by distance."""
    vertices = network.vertices
    if not vertices:
        return []
    tree = STRtree([Point(v.pt) for v in vertices])

    candidates = []
    for v in vertices:
        x, y = v.pt
        search = box(x - tolerance, y - tolerance, x + tolerance, y + tolerance)
        for j in tree.query(search):
            other = vertices[int(j)]
            if other.index <= v.index or v.shells & other.shells:
                continue
            distance = coordinate_distance(v.pt, other.pt)
            if distance < tolerance:
                candidates.append((distance, v.index, other.index))

    candidates.sort()
    return [(i, j) for _, i, j in candidates]


__all__ = ['SnapResult', 'snap_shells']
