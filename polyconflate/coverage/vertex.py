"""Shared vertices of polygon shells in a coverage.

A :class:`Vertex` can be adjusted to a new coordinate, once. It carries an
adjustment tolerance and will not be moved further than that; the tolerance
is normally half the length of the shortest segment incident on the vertex,
which rules out the endpoints of a segment being adjusted past each other.

Vertices and shells live in a :class:`VertexSnapNetwork` and refer to each
other by integer index only.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Set

from ..core.segment import Coordinate, as_coordinate, coordinate_distance


class Vertex:
    """A coverage vertex with an optional adjusted position.

    Attributes:
        pt: Original coordinate, never changed
        adjusted_pt: Coordinate the vertex was snapped to, or None
        adjust_tolerance: Maximum snap distance; only ever lowered
        conflict: Set when a snap could not make two vertices coincide
        shells: Indices of the shells this vertex belongs to
    """

    __slots__ = ("index", "pt", "adjusted_pt", "adjust_tolerance", "conflict", "shells")

    def __init__(self, pt: Sequence[float], index: int = -1):
        self.index = index
        self.pt: Coordinate = as_coordinate(pt)
        self.adjusted_pt: Optional[Coordinate] = None
        self.adjust_tolerance = math.inf
        self.conflict = False
        self.shells: Set[int] = set()

    @property
    def original_coordinate(self) -> Coordinate:
        return self.pt

    @property
    def coordinate(self) -> Coordinate:
        """Effective coordinate: the adjusted one unless unset or in conflict."""
        if self.adjusted_pt is not None and not self.conflict:
            return self.adjusted_pt
        return self.pt

    @property
    def shell_count(self) -> int:
        return len(self.shells)

    @property
    def is_adjusted(self) -> bool:
        return self.adjusted_pt is not None

    def add_shell(self, shell_index: int) -> None:
        self.shells.add(shell_index)

    def set_minimum_adjustment_tolerance(self, tolerance: float) -> None:
        """Lower the adjustment tolerance to ``tolerance`` if it is smaller."""
        if tolerance < self.adjust_tolerance:
            self.adjust_tolerance = tolerance

    def set_adjusted(self, pt: Sequence[float]) -> None:
        """Adjust this vertex to ``pt``; a no-op if ``pt`` is the original."""
        pt = as_coordinate(pt)
        if pt != self.pt:
            self.adjusted_pt = pt

    def snap(self, other: Vertex) -> bool:
        """Snap this vertex and ``other`` together.

        Rules, in order:

        1. Already coincident: success, nothing changes.
        2. Originals further apart than *this* vertex's tolerance: failure.
        3. Either vertex already adjusted: failure.
        4. The vertex in fewer shells moves onto the other's original
           coordinate; on a tie ``other`` moves onto this vertex.
        5. If the effective coordinates still differ, both vertices are
           flagged as in conflict and the snap fails.

        Returns:
            True if the vertices now share a coordinate
        """
        if self.coordinate == other.coordinate:
            return True

        snap_dist = coordinate_distance(other.pt, self.pt)
        if snap_dist > self.adjust_tolerance:
            return False

        if self.is_adjusted or other.is_adjusted:
            return False

        if other.shell_count > self.shell_count:
            self.set_adjusted(other.pt)
        else:
            other.set_adjusted(self.pt)

        if self.coordinate != other.coordinate:
            self.conflict = True
            other.conflict = True
            return False
        return True

    def __lt__(self, other: Vertex) -> bool:
        return self.pt < other.pt

    def __repr__(self) -> str:
        return f"Vertex: {self.pt} -> {self.adjusted_pt}"


class Shell:
    """A polygon ring in the network, as an ordered list of vertex indices.

    The closing vertex of the ring is not repeated.
    """

    __slots__ = ("index", "vertices")

    def __init__(self, index: int, vertices: Sequence[int]):
        self.index = index
        self.vertices: List[int] = list(vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __lt__(self, other: Shell) -> bool:
        return self.index < other.index

    def __repr__(self) -> str:
        return f"Shell({self.index}, {len(self.vertices)} vertices)"


class VertexSnapNetwork:
    """Arena of vertices shared between shells.

    Vertices are deduplicated on their exact original coordinate, so a
    vertex touched by two adjacent rings is registered once and belongs to
    both shells.

    Examples:
        >>> network = VertexSnapNetwork()
        >>> a = network.add_shell([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> b = network.add_shell([(10, 0), (20, 0), (20, 10), (10.1, 10)])
        >>> network.vertex(network.find((10, 0))).shell_count
        2
    """

    def __init__(self):
        self._vertices: List[Vertex] = []
        self._shells: List[Shell] = []
        self._lookup: Dict[Coordinate, int] = {}

    @property
    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    @property
    def shells(self) -> List[Shell]:
        return list(self._shells)

    def vertex(self, index: int) -> Vertex:
        return self._vertices[index]

    def shell(self, index: int) -> Shell:
        return self._shells[index]

    def find(self, coord: Sequence[float]) -> Optional[int]:
        """Index of the vertex at original coordinate ``coord``, if any."""
        return self._lookup.get(as_coordinate(coord))

    def add_vertex(self, coord: Sequence[float]) -> int:
        """Register a vertex, returning the existing index for a known coordinate."""
        key = as_coordinate(coord)
        index = self._lookup.get(key)
        if index is None:
            index = len(self._vertices)
            self._vertices.append(Vertex(key, index))
            self._lookup[key] = index
        return index

    def add_shell(
        self,
        coords: Sequence[Sequence[float]],
        set_tolerances: bool = True,
    ) -> int:
        """Register a ring and its vertices.

        Args:
            coords: Ring coordinates, closed or not
            set_tolerances: If True, lower each vertex's adjustment tolerance
                to half the length of its shortest incident segment in this ring

        Returns:
            Index of the new shell
        """
        points = [as_coordinate(c) for c in coords]
        if len(points) > 1 and points[0] == points[-1]:
            points = points[:-1]

        shell_index = len(self._shells)
        vertex_indices = [self.add_vertex(pt) for pt in points]
        self._shells.append(Shell(shell_index, vertex_indices))

        for vi in vertex_indices:
            self._vertices[vi].add_shell(shell_index)

        if set_tolerances:
            self._apply_segment_tolerances(vertex_indices)
        return shell_index

    def _apply_segment_tolerances(self, vertex_indices: List[int]) -> None:
        n = len(vertex_indices)
        if n < 2:
            return
        for i in range(n):
            v0 = self._vertices[vertex_indices[i]]
            v1 = self._vertices[vertex_indices[(i + 1) % n]]
            length = coordinate_distance(v0.pt, v1.pt)
            if length == 0.0:
                continue
            v0.set_minimum_adjustment_tolerance(length / 2.0)
            v1.set_minimum_adjustment_tolerance(length / 2.0)

    def snap(self, i: int, j: int) -> bool:
        """Snap vertex ``i`` with vertex ``j``; see :meth:`Vertex.snap`."""
        return self._vertices[i].snap(self._vertices[j])

    def coordinate(self, index: int) -> Coordinate:
        return self._vertices[index].coordinate

    def shell_coordinates(self, shell_index: int) -> List[Coordinate]:
        """Effective coordinates of a shell as a closed ring."""
        coords = [self._vertices[vi].coordinate for vi in self._shells[shell_index].vertices]
        if coords:
            coords.append(coords[0])
        return coords

    def adjusted(self) -> List[Vertex]:
        return [v for v in self._vertices if v.is_adjusted and not v.conflict]

    def conflicts(self) -> List[Vertex]:
        return [v for v in self._vertices if v.conflict]

    def __len__(self) -> int:
        return len(self._vertices)


__all__ = ['Vertex', 'Shell', 'VertexSnapNetwork']
