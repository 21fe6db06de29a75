"""Quality checks over feature collections."""

from .close_vertices import CloseVertexFinder
from .reports import (
    OverlapReport,
    CloseVertexReport,
    find_internal_overlaps,
    find_overlaps,
    find_close_vertices,
)

__all__ = [
    'CloseVertexFinder',
    'OverlapReport',
    'CloseVertexReport',
    'find_internal_overlaps',
    'find_overlaps',
    'find_close_vertices',
]
