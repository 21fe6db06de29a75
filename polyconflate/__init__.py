"""Polyconflate - Geometric conflation and coverage quality checks.

This library matches boundary segments between vector datasets, snaps
near-coincident polygon vertices, and detects and measures overlaps between
features using Shapely.
"""


# Segment matching
from .match import (
    SegmentMatcher,
    match_boundary_segments,
    unmatched_segments,
)

# Vertex snapping
from .coverage import (
    Vertex,
    Shell,
    VertexSnapNetwork,
    SnapResult,
    snap_shells,
)

# Overlap detection
from .overlap import (
    OverlapDetector,
    TwoCollectionOverlapDetector,
    build_overlap_indicators,
)

# Quality checks
from .qa import (
    CloseVertexFinder,
    OverlapReport,
    CloseVertexReport,
    find_internal_overlaps,
    find_overlaps,
    find_close_vertices,
)

# Metrics
from .metrics import min_max_value

# Core types
from .core import (
    Feature,
    Segment,
    FeatureSegment,
    OrientationMode,
    IndicatorStrategy,
    SegmentMatchConfig,
    OverlapConfig,
    TaskMonitor,
    NullTaskMonitor,
    features_from_geometries,
)

# Core exceptions
from .core import (
    PolyconflateError,
    ConfigurationError,
    UnresolvedOverlapWarning,
)

__all__ = [

    # Segment matching
    'SegmentMatcher',
    'match_boundary_segments',
    'unmatched_segments',

    # Vertex snapping
    'Vertex',
    'Shell',
    'VertexSnapNetwork',
    'SnapResult',
    'snap_shells',

    # Overlap detection
    'OverlapDetector',
    'TwoCollectionOverlapDetector',
    'build_overlap_indicators',

    # Quality checks
    'CloseVertexFinder',
    'OverlapReport',
    'CloseVertexReport',
    'find_internal_overlaps',
    'find_overlaps',
    'find_close_vertices',

    # Metrics
    'min_max_value',

    # Core types
    'Feature',
    'Segment',
    'FeatureSegment',
    'OrientationMode',
    'IndicatorStrategy',
    'SegmentMatchConfig',
    'OverlapConfig',
    'TaskMonitor',
    'NullTaskMonitor',
    'features_from_geometries',

    # Core exceptions
    'PolyconflateError',
    'ConfigurationError',
    'UnresolvedOverlapWarning',
]
