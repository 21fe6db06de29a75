"""Core types and utilities for polyconflate.

This module provides type definitions, enums, exceptions, configuration and
the feature/segment value types used throughout the library.
"""

from .types import (
    OrientationMode,
    IndicatorStrategy,
    coerce_enum,
)

from .errors import (
    PolyconflateError,
    ConfigurationError,
    UnresolvedOverlapWarning,
)

from .config import (
    SegmentMatchConfig,
    OverlapConfig,
)

from .feature import (
    Envelope,
    Feature,
    SIZE_ATTRIBUTE,
    features_from_geometries,
)

from .segment import (
    Coordinate,
    Segment,
    FeatureSegment,
)

from .progress import (
    TaskMonitor,
    NullTaskMonitor,
    RecordingTaskMonitor,
)

__all__ = [
    # Enums
    'OrientationMode',
    'IndicatorStrategy',
    'coerce_enum',

    # Exceptions and warnings
    'PolyconflateError',
    'ConfigurationError',
    'UnresolvedOverlapWarning',

    # Configuration
    'SegmentMatchConfig',
    'OverlapConfig',

    # Value types
    'Envelope',
    'Feature',
    'SIZE_ATTRIBUTE',
    'features_from_geometries',
    'Coordinate',
    'Segment',
    'FeatureSegment',

    # Progress
    'TaskMonitor',
    'NullTaskMonitor',
    'RecordingTaskMonitor',
]
