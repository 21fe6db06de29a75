"""Overlap detection and overlap indicator construction."""

from .detector import (
    FEATURES_UNIT,
    OverlapDetector,
    TwoCollectionOverlapDetector,
    interiors_intersect,
)
from .indicators import (
    DEFAULT_STRATEGIES,
    IndicatorResult,
    IndicatorStep,
    boundary_indicators,
    build_overlap_indicators,
    segment_indicators,
    size_indicator,
)

__all__ = [
    'OverlapDetector',
    'TwoCollectionOverlapDetector',
    'interiors_intersect',
    'FEATURES_UNIT',
    'IndicatorResult',
    'IndicatorStep',
    'DEFAULT_STRATEGIES',
    'boundary_indicators',
    'segment_indicators',
    'size_indicator',
    'build_overlap_indicators',
]
