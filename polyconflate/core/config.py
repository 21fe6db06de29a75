"""Configuration dataclasses for matching and overlap detection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import ConfigurationError
from .feature import SIZE_ATTRIBUTE
from .types import OrientationMode, coerce_enum


@dataclass(frozen=True)
class SegmentMatchConfig:
    """Tolerances used to decide whether two boundary segments match.

    Attributes:
        distance_tolerance: Maximum (exclusive) Hausdorff distance between the
            mutual projections of the segments, in linear units
        angle_tolerance: Maximum (inclusive) angle between the segments, in
            degrees
        orientation: Required relative orientation of the segments
    """

    distance_tolerance: float
    angle_tolerance: float
    orientation: Union[OrientationMode, str] = OrientationMode.OPPOSITE

    def __post_init__(self):
        object.__setattr__(
            self, "orientation", coerce_enum(self.orientation, OrientationMode)
        )
        if not math.isfinite(self.distance_tolerance) or self.distance_tolerance <= 0:
            raise ConfigurationError(
                f"distance_tolerance must be positive, got {self.distance_tolerance}"
            )
        if not math.isfinite(self.angle_tolerance) or self.angle_tolerance < 0:
            raise ConfigurationError(
                f"angle_tolerance must be non-negative, got {self.angle_tolerance}"
            )

    @property
    def angle_tolerance_rad(self) -> float:
        return math.radians(self.angle_tolerance)


@dataclass
class OverlapConfig:
    """Settings for overlap indicator construction.

    Attributes:
        size_attribute: Name of the numeric attribute carried by size indicators
        size_samples: Number of points sampled along each overlap indicator
            line when searching for the deepest point of the overlap
    """

    size_attribute: str = SIZE_ATTRIBUTE
    size_samples: int = 16

    def __post_init__(self):
        if not self.size_attribute:
            raise ConfigurationError("size_attribute must be a non-empty string")
        if self.size_samples < 1:
            raise ConfigurationError(
                f"size_samples must be at least 1, got {self.size_samples}"
            )


__all__ = [
    'SegmentMatchConfig',
    'OverlapConfig',
]
