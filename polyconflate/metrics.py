"""Summary statistics over indicator features.

QA passes report the smallest and largest indicator (overlap size, vertex
distance) alongside the indicators themselves.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from .core.feature import SIZE_ATTRIBUTE, Feature


def attribute_values(
    features: Iterable[Feature],
    attribute: str = SIZE_ATTRIBUTE,
) -> List[float]:
    """Finite numeric values of ``attribute`` across ``features``."""
    values = []
    for feature in features:
        value = feature.attributes.get(attribute)
        if value is None:
            continue
        value = float(value)
        if math.isfinite(value):
            values.append(value)
    return values


def min_max_value(
    features: Iterable[Feature],
    attribute: str = SIZE_ATTRIBUTE,
) -> Tuple[float, float]:
    """Return ``(min, max)`` of ``attribute``; ``(nan, nan)`` if there are no values.

    Examples:
        >>> min_max_value(detector.size_indicators)
        (5.0, 5.0)
    """
    values = attribute_values(features, attribute)
    if not values:
        return math.nan, math.nan
    return min(values), max(values)


__all__ = [
    "attribute_values",
    "min_max_value",
]
