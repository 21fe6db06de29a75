"""Type definitions for polyconflate operations.

This module defines enums for mode parameters throughout the library.
"""

from enum import Enum
from typing import Type, TypeVar, Union

from .errors import ConfigurationError


class OrientationMode(Enum):
    """Relative orientation two boundary segments must have to match.

    Attributes:
        SAME: Segments run in the same direction
        OPPOSITE: Segments run in opposite directions (default, the usual case
            for the shared edge of two adjacent polygons)
        EITHER: Direction is ignored

    Examples:
        >>> from polyconflate import SegmentMatcher, OrientationMode
        >>> matcher = SegmentMatcher(1.0, 5.0, orientation=OrientationMode.EITHER)
    """
    SAME = 'same'
    OPPOSITE = 'opposite'
    EITHER = 'either'


class IndicatorStrategy(Enum):
    """Method used to build overlap indicators for a pair of geometries.

    Attributes:
        BOUNDARY: Boundary linework of each geometry lying inside the other
        SEGMENT: Segment by segment clipping (slower, more robust)
    """
    BOUNDARY = 'boundary'
    SEGMENT = 'segment'


E = TypeVar('E', bound=Enum)


def coerce_enum(value: Union[E, str], enum_type: Type[E]) -> E:
    """Return ``value`` as a member of ``enum_type``.

    Accepts an enum member or its string value (case-insensitive).

    Raises:
        ConfigurationError: If the string does not name a member
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        for member in enum_type:
            if member.value == lowered:
                return member
    raise ConfigurationError(f"Unknown {enum_type.__name__}: {value!r}")


__all__ = [
    'OrientationMode',
    'IndicatorStrategy',
    'coerce_enum',
]
