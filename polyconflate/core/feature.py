"""Feature container shared by the detectors and matching passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from shapely.geometry import LineString, Polygon, box
from shapely.geometry.base import BaseGeometry

Envelope = Tuple[float, float, float, float]

SIZE_ATTRIBUTE = "LENGTH"


@dataclass(eq=False)
class Feature:
    """A geometry with a stable integer ID and free-form attributes.

    Features compare by identity; two features are only the same if they are
    the same object, even when their IDs collide.
    """

    id: int
    geometry: BaseGeometry
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def envelope(self) -> Envelope:
        return self.geometry.bounds

    def __repr__(self) -> str:
        return f"Feature(id={self.id}, geometry={self.geometry.geom_type})"


def features_from_geometries(
    geometries: Iterable[BaseGeometry],
    start_id: int = 1,
) -> List[Feature]:
    """Wrap ``geometries`` as features with sequential IDs."""
    return [Feature(start_id + i, geom) for i, geom in enumerate(geometries)]


def indicator_features(
    geometries: Iterable[BaseGeometry],
    length_attribute: Optional[str] = None,
) -> List[Feature]:
    """Build indicator features, optionally tagging each with its length."""
    result = []
    for i, geom in enumerate(geometries, start=1):
        attributes = {length_attribute: geom.length} if length_attribute else {}
        result.append(Feature(i, geom, attributes))
    return result


def envelope_geometry(envelope: Envelope) -> Polygon:
    """Return the rectangle for ``envelope``, tolerating zero width/height."""
    minx, miny, maxx, maxy = envelope
    if minx == maxx or miny == maxy:
        return LineString([(minx, miny), (maxx, maxy)]).envelope
    return box(minx, miny, maxx, maxy)


def sort_by_id(features: Iterable[Feature]) -> List[Feature]:
    return sorted(features, key=lambda f: f.id)


__all__ = [
    'Envelope',
    'Feature',
    'SIZE_ATTRIBUTE',
    'envelope_geometry',
    'features_from_geometries',
    'indicator_features',
    'sort_by_id',
]
