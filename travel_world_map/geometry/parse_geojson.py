"""GeoJSON schema adapter.

Parses a FeatureCollection document into ``AdaptedFeature`` records and
normalizes geometry into a flat list of rings:

- ``Polygon``: the coordinate payload is already a list of rings.
- ``MultiPolygon``: a list of polygons, each a list of rings; flattened
  one level so every ring becomes an independent entry.
- Any other geometry type yields no rings (not an error).

Rings stay in GeoJSON ``(longitude, latitude)`` axis order inside the
adapter. ``to_ring`` performs the one and only swap into the
``(latitude, longitude)`` ``Coordinate`` representation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from travel_world_map.core.constants import GEOMETRY_MULTIPOLYGON, GEOMETRY_POLYGON
from travel_world_map.core.exceptions import ParseError
from travel_world_map.models.country import Coordinate, Ring
from travel_world_map.models.geojson import (
    GeoJSONFeatureCollection,
    GeoJSONGeometry,
    GeoJSONProperties,
)

logger = logging.getLogger("travel_world_map.geometry.parse_geojson")

RawRing = list[tuple[float, float]]
"""A ring in GeoJSON axis order: ``(longitude, latitude)`` pairs."""


@dataclass(frozen=True, slots=True)
class AdaptedFeature:
    """One feature after schema validation and geometry normalization.

    Attributes:
        properties: Typed identifier properties.
        rings: Normalized rings in ``(longitude, latitude)`` order.
        feature_index: Zero-based position of the feature in the collection.
    """

    properties: GeoJSONProperties
    rings: list[RawRing] = field(default_factory=list)
    feature_index: int = 0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_feature_collection(data: bytes | str) -> list[AdaptedFeature]:
    """Parse a FeatureCollection document into adapted features.

    Args:
        data: Raw JSON document.

    Returns:
        One ``AdaptedFeature`` per input feature, in document order.

    Raises:
        ParseError: If the document is not valid JSON, lacks required
            structural keys, or has a malformed Polygon/MultiPolygon
            coordinate payload.
    """
    try:
        collection = GeoJSONFeatureCollection.model_validate_json(data)
    except PydanticValidationError as exc:
        msg = f"Invalid GeoJSON FeatureCollection: {_summarize(exc)}"
        raise ParseError(msg) from exc

    features: list[AdaptedFeature] = []
    for idx, feature in enumerate(collection.features):
        rings = normalize_geometry(feature.geometry, context=f"feature {idx}")
        features.append(
            AdaptedFeature(properties=feature.properties, rings=rings, feature_index=idx)
        )

    logger.debug("GeoJSON parsed | features=%d", len(features))
    return features


def normalize_geometry(geometry: GeoJSONGeometry, *, context: str = "geometry") -> list[RawRing]:
    """Return the geometry's rings as one flat list.

    Raises:
        ParseError: If a Polygon or MultiPolygon payload is malformed.
    """
    if geometry.type == GEOMETRY_POLYGON:
        return _polygon_rings(geometry.coordinates, context)

    if geometry.type == GEOMETRY_MULTIPOLYGON:
        polygons = geometry.coordinates
        if not isinstance(polygons, list):
            msg = f"MultiPolygon coordinates must be a list in {context}"
            raise ParseError(msg)
        rings: list[RawRing] = []
        for part_idx, polygon in enumerate(polygons):
            rings.extend(_polygon_rings(polygon, f"{context} (part {part_idx})"))
        return rings

    return []


def to_ring(raw_ring: RawRing) -> Ring:
    """Swap a ``(longitude, latitude)`` ring into ``Coordinate`` order."""
    return tuple(Coordinate(latitude=lat, longitude=lon) for lon, lat in raw_ring)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _polygon_rings(payload: object, context: str) -> list[RawRing]:
    if not isinstance(payload, list):
        msg = f"Polygon coordinates must be a list of rings in {context}"
        raise ParseError(msg)
    rings: list[RawRing] = []
    for ring_idx, ring in enumerate(payload):
        if not isinstance(ring, list):
            msg = f"Ring {ring_idx} must be a list of positions in {context}"
            raise ParseError(msg)
        rings.append(_positions(ring, f"{context}, ring {ring_idx}"))
    return rings


def _positions(raw_ring: list[object], context: str) -> RawRing:
    """Convert GeoJSON positions to ``(lon, lat)`` tuples.

    Drops altitude (third element) if present.
    """
    coords: RawRing = []
    for idx, position in enumerate(raw_ring):
        if not isinstance(position, list):
            msg = (
                f"Malformed position at index {idx} in {context}: "
                f"expected list, got {type(position).__name__}"
            )
            raise ParseError(msg)
        if len(position) < 2:
            msg = (
                f"Malformed position at index {idx} in {context}: "
                f"expected at least 2 elements, got {len(position)}"
            )
            raise ParseError(msg)
        lon, lat = position[0], position[1]
        if not _is_number(lon) or not _is_number(lat):
            msg = (
                f"Malformed position at index {idx} in {context}: "
                f"non-numeric value (lon={lon!r}, lat={lat!r})"
            )
            raise ParseError(msg)
        coords.append((float(lon), float(lat)))  # type: ignore[arg-type]
    return coords


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _summarize(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    suffix = f" (+{exc.error_count() - 1} more)" if exc.error_count() > 1 else ""
    if location:
        return f"{location}: {first.get('msg', '')}{suffix}"
    return f"{first.get('msg', '')}{suffix}"
