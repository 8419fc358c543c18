"""Data models and schemas.

Defines the data structures used throughout the geometry core:
- Coordinate / Ring / Country: Canonical country geometry
- Viewport: Visible map region and named presets
- GeoJSON*: Pydantic schema for the input FeatureCollection
"""

from travel_world_map.models.country import Coordinate, Country, Ring
from travel_world_map.models.geojson import (
    GeoJSONFeature,
    GeoJSONFeatureCollection,
    GeoJSONGeometry,
    GeoJSONProperties,
)
from travel_world_map.models.viewport import Viewport, named_region

__all__ = [
    "Coordinate",
    "Country",
    "GeoJSONFeature",
    "GeoJSONFeatureCollection",
    "GeoJSONGeometry",
    "GeoJSONProperties",
    "Ring",
    "Viewport",
    "named_region",
]
