"""Stateful services consumed by a rendering surface.

- country_registry: Load-once registry with lookup and search
- world_map: Options, viewport handling and drawable polygons
"""

from travel_world_map.services.country_registry import CountryRegistry
from travel_world_map.services.world_map import (
    MapPolygon,
    MapStyle,
    WorldMap,
    WorldMapOptions,
    build_world_map,
)

__all__ = [
    "CountryRegistry",
    "MapPolygon",
    "MapStyle",
    "WorldMap",
    "WorldMapOptions",
    "build_world_map",
]
