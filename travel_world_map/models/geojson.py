"""Pydantic schema for the country FeatureCollection.

Only the structural keys the adapter relies on are modelled; unknown
properties and foreign members are ignored. The ``coordinates`` payload
is left untyped here because its nesting depends on the geometry type
and is checked by the adapter after the type is known.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from travel_world_map.core.constants import PROPERTY_ISO_A2, PROPERTY_ISO_A3


class GeoJSONProperties(BaseModel):
    """Feature properties used for identifier resolution.

    Attributes:
        name: Country display name. Features without one are dropped later.
        iso_a3: ``ISO3166-1-Alpha-3`` value, possibly the ``-99`` sentinel.
        iso_a2: ``ISO3166-1-Alpha-2`` value, possibly the ``-99`` sentinel.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    iso_a3: str | None = Field(default=None, alias=PROPERTY_ISO_A3)
    iso_a2: str | None = Field(default=None, alias=PROPERTY_ISO_A2)


class GeoJSONGeometry(BaseModel):
    """Geometry object; ``type`` decides how ``coordinates`` is read."""

    model_config = ConfigDict(extra="ignore")

    type: str
    coordinates: Any = None


class GeoJSONFeature(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = "Feature"
    properties: GeoJSONProperties
    geometry: GeoJSONGeometry


class GeoJSONFeatureCollection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    features: list[GeoJSONFeature]
