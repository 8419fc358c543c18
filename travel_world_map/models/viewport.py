"""Viewport (visible map region) model.

A viewport is a centre plus a latitude/longitude span in degrees. Its
bounds are a plain axis-aligned rectangle ``centre ± span / 2``; spans
crossing the antimeridian are not wrapped.

Named regions are defined by a span in metres, like a map widget's
"region with distance" constructor. The metre span is converted to
degrees on the WGS 84 ellipsoid with ``pyproj.Geod``, never by assuming
a spherical degree length.
"""

from __future__ import annotations

from dataclasses import dataclass

from travel_world_map.core.constants import DEFAULT_REGION, REGION_PRESETS
from travel_world_map.core.exceptions import GeometryError
from travel_world_map.models.country import Coordinate

# Degree-length sampling stays clear of the poles where a degree of
# longitude collapses to zero metres.
_MAX_SAMPLE_LATITUDE = 89.0
_SAMPLE_HALF_WIDTH_DEG = 0.5

MAX_LAT_DELTA = 180.0
MAX_LON_DELTA = 360.0


@dataclass(frozen=True, slots=True)
class Viewport:
    """Visible rectangular window given as centre + span.

    Attributes:
        center: Centre of the window.
        lat_delta: Total latitude span in degrees.
        lon_delta: Total longitude span in degrees.
    """

    center: Coordinate
    lat_delta: float
    lon_delta: float

    @property
    def min_latitude(self) -> float:
        return self.center.latitude - self.lat_delta / 2

    @property
    def max_latitude(self) -> float:
        return self.center.latitude + self.lat_delta / 2

    @property
    def min_longitude(self) -> float:
        return self.center.longitude - self.lon_delta / 2

    @property
    def max_longitude(self) -> float:
        return self.center.longitude + self.lon_delta / 2

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """``(min_lat, min_lon, max_lat, max_lon)``."""
        return (self.min_latitude, self.min_longitude, self.max_latitude, self.max_longitude)

    def contains(self, coordinate: Coordinate) -> bool:
        """Whether *coordinate* lies inside the bounds (edges included)."""
        return (
            self.min_latitude <= coordinate.latitude <= self.max_latitude
            and self.min_longitude <= coordinate.longitude <= self.max_longitude
        )

    @classmethod
    def from_distance(
        cls,
        center: Coordinate,
        latitudinal_m: float,
        longitudinal_m: float,
    ) -> Viewport:
        """Build a viewport spanning the given distances in metres.

        The degree length of the meridian and of the parallel through
        *center* is measured geodesically, then the spans are capped at
        180° of latitude and 360° of longitude.

        Raises:
            GeometryError: If a span is negative.
        """
        if latitudinal_m < 0 or longitudinal_m < 0:
            msg = (
                f"Viewport spans must be >= 0 metres, got "
                f"latitudinal={latitudinal_m}, longitudinal={longitudinal_m}"
            )
            raise GeometryError(msg, code="INVALID_VIEWPORT_SPAN")

        from pyproj import Geod

        geod = Geod(ellps="WGS84")

        lat = max(-_MAX_SAMPLE_LATITUDE, min(_MAX_SAMPLE_LATITUDE, center.latitude))
        lon = center.longitude
        w = _SAMPLE_HALF_WIDTH_DEG

        # Geod.inv returns (forward_azimuth, back_azimuth, distance_m)
        _, _, m_per_deg_lat = geod.inv(lon, lat - w, lon, lat + w)
        _, _, m_per_deg_lon = geod.inv(lon - w, lat, lon + w, lat)

        lat_delta = min(MAX_LAT_DELTA, latitudinal_m / m_per_deg_lat)
        lon_delta = min(MAX_LON_DELTA, longitudinal_m / m_per_deg_lon)
        return cls(center=center, lat_delta=lat_delta, lon_delta=lon_delta)


def named_region(name: str = DEFAULT_REGION) -> Viewport:
    """Return the preset viewport called *name* (e.g. ``"europe"``).

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        lat, lon, span_m = REGION_PRESETS[name]
    except KeyError:
        available = ", ".join(sorted(REGION_PRESETS))
        msg = f"Unknown region {name!r}; available: {available}"
        raise KeyError(msg) from None
    return Viewport.from_distance(Coordinate(latitude=lat, longitude=lon), span_m, span_m)
