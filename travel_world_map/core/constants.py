"""Shared constants used across the package.

Centralises GeoJSON property keys and the dataset's absence sentinel,
plus rendering defaults and the named region presets.
"""

from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# GeoJSON input
# ---------------------------------------------------------------------------

PROPERTY_NAME: str = "name"
PROPERTY_ISO_A3: str = "ISO3166-1-Alpha-3"
PROPERTY_ISO_A2: str = "ISO3166-1-Alpha-2"

ISO_SENTINEL: str = "-99"
"""Placeholder the source dataset uses for an absent ISO code."""

GEOMETRY_POLYGON: str = "Polygon"
GEOMETRY_MULTIPOLYGON: str = "MultiPolygon"

DEFAULT_GEOJSON_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "countries.geojson"
"""Bundled dataset location used when no path is configured."""

# ---------------------------------------------------------------------------
# Rendering defaults
# ---------------------------------------------------------------------------

DEFAULT_MAX_POINTS_PER_POLYGON: int = 200

DEFAULT_VISITED_COLOR: str = "blue"
DEFAULT_UNVISITED_COLOR: str = "gray"
DEFAULT_STROKE_COLOR: str = "white"
DEFAULT_STROKE_WIDTH: float = 0.5

INTERACTION_PAN: str = "pan"
INTERACTION_ZOOM: str = "zoom"

# ---------------------------------------------------------------------------
# Named regions: (centre latitude, centre longitude, span in metres)
# ---------------------------------------------------------------------------

DEFAULT_REGION: str = "europe"

REGION_PRESETS: dict[str, tuple[float, float, float]] = {
    "europe": (48.858370, 2.294481, 8_000_000.0),
    "world": (0.0, 0.0, 40_000_000.0),
    "north_america": (40.0, -100.0, 8_000_000.0),
    "south_america": (-15.0, -60.0, 8_000_000.0),
    "asia": (30.0, 100.0, 8_000_000.0),
    "africa": (0.0, 20.0, 8_000_000.0),
    "oceania": (-25.0, 135.0, 6_000_000.0),
    "france": (46.603354, 2.888334, 1_200_000.0),
    "usa": (39.8283, -98.5795, 5_000_000.0),
}
