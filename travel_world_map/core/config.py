"""World map configuration loaded from environment variables.

All configuration values have defaults matching the embeddable widget's
defaults. ``from_env()`` raises ``ConfigValidationError`` if any value is
out of its valid range so that bad configuration is caught at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from travel_world_map.core.constants import (
    DEFAULT_GEOJSON_PATH,
    DEFAULT_MAX_POINTS_PER_POLYGON,
)
from travel_world_map.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class WorldMapConfig:
    """Immutable world map configuration.

    Attributes:
        geojson_path: Filesystem path of the country FeatureCollection.
        max_points_per_polygon: Vertex budget per ring after simplification.
        enable_region_optimization: Filter rings by viewport on camera changes.
        log_optimization_stats: Log point-reduction statistics after loading.
    """

    geojson_path: str = str(DEFAULT_GEOJSON_PATH)
    max_points_per_polygon: int = DEFAULT_MAX_POINTS_PER_POLYGON
    enable_region_optimization: bool = True
    log_optimization_stats: bool = False

    @classmethod
    def from_env(cls) -> WorldMapConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range, a boolean
                is not recognised, or the GeoJSON path is empty.
            ValueError: If an integer environment variable cannot be
                parsed (e.g. ``WORLD_MAP_MAX_POINTS_PER_POLYGON=abc``).
        """
        config = cls(
            geojson_path=os.getenv("WORLD_MAP_GEOJSON_PATH", str(DEFAULT_GEOJSON_PATH)),
            max_points_per_polygon=int(
                os.getenv("WORLD_MAP_MAX_POINTS_PER_POLYGON", str(DEFAULT_MAX_POINTS_PER_POLYGON))
            ),
            enable_region_optimization=_env_bool("WORLD_MAP_ENABLE_REGION_OPTIMIZATION", True),
            log_optimization_stats=_env_bool("WORLD_MAP_LOG_OPTIMIZATION_STATS", False),
        )
        _validate(config)
        return config


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false, 1/0, yes/no, on/off)")


def _validate(config: WorldMapConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_points_per_polygon < 1:
        raise ConfigValidationError(
            "WORLD_MAP_MAX_POINTS_PER_POLYGON",
            config.max_points_per_polygon,
            "must be >= 1 (points)",
        )

    if not config.geojson_path.strip():
        raise ConfigValidationError(
            "WORLD_MAP_GEOJSON_PATH",
            config.geojson_path,
            "must not be empty",
        )
