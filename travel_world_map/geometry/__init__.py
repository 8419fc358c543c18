"""Geometry pipeline stages.

- **parse_geojson**: FeatureCollection → adapted features with flat rings
- **visibility**: viewport ring filtering and render-set computation
- **simplify**: fixed-stride ring decimation
- **stats**: point-reduction diagnostics
"""

from travel_world_map.geometry.parse_geojson import (
    AdaptedFeature,
    normalize_geometry,
    parse_feature_collection,
    to_ring,
)
from travel_world_map.geometry.simplify import simplify
from travel_world_map.geometry.stats import (
    OptimizationStats,
    compute_optimization_stats,
    log_optimization_stats,
)
from travel_world_map.geometry.visibility import (
    compute_visible_countries,
    filtered_view,
    visible_ring_indices,
)

__all__ = [
    "AdaptedFeature",
    "OptimizationStats",
    "compute_optimization_stats",
    "compute_visible_countries",
    "filtered_view",
    "log_optimization_stats",
    "normalize_geometry",
    "parse_feature_collection",
    "simplify",
    "to_ring",
    "visible_ring_indices",
]
