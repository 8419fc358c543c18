"""Simplification statistics for diagnostics.

Summarises how many rings and vertices a dataset holds and how many
would remain after fixed-stride simplification with a given budget.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from travel_world_map.models.country import Country

logger = logging.getLogger("travel_world_map.geometry.stats")

TOP_COMPLEX_COUNT = 5


@dataclass(frozen=True, slots=True)
class CountryComplexity:
    name: str
    polygon_count: int
    point_count: int


@dataclass(frozen=True, slots=True)
class OptimizationStats:
    """Point-reduction summary.

    Attributes:
        max_points_per_polygon: Budget the estimate was computed for.
        country_count: Number of countries.
        polygon_count: Number of rings across all countries.
        points_before: Vertex total before simplification.
        points_after_estimate: Upper bound of the vertex total after it.
        reduction_pct: Whole-percent reduction, 0 for an empty dataset.
        most_complex: Countries with the most vertices, largest first.
    """

    max_points_per_polygon: int
    country_count: int = 0
    polygon_count: int = 0
    points_before: int = 0
    points_after_estimate: int = 0
    reduction_pct: int = 0
    most_complex: tuple[CountryComplexity, ...] = field(default_factory=tuple)


def compute_optimization_stats(
    countries: Sequence[Country],
    max_points_per_polygon: int,
) -> OptimizationStats:
    """Compute an ``OptimizationStats`` summary for *countries*."""
    polygon_count = sum(c.polygon_count for c in countries)
    points_before = sum(c.point_count for c in countries)
    points_after = min(points_before, polygon_count * max_points_per_polygon)

    reduction_pct = 0
    if points_before:
        reduction_pct = int((1.0 - points_after / points_before) * 100)

    ranked = sorted(countries, key=lambda c: c.point_count, reverse=True)
    most_complex = tuple(
        CountryComplexity(name=c.name, polygon_count=c.polygon_count, point_count=c.point_count)
        for c in ranked[:TOP_COMPLEX_COUNT]
    )

    return OptimizationStats(
        max_points_per_polygon=max_points_per_polygon,
        country_count=len(countries),
        polygon_count=polygon_count,
        points_before=points_before,
        points_after_estimate=points_after,
        reduction_pct=reduction_pct,
        most_complex=most_complex,
    )


def log_optimization_stats(stats: OptimizationStats) -> None:
    logger.info(
        "Optimization stats | countries=%d | polygons=%d | points_before=%d | "
        "points_after~%d | reduction=%d%% | max_points=%d",
        stats.country_count,
        stats.polygon_count,
        stats.points_before,
        stats.points_after_estimate,
        stats.reduction_pct,
        stats.max_points_per_polygon,
    )
    for rank, entry in enumerate(stats.most_complex, start=1):
        logger.info(
            "Complex country #%d | name=%s | polygons=%d | points=%d",
            rank,
            entry.name,
            entry.polygon_count,
            entry.point_count,
        )
