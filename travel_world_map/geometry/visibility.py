"""Viewport visibility filtering.

A ring counts as visible when at least one of its vertices falls inside
the viewport bounds. This is a coarse test, not a polygon/rectangle
intersection: a ring that fully surrounds the viewport without a vertex
inside it is excluded. The approximation is kept on purpose.

Every viewport change recomputes visibility for every country; there is
no spatial index and no incremental update.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from travel_world_map.models.country import Country
    from travel_world_map.models.viewport import Viewport

logger = logging.getLogger("travel_world_map.geometry.visibility")


def visible_ring_indices(country: Country, viewport: Viewport) -> list[int]:
    """Return ascending indices of rings with a vertex inside *viewport*."""
    return [
        idx
        for idx, ring in enumerate(country.rings)
        if any(viewport.contains(vertex) for vertex in ring)
    ]


def filtered_view(country: Country, indices: Sequence[int]) -> Country:
    """Return a copy of *country* holding only the rings at *indices*.

    Identity fields are shared with the source. Relative ring order is
    preserved. An empty *indices* yields a country with no rings; callers
    decide whether to drop it.
    """
    keep = sorted(set(indices))
    return replace(country, rings=tuple(country.rings[idx] for idx in keep))


def compute_visible_countries(countries: Iterable[Country], viewport: Viewport) -> list[Country]:
    """Build the render set for *viewport*.

    Countries with no visible ring are left out.
    """
    visible: list[Country] = []
    total = 0
    for country in countries:
        total += 1
        indices = visible_ring_indices(country, viewport)
        if not indices:
            continue
        visible.append(filtered_view(country, indices))

    logger.debug(
        "Visibility recomputed | visible=%d | total=%d | bounds=[%.4f, %.4f, %.4f, %.4f]",
        len(visible),
        total,
        *viewport.bounds,
    )
    return visible
