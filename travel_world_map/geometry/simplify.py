"""Polygon point-count reduction.

Fixed-stride decimation: every ``stride``-th vertex is kept and the
original closing vertex is re-appended if the stride skipped it. This
does not preserve shape the way Douglas–Peucker would. The stride is
``len(ring) // max_points`` rounded down, so a ring shorter than twice
the budget keeps every vertex.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from travel_world_map.core.exceptions import GeometryError

if TYPE_CHECKING:
    from travel_world_map.models.country import Ring


def simplify(ring: Ring, max_points: int) -> Ring:
    """Reduce *ring* to roughly *max_points* vertices.

    Args:
        ring: Ring to decimate.
        max_points: Vertex budget (must be >= 1).

    Returns:
        *ring* itself when it already fits the budget, otherwise a new
        ring ending on the original last vertex. When ``len(ring)`` is a
        multiple of *max_points* the result holds at most
        ``max_points + 1`` vertices.

    Raises:
        GeometryError: If *max_points* is less than 1.
    """
    if max_points < 1:
        msg = f"max_points must be >= 1, got {max_points}"
        raise GeometryError(msg, code="INVALID_MAX_POINTS")

    count = len(ring)
    if count <= max_points:
        return ring

    stride = max(1, count // max_points)
    result = list(ring[::stride])

    last = ring[-1]
    tail = result[-1]
    if last.latitude != tail.latitude or last.longitude != tail.longitude:
        result.append(last)

    return tuple(result)
