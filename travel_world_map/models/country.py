"""Data model for a country and its polygon rings.

A Country is built once by the registry from an adapted GeoJSON feature
and never mutated afterwards. Viewport filtering produces new Country
values that share the identity fields but hold a subset of the rings.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS 84 position in ``(latitude, longitude)`` order.

    Rendering surfaces convert this to their native coordinate type at
    their own boundary.
    """

    latitude: float
    longitude: float


Ring = tuple[Coordinate, ...]
"""One closed polygon boundary. Closure is expected but not enforced."""


@dataclass(frozen=True, slots=True, eq=False)
class Country:
    """A named country with its polygon rings.

    Equality and hashing use ``id`` only, so a filtered view compares
    equal to the canonical country it was derived from.

    Attributes:
        id: Stable short identifier (ISO alpha-2, or the uppercased name
            with underscores when alpha-2 is missing).
        name: Display name, also the sort and name-lookup key.
        iso_a3: ISO alpha-3 code, ``""`` when absent.
        rings: Rings in source feature order (render z-order).
    """

    id: str
    name: str
    iso_a3: str = ""
    rings: tuple[Ring, ...] = field(default_factory=tuple)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Country):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def polygon_count(self) -> int:
        """Number of rings (each MultiPolygon part and hole counts as one)."""
        return len(self.rings)

    @property
    def point_count(self) -> int:
        """Total number of vertices across all rings."""
        return sum(len(ring) for ring in self.rings)
