"""Country registry: canonical, sorted list of countries.

Builds ``Country`` records from a GeoJSON FeatureCollection and exposes
lookup and search over them.

Identifier resolution (kept exactly as the dataset expects):

- A feature is included only if it has a non-empty ``name``.
- ``id`` is the ISO alpha-2 code when present, non-empty and not the
  ``-99`` sentinel; otherwise the uppercased name with spaces replaced
  by underscores.
- ``iso_a3`` is stored as-is unless it is the ``-99`` sentinel (or
  absent), in which case it is ``""``.

Features without a name are a data-quality filter, not an error: they
are dropped silently (DEBUG log only). A collection where every feature
is dropped loads successfully with zero countries.

Loading is lazy and once-only. The first caller reads and parses the
file; concurrent callers wait on a lock and observe the same result.
A failed load is never retried: the registry stays empty, every query
returns an empty list or ``None``, and the error is kept in
``load_error`` for diagnostics instead of propagating to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from travel_world_map.core.constants import ISO_SENTINEL
from travel_world_map.core.exceptions import (
    DecodeFailedError,
    LoadError,
    ParseError,
    ResourceMissingError,
)
from travel_world_map.geometry.parse_geojson import parse_feature_collection, to_ring
from travel_world_map.models.country import Country

if TYPE_CHECKING:
    from collections.abc import Iterable

    from travel_world_map.core.config import WorldMapConfig
    from travel_world_map.geometry.parse_geojson import AdaptedFeature

logger = logging.getLogger("travel_world_map.services.country_registry")


class CountryRegistry:
    """Load-once, read-only registry of countries from one GeoJSON source.

    The registry is an explicit object injected into its consumers; one
    instance per data source lives for as long as its owner keeps it.
    """

    def __init__(self, source: Path | str) -> None:
        self._source = Path(source)
        self._countries: tuple[Country, ...] = ()
        self._load_error: LoadError | None = None
        self._loaded = False
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: WorldMapConfig) -> CountryRegistry:
        return cls(config.geojson_path)

    @property
    def source(self) -> Path:
        return self._source

    @property
    def is_loaded(self) -> bool:
        """Whether a load attempt has completed (successfully or not)."""
        return self._loaded

    @property
    def load_error(self) -> LoadError | None:
        """The error of a failed load, ``None`` otherwise."""
        return self._load_error

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    def load(self) -> LoadError | None:
        """Load the countries if no load has happened yet.

        Safe to call repeatedly and from several threads. Never raises
        ``LoadError``; the failure is logged and returned instead.

        Returns:
            ``None`` on success, the ``LoadError`` on failure.
        """
        if self._loaded:
            return self._load_error

        with self._lock:
            if self._loaded:
                return self._load_error
            try:
                countries = build_countries(read_features(self._source))
            except LoadError as exc:
                self._load_error = exc
                logger.error(
                    "Country load failed | source=%s | code=%s | error=%s",
                    self._source,
                    exc.code,
                    exc.message,
                )
            else:
                self._countries = tuple(countries)
                logger.info(
                    "Countries loaded | count=%d | source=%s",
                    len(self._countries),
                    self._source,
                )
            finally:
                self._loaded = True

        return self._load_error

    async def load_async(self) -> LoadError | None:
        """Await a full load without blocking the event loop."""
        return await asyncio.to_thread(self.load)

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def snapshot(self) -> list[Country]:
        """Return what is loaded so far without triggering a load."""
        return list(self._countries)

    def all(self) -> list[Country]:
        """Return every country sorted by name (loads on first access)."""
        self.load()
        return list(self._countries)

    def by_id(self, code: str) -> Country | None:
        """Case-insensitive exact match on ``id``."""
        wanted = code.upper()
        return next((c for c in self.all() if c.id.upper() == wanted), None)

    def by_name(self, name: str) -> Country | None:
        """Case-insensitive exact match on ``name``."""
        wanted = name.lower()
        return next((c for c in self.all() if c.name.lower() == wanted), None)

    def search(self, query: str) -> list[Country]:
        """Case-insensitive substring match on ``name``, ``id`` or ``iso_a3``.

        An empty query returns ``all()`` unchanged.
        """
        countries = self.all()
        if not query:
            return countries
        needle = query.lower()
        return [
            c
            for c in countries
            if needle in c.name.lower() or needle in c.id.lower() or needle in c.iso_a3.lower()
        ]


# ---------------------------------------------------------------------------
# Building countries
# ---------------------------------------------------------------------------


def read_features(source: Path) -> list[AdaptedFeature]:
    """Read and parse the FeatureCollection at *source*.

    Raises:
        ResourceMissingError: If *source* is not an existing file.
        DecodeFailedError: If the file cannot be read or parsed.
    """
    if not source.is_file():
        msg = f"GeoJSON file not found: {source}"
        raise ResourceMissingError(msg)

    try:
        content = source.read_bytes()
    except OSError as exc:
        raise DecodeFailedError(f"cannot read {source}: {exc}") from exc

    try:
        return parse_feature_collection(content)
    except ParseError as exc:
        raise DecodeFailedError(exc.message) from exc


def build_countries(features: Iterable[AdaptedFeature]) -> list[Country]:
    """Convert adapted features to countries sorted by name.

    Sorting is a stable ordinal (code point) comparison on ``name``.
    """
    countries: list[Country] = []
    dropped = 0
    for feature in features:
        country = country_from_feature(feature)
        if country is None:
            dropped += 1
            logger.debug("Feature dropped | index=%d | reason=missing name", feature.feature_index)
            continue
        countries.append(country)

    if dropped:
        logger.debug("Features without a name dropped | count=%d", dropped)

    countries.sort(key=lambda c: c.name)
    return countries


def country_from_feature(feature: AdaptedFeature) -> Country | None:
    """Build a ``Country`` from one feature, or ``None`` if it has no name."""
    props = feature.properties
    if not props.name:
        return None
    return Country(
        id=resolve_country_id(props.name, props.iso_a2),
        name=props.name,
        iso_a3=normalize_iso_a3(props.iso_a3),
        rings=tuple(to_ring(raw) for raw in feature.rings),
    )


def resolve_country_id(name: str, iso_a2: str | None) -> str:
    """Prefer alpha-2; fall back to ``NAME_WITH_UNDERSCORES``."""
    if iso_a2 and iso_a2 != ISO_SENTINEL:
        return iso_a2
    return name.upper().replace(" ", "_")


def normalize_iso_a3(iso_a3: str | None) -> str:
    if iso_a3 is None or iso_a3 == ISO_SENTINEL:
        return ""
    return iso_a3
