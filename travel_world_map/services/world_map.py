"""World map render-set controller.

Holds the integrator's options and the current viewport, and turns the
registry's countries into the polygons a rendering surface draws:

1. ``load()`` fetches the full country list once.
2. ``on_viewport_change()`` recomputes the visible countries (every
   country, every time; debouncing is the integration's business).
3. ``polygons()`` simplifies each visible ring and attaches styling.

Styling values and interaction modes are passed through untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from travel_world_map.core.constants import (
    DEFAULT_MAX_POINTS_PER_POLYGON,
    DEFAULT_STROKE_COLOR,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_UNVISITED_COLOR,
    DEFAULT_VISITED_COLOR,
    INTERACTION_PAN,
    INTERACTION_ZOOM,
)
from travel_world_map.geometry.simplify import simplify
from travel_world_map.geometry.stats import compute_optimization_stats, log_optimization_stats
from travel_world_map.geometry.visibility import compute_visible_countries
from travel_world_map.models.viewport import Viewport, named_region
from travel_world_map.services.country_registry import CountryRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from travel_world_map.core.config import WorldMapConfig
    from travel_world_map.models.country import Country, Ring

logger = logging.getLogger("travel_world_map.services.world_map")


@dataclass(frozen=True, slots=True)
class MapStyle:
    """Fill and stroke styling, forwarded to the rendering surface as-is."""

    visited_color: Any = DEFAULT_VISITED_COLOR
    unvisited_color: Any = DEFAULT_UNVISITED_COLOR
    stroke_color: Any = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH


@dataclass(frozen=True, slots=True)
class WorldMapOptions:
    """Integrator-facing options.

    Build these through one of the three entry points
    (``for_visited_codes``, ``for_visited_names``, ``unvisited``).

    Attributes:
        visited_country_codes: Visited country ids, uppercased.
        style: Fill and stroke styling.
        max_points_per_polygon: Vertex budget per drawn ring.
        enable_region_optimization: Filter rings by viewport; when
            ``False`` every country is always drawn in full.
        interaction_modes: Forwarded to the rendering surface.
        initial_region: Starting viewport; the Europe preset when unset.
    """

    visited_country_codes: frozenset[str] = frozenset()
    style: MapStyle = field(default_factory=MapStyle)
    max_points_per_polygon: int = DEFAULT_MAX_POINTS_PER_POLYGON
    enable_region_optimization: bool = True
    interaction_modes: tuple[str, ...] = (INTERACTION_PAN, INTERACTION_ZOOM)
    initial_region: Viewport | None = None

    def __post_init__(self) -> None:
        codes = frozenset(code.upper() for code in self.visited_country_codes)
        object.__setattr__(self, "visited_country_codes", codes)

    @classmethod
    def for_visited_codes(cls, codes: Iterable[str], **kwargs: Any) -> WorldMapOptions:
        return cls(visited_country_codes=frozenset(codes), **kwargs)

    @classmethod
    def for_visited_names(
        cls,
        names: Iterable[str],
        registry: CountryRegistry,
        **kwargs: Any,
    ) -> WorldMapOptions:
        """Resolve display names to ids; names the registry does not know are skipped."""
        codes: set[str] = set()
        for name in names:
            country = registry.by_name(name)
            if country is None:
                logger.debug("Visited name not resolved | name=%s", name)
                continue
            codes.add(country.id)
        return cls(visited_country_codes=frozenset(codes), **kwargs)

    @classmethod
    def unvisited(cls, **kwargs: Any) -> WorldMapOptions:
        kwargs.setdefault("interaction_modes", (INTERACTION_PAN,))
        return cls(visited_country_codes=frozenset(), **kwargs)

    @property
    def region(self) -> Viewport:
        """The initial viewport, falling back to the Europe preset."""
        return self.initial_region if self.initial_region is not None else named_region()


@dataclass(frozen=True, slots=True)
class MapPolygon:
    """One ring ready to draw.

    Attributes:
        country_id: Id of the owning country.
        coordinates: Simplified ring.
        visited: Whether the owning country is visited.
        fill_color: Visited or unvisited fill from the style.
        stroke_color: Outline colour from the style.
        stroke_width: Outline width from the style.
    """

    country_id: str
    coordinates: Ring
    visited: bool
    fill_color: Any
    stroke_color: Any
    stroke_width: float


class WorldMap:
    """Render-set state for one map widget instance."""

    def __init__(
        self,
        registry: CountryRegistry,
        options: WorldMapOptions,
        *,
        log_stats: bool = False,
    ) -> None:
        self._registry = registry
        self._options = options
        self._log_stats = log_stats
        self._all_countries: list[Country] = []
        self._visible_countries: list[Country] = []
        self._current_viewport: Viewport | None = None

    @property
    def options(self) -> WorldMapOptions:
        return self._options

    @property
    def current_viewport(self) -> Viewport | None:
        return self._current_viewport

    @property
    def all_countries(self) -> list[Country]:
        return list(self._all_countries)

    @property
    def visible_countries(self) -> list[Country]:
        return list(self._visible_countries)

    def load(self) -> None:
        """Fetch every country from the registry and build the render set."""
        self._all_countries = self._registry.all()
        if self._log_stats:
            log_optimization_stats(
                compute_optimization_stats(
                    self._all_countries, self._options.max_points_per_polygon
                )
            )
        self._update_visible_countries()

    async def load_async(self) -> None:
        """Await the registry load off the event loop, then build the render set."""
        await self._registry.load_async()
        self.load()

    def on_viewport_change(self, viewport: Viewport) -> None:
        """Recompute the render set for *viewport*.

        Ignored when region optimization is disabled.
        """
        if not self._options.enable_region_optimization:
            return
        self._current_viewport = viewport
        self._update_visible_countries()

    def is_visited(self, country: Country) -> bool:
        return country.id.upper() in self._options.visited_country_codes

    def polygons(self) -> list[MapPolygon]:
        """Return every visible ring, simplified and styled."""
        style = self._options.style
        max_points = self._options.max_points_per_polygon
        result: list[MapPolygon] = []
        for country in self._visible_countries:
            visited = self.is_visited(country)
            fill = style.visited_color if visited else style.unvisited_color
            for ring in country.rings:
                result.append(
                    MapPolygon(
                        country_id=country.id,
                        coordinates=simplify(ring, max_points),
                        visited=visited,
                        fill_color=fill,
                        stroke_color=style.stroke_color,
                        stroke_width=style.stroke_width,
                    )
                )
        return result

    def _update_visible_countries(self) -> None:
        if not self._options.enable_region_optimization or self._current_viewport is None:
            self._visible_countries = list(self._all_countries)
            return
        self._visible_countries = compute_visible_countries(
            self._all_countries, self._current_viewport
        )


def build_world_map(
    config: WorldMapConfig,
    *,
    visited_country_codes: Iterable[str] | None = None,
    visited_country_names: Iterable[str] | None = None,
    registry: CountryRegistry | None = None,
    **kwargs: Any,
) -> WorldMap:
    """Wire a ``WorldMap`` from configuration.

    At most one of *visited_country_codes* and *visited_country_names*
    may be given; with neither, no country is visited. Extra keyword
    arguments are forwarded to ``WorldMapOptions``.

    Raises:
        ValueError: If both visited sets are given.
    """
    if visited_country_codes is not None and visited_country_names is not None:
        msg = "Pass either visited_country_codes or visited_country_names, not both"
        raise ValueError(msg)

    registry = registry or CountryRegistry.from_config(config)
    kwargs.setdefault("max_points_per_polygon", config.max_points_per_polygon)
    kwargs.setdefault("enable_region_optimization", config.enable_region_optimization)

    if visited_country_codes is not None:
        options = WorldMapOptions.for_visited_codes(visited_country_codes, **kwargs)
    elif visited_country_names is not None:
        options = WorldMapOptions.for_visited_names(visited_country_names, registry, **kwargs)
    else:
        options = WorldMapOptions.unvisited(**kwargs)

    return WorldMap(registry, options, log_stats=config.log_optimization_stats)
