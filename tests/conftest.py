"""Shared pytest fixtures for the Travel World Map test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.factories import make_ring
from travel_world_map.models.country import Country
from travel_world_map.services.country_registry import CountryRegistry

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


# ---------------------------------------------------------------------------
# Sample GeoJSON file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_geojson(data_dir: Path) -> Path:
    """Seven features: six named countries and one without a name.

    France is a three-part MultiPolygon, Norway has a ``-99`` alpha-2,
    Kosovo a ``-99`` alpha-3, Bosnia and Herzegovina no alpha-2 at all,
    and Pointland a Point geometry.
    """
    return data_dir / "countries_sample.geojson"


@pytest.fixture()
def malformed_geojson(data_dir: Path) -> Path:
    """Path to a truncated JSON document."""
    return data_dir / "malformed_truncated.geojson"


@pytest.fixture()
def no_names_geojson(data_dir: Path) -> Path:
    """Path to a valid collection where every feature lacks a name."""
    return data_dir / "no_names.geojson"


@pytest.fixture()
def sample_registry(sample_geojson: Path) -> CountryRegistry:
    return CountryRegistry(sample_geojson)


@pytest.fixture()
def write_geojson(tmp_path: Path) -> Callable[..., Path]:
    """Write a GeoJSON document to a temp file and return its path."""

    def _write(content: bytes, filename: str = "countries.geojson") -> Path:
        path = tmp_path / filename
        path.write_bytes(content)
        return path

    return _write


# ---------------------------------------------------------------------------
# Geometry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def square_country() -> Country:
    """Three rings: around (45, 5), around (45, 25) and around (-30, 150)."""
    return Country(
        id="SQ",
        name="Squareland",
        iso_a3="SQL",
        rings=(
            make_ring((44.0, 4.0), (44.0, 6.0), (46.0, 6.0), (46.0, 4.0), (44.0, 4.0)),
            make_ring((44.0, 24.0), (44.0, 26.0), (46.0, 26.0), (46.0, 24.0), (44.0, 24.0)),
            make_ring(
                (-31.0, 149.0), (-31.0, 151.0), (-29.0, 151.0), (-29.0, 149.0), (-31.0, 149.0)
            ),
        ),
    )
