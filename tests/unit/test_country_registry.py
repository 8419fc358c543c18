"""Tests for the country registry.

Covers:
- Identifier resolution (alpha-2, -99 sentinel, name fallback)
- Silent drop of features without a name
- Canonical ordering by name
- by_id / by_name / search semantics
- Lazy, once-only loading (sync, threaded, async)
- Failure modes: missing resource, decode failure → empty registry
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from tests.factories import make_collection, make_feature
from travel_world_map.core.config import WorldMapConfig
from travel_world_map.core.exceptions import DecodeFailedError, LoadError, ResourceMissingError
from travel_world_map.geometry.parse_geojson import AdaptedFeature
from travel_world_map.models.country import Coordinate
from travel_world_map.models.geojson import GeoJSONProperties
from travel_world_map.services import country_registry as registry_module
from travel_world_map.services.country_registry import (
    CountryRegistry,
    build_countries,
    country_from_feature,
    normalize_iso_a3,
    resolve_country_id,
)


class TestIdentifierResolution:
    """resolve_country_id / normalize_iso_a3."""

    def test_alpha2_preferred(self) -> None:
        assert resolve_country_id("France", "FR") == "FR"

    def test_sentinel_alpha2_falls_back_to_name(self) -> None:
        assert resolve_country_id("Atlantis", "-99") == "ATLANTIS"

    def test_empty_alpha2_falls_back_to_name(self) -> None:
        assert resolve_country_id("Atlantis", "") == "ATLANTIS"

    def test_missing_alpha2_falls_back_to_name(self) -> None:
        assert resolve_country_id("Bosnia and Herzegovina", None) == "BOSNIA_AND_HERZEGOVINA"

    def test_alpha2_kept_verbatim(self) -> None:
        """Alpha-2 is not case-normalized; lookups are case-insensitive instead."""
        assert resolve_country_id("France", "fr") == "fr"

    def test_iso_a3_sentinel_becomes_empty(self) -> None:
        assert normalize_iso_a3("-99") == ""

    def test_iso_a3_missing_becomes_empty(self) -> None:
        assert normalize_iso_a3(None) == ""

    def test_iso_a3_kept_as_is(self) -> None:
        assert normalize_iso_a3("FRA") == "FRA"

    def test_only_exact_sentinel_is_absent(self) -> None:
        assert normalize_iso_a3("-99 ") == "-99 "
        assert resolve_country_id("Atlantis", "-099") == "-099"


class TestCountryFromFeature:
    """country_from_feature builds a Country or drops the feature."""

    def test_builds_country_with_swapped_axes(self) -> None:
        feature = AdaptedFeature(
            properties=GeoJSONProperties(name="France", iso_a2="FR", iso_a3="FRA"),
            rings=[[(2.0, 48.0), (3.0, 48.0), (3.0, 49.0)]],
        )
        country = country_from_feature(feature)
        assert country is not None
        assert country.id == "FR"
        assert country.iso_a3 == "FRA"
        assert country.rings[0][0] == Coordinate(latitude=48.0, longitude=2.0)

    def test_missing_name_dropped(self) -> None:
        feature = AdaptedFeature(properties=GeoJSONProperties(iso_a2="ZZ"))
        assert country_from_feature(feature) is None

    def test_empty_name_dropped(self) -> None:
        feature = AdaptedFeature(properties=GeoJSONProperties(name="", iso_a2="ZZ"))
        assert country_from_feature(feature) is None

    def test_geometry_less_feature_kept(self) -> None:
        feature = AdaptedFeature(properties=GeoJSONProperties(name="Pointland", iso_a2="XP"))
        country = country_from_feature(feature)
        assert country is not None
        assert country.rings == ()


class TestBuildCountries:
    """build_countries ordering and filtering."""

    def test_sorted_by_name_ordinal(self) -> None:
        features = [
            AdaptedFeature(properties=GeoJSONProperties(name=name, iso_a2=code))
            for name, code in [("b", "B1"), ("Zambia", "ZM"), ("Albania", "AL"), ("Åland", "AX")]
        ]
        names = [c.name for c in build_countries(features)]
        # Ordinal compare: uppercase < lowercase < non-ASCII
        assert names == ["Albania", "Zambia", "b", "Åland"]

    def test_sort_is_stable_for_equal_names(self) -> None:
        features = [
            AdaptedFeature(properties=GeoJSONProperties(name="Same", iso_a2="S1")),
            AdaptedFeature(properties=GeoJSONProperties(name="Same", iso_a2="S2")),
        ]
        assert [c.id for c in build_countries(features)] == ["S1", "S2"]

    def test_drop_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        features = [AdaptedFeature(properties=GeoJSONProperties(iso_a2="ZZ"), feature_index=3)]
        with caplog.at_level(logging.DEBUG, logger="travel_world_map.services.country_registry"):
            assert build_countries(features) == []
        assert "index=3" in caplog.text


class TestRegistryScenarios:
    """End-to-end loads from files."""

    def test_france_and_unnamed_feature(self, write_geojson) -> None:
        triangle = {
            "type": "Polygon",
            "coordinates": [[[2.0, 48.0], [3.0, 48.0], [3.0, 49.0]]],
        }
        path = write_geojson(
            make_collection(
                make_feature("France", iso_a2="FR", iso_a3="FRA", geometry=triangle),
                make_feature(iso_a2="ZZ"),
            )
        )
        registry = CountryRegistry(path)
        countries = registry.all()
        assert len(countries) == 1
        (france,) = countries
        assert (france.id, france.name, france.iso_a3) == ("FR", "France", "FRA")
        assert len(france.rings) == 1
        assert len(france.rings[0]) == 3

    def test_sample_file(self, sample_registry: CountryRegistry) -> None:
        countries = sample_registry.all()
        assert [c.name for c in countries] == [
            "Bosnia and Herzegovina",
            "France",
            "Kosovo",
            "Norway",
            "Pointland",
            "United States",
        ]
        assert sample_registry.load_error is None

    def test_every_country_has_name_and_id(self, sample_registry: CountryRegistry) -> None:
        for country in sample_registry.all():
            assert country.name
            assert country.id

    def test_sentinels_in_sample(self, sample_registry: CountryRegistry) -> None:
        norway = sample_registry.by_name("Norway")
        kosovo = sample_registry.by_name("Kosovo")
        assert norway is not None and norway.id == "NORWAY"
        assert norway.iso_a3 == "NOR"
        assert kosovo is not None and kosovo.id == "XK"
        assert kosovo.iso_a3 == ""

    def test_multipolygon_rings_in_sample(self, sample_registry: CountryRegistry) -> None:
        france = sample_registry.by_id("FR")
        assert france is not None
        assert france.polygon_count == 3

    def test_atlantis_sentinel(self, write_geojson) -> None:
        path = write_geojson(make_collection(make_feature("Atlantis", iso_a2="-99", iso_a3="-99")))
        (atlantis,) = CountryRegistry(path).all()
        assert atlantis.id == "ATLANTIS"
        assert atlantis.iso_a3 == ""

    def test_all_features_unnamed_is_not_a_failure(self, no_names_geojson: Path) -> None:
        registry = CountryRegistry(no_names_geojson)
        assert registry.load() is None
        assert registry.all() == []
        assert registry.is_loaded


class TestLookups:
    """by_id / by_name / search."""

    @pytest.mark.parametrize("code", ["FR", "fr", "Fr"])
    def test_by_id_case_insensitive(self, sample_registry: CountryRegistry, code: str) -> None:
        country = sample_registry.by_id(code)
        assert country is not None
        assert country.name == "France"

    def test_by_id_variants_agree(self, sample_registry: CountryRegistry) -> None:
        for country in sample_registry.all():
            assert sample_registry.by_id(country.id.lower()) == country
            assert sample_registry.by_id(country.id.upper()) == country

    def test_by_id_name_fallback(self, sample_registry: CountryRegistry) -> None:
        country = sample_registry.by_id("bosnia_and_herzegovina")
        assert country is not None
        assert country.iso_a3 == "BIH"

    def test_by_id_unknown(self, sample_registry: CountryRegistry) -> None:
        assert sample_registry.by_id("QQ") is None

    def test_by_id_is_exact_not_substring(self, sample_registry: CountryRegistry) -> None:
        assert sample_registry.by_id("F") is None

    def test_by_name_case_insensitive(self, sample_registry: CountryRegistry) -> None:
        country = sample_registry.by_name("united STATES")
        assert country is not None
        assert country.id == "US"

    def test_by_name_unknown(self, sample_registry: CountryRegistry) -> None:
        assert sample_registry.by_name("Atlantis") is None

    def test_search_empty_returns_all(self, sample_registry: CountryRegistry) -> None:
        assert sample_registry.search("") == sample_registry.all()
        assert [c.name for c in sample_registry.search("")] == [
            c.name for c in sample_registry.all()
        ]

    def test_search_by_name_substring(self, sample_registry: CountryRegistry) -> None:
        assert [c.id for c in sample_registry.search("ran")] == ["FR"]

    def test_search_by_id(self, sample_registry: CountryRegistry) -> None:
        assert [c.name for c in sample_registry.search("xk")] == ["Kosovo"]

    def test_search_by_iso_a3(self, sample_registry: CountryRegistry) -> None:
        assert [c.name for c in sample_registry.search("bih")] == ["Bosnia and Herzegovina"]

    def test_search_keeps_canonical_order(self, sample_registry: CountryRegistry) -> None:
        names = [c.name for c in sample_registry.search("n")]
        assert names == sorted(names)
        assert "Norway" in names and "France" in names

    def test_search_no_match(self, sample_registry: CountryRegistry) -> None:
        assert sample_registry.search("zzzz") == []

    def test_all_returns_fresh_list(self, sample_registry: CountryRegistry) -> None:
        first = sample_registry.all()
        first.clear()
        assert len(sample_registry.all()) == 6


class TestLoading:
    """Lazy and once-only loading."""

    def test_lazy_until_first_query(self, sample_registry: CountryRegistry) -> None:
        assert not sample_registry.is_loaded
        assert sample_registry.snapshot() == []
        sample_registry.by_id("FR")
        assert sample_registry.is_loaded
        assert len(sample_registry.snapshot()) == 6

    def test_load_reads_file_once(self, sample_geojson: Path) -> None:
        registry = CountryRegistry(sample_geojson)
        with patch.object(
            registry_module, "read_features", wraps=registry_module.read_features
        ) as spy:
            registry.load()
            registry.load()
            registry.all()
            registry.search("a")
        assert spy.call_count == 1

    def test_concurrent_loads_read_once(self, sample_geojson: Path) -> None:
        registry = CountryRegistry(sample_geojson)
        results: list[int] = []
        with patch.object(
            registry_module, "read_features", wraps=registry_module.read_features
        ) as spy:
            threads = [
                threading.Thread(target=lambda: results.append(len(registry.all())))
                for _ in range(8)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
        assert spy.call_count == 1
        assert results == [6] * 8

    @pytest.mark.asyncio()
    async def test_load_async(self, sample_registry: CountryRegistry) -> None:
        assert await sample_registry.load_async() is None
        assert sample_registry.is_loaded
        assert len(sample_registry.snapshot()) == 6

    def test_from_config(self, sample_geojson: Path) -> None:
        registry = CountryRegistry.from_config(WorldMapConfig(geojson_path=str(sample_geojson)))
        assert registry.source == sample_geojson
        assert len(registry.all()) == 6

    def test_load_success_logged(
        self, sample_registry: CountryRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="travel_world_map.services.country_registry"):
            sample_registry.load()
        assert "count=6" in caplog.text


class TestLoadFailures:
    """Failures leave the registry empty and are reported, not raised."""

    def test_missing_file(self, tmp_path: Path) -> None:
        registry = CountryRegistry(tmp_path / "absent.geojson")
        error = registry.load()
        assert isinstance(error, ResourceMissingError)
        assert error.code == "RESOURCE_MISSING"
        assert registry.load_error is error
        assert registry.all() == []

    def test_directory_is_missing_resource(self, tmp_path: Path) -> None:
        assert isinstance(CountryRegistry(tmp_path).load(), ResourceMissingError)

    def test_malformed_file(self, malformed_geojson: Path) -> None:
        registry = CountryRegistry(malformed_geojson)
        error = registry.load()
        assert isinstance(error, DecodeFailedError)
        assert error.detail
        assert "Failed to decode GeoJSON" in error.message

    def test_bad_coordinates_fail_whole_load(self, write_geojson) -> None:
        geometry = {"type": "Polygon", "coordinates": [[[0, 0], [1]]]}
        path = write_geojson(
            make_collection(
                make_feature("Good", iso_a2="GD"),
                make_feature("Bad", iso_a2="BD", geometry=geometry),
            )
        )
        registry = CountryRegistry(path)
        assert isinstance(registry.load(), DecodeFailedError)
        assert registry.all() == []

    def test_queries_degrade_after_failure(self, malformed_geojson: Path) -> None:
        registry = CountryRegistry(malformed_geojson)
        assert registry.by_id("FR") is None
        assert registry.by_name("France") is None
        assert registry.search("") == []
        assert registry.search("fr") == []

    def test_failure_not_retried(self, tmp_path: Path) -> None:
        path = tmp_path / "late.geojson"
        registry = CountryRegistry(path)
        first = registry.load()
        path.write_bytes(make_collection(make_feature("France", iso_a2="FR")))
        assert registry.load() is first
        assert registry.all() == []

    def test_unreadable_file(self, sample_geojson: Path) -> None:
        registry = CountryRegistry(sample_geojson)
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            error = registry.load()
        assert isinstance(error, DecodeFailedError)
        assert "denied" in error.detail

    def test_failure_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="travel_world_map.services.country_registry"):
            CountryRegistry(tmp_path / "absent.geojson").load()
        assert "RESOURCE_MISSING" in caplog.text

    def test_errors_are_load_errors(self) -> None:
        assert issubclass(ResourceMissingError, LoadError)
        assert issubclass(DecodeFailedError, LoadError)
