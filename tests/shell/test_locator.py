"""Tests for the Locator module.

Tests origin resolution and distance helpers.
Uses mocks for the geocoders to avoid HTTP calls.
"""

from dataclasses import dataclass
from unittest.mock import Mock

import pytest

from geokit.core.config import GeoKitConfig
from geokit.core.errors import ConfigurationError, GeocodeError
from geokit.core.geo import Formula, GeoPoint, Units
from geokit.core.location import GeoLocation
from geokit.locator import Locator
from geokit.shell.ip_geocoder import IpGeocoder
from geokit.shell.multi_geocoder import MultiGeocoder


LOC_A = GeoPoint(32.918593, -96.958444)
LOC_E = GeoPoint(32.969527, -96.990159)


@dataclass
class Store:
    name: str
    latitude: float
    longitude: float


@pytest.fixture
def irving():
    """Successful geocode of Irving, TX at LOC_A."""
    return GeoLocation(
        latitude=LOC_A.latitude,
        longitude=LOC_A.longitude,
        city="Irving",
        state="TX",
        country_code="US",
        provider="google",
        success=True,
    )


@pytest.fixture
def multi_geocoder(irving):
    geocoder = Mock()
    geocoder.geocode.return_value = irving
    return geocoder


@pytest.fixture
def ip_geocoder():
    geocoder = Mock()
    geocoder.geocode.return_value = GeoLocation(
        latitude=LOC_E.latitude,
        longitude=LOC_E.longitude,
        provider="hostip",
        success=True,
    )
    return geocoder


@pytest.fixture
def locator(multi_geocoder, ip_geocoder):
    return Locator(GeoKitConfig(), multi_geocoder=multi_geocoder, ip_geocoder=ip_geocoder)


@pytest.fixture
def stores():
    return [
        Store("far", LOC_E.latitude, LOC_E.longitude),
        Store("near", LOC_A.latitude, LOC_A.longitude),
    ]


class TestLocatorConstruction:
    """Tests for building a Locator from configuration."""

    def test_builds_geocoders_from_config(self):
        locator = Locator(GeoKitConfig(provider_order=("census",)))

        assert isinstance(locator.multi_geocoder, MultiGeocoder)
        assert locator.multi_geocoder.provider_order == ("census",)
        assert isinstance(locator.ip_geocoder, IpGeocoder)

    def test_unknown_ip_provider_raises(self):
        with pytest.raises(ConfigurationError):
            Locator(GeoKitConfig(provider_order=("census",), ip_provider="geoip"))


class TestResolveOrigin:
    """Tests for Locator.resolve_origin()."""

    def test_coordinates_need_no_geocoding(self, locator, multi_geocoder, ip_geocoder):
        point = locator.resolve_origin((32.9, -96.9))

        assert point == GeoPoint(32.9, -96.9)
        multi_geocoder.geocode.assert_not_called()
        ip_geocoder.geocode.assert_not_called()

    def test_point_like_is_returned(self, locator):
        assert locator.resolve_origin(LOC_A) is LOC_A

    def test_object_with_coordinates(self, locator):
        assert locator.resolve_origin(Store("x", 1.0, 2.0)) == GeoPoint(1.0, 2.0)

    def test_address_uses_failover_chain(self, locator, multi_geocoder, irving):
        assert locator.resolve_origin("Irving, TX") is irving
        multi_geocoder.geocode.assert_called_once_with("Irving, TX")

    def test_ip_uses_ip_geocoder(self, locator, multi_geocoder, ip_geocoder):
        point = locator.resolve_origin("12.215.42.19")

        assert point == LOC_E
        ip_geocoder.geocode.assert_called_once_with("12.215.42.19")
        multi_geocoder.geocode.assert_not_called()

    def test_failed_geocode_raises(self, locator, multi_geocoder):
        failure = GeoLocation.failed("census")
        multi_geocoder.geocode.return_value = failure

        with pytest.raises(GeocodeError) as exc_info:
            locator.resolve_origin("Nowhere, XX")

        assert exc_info.value.query == "Nowhere, XX"
        assert exc_info.value.result is failure
        assert exc_info.value.kind == "failed_resolution"
        assert "census" in str(exc_info.value)

    def test_success_without_coordinates_raises(self, locator, ip_geocoder):
        ip_geocoder.geocode.return_value = GeoLocation(city="Sugar Grove", success=True)

        with pytest.raises(GeocodeError):
            locator.resolve_origin("12.215.42.19")

    def test_unsupported_origin_raises(self, locator):
        with pytest.raises(ConfigurationError):
            locator.resolve_origin(object())


class TestDistance:
    """Tests for Locator.distance() and the ranking helpers."""

    def test_distance_between_geocoded_origins(self, locator):
        """Both addresses geocode to the same place."""
        assert locator.distance("Irving, TX", "San Francisco, CA") == 0

    def test_distance_to_ip(self, locator):
        assert locator.distance(LOC_A, "12.215.42.19") == pytest.approx(3.97, abs=0.01)

    def test_uses_config_defaults(self, multi_geocoder, ip_geocoder):
        config = GeoKitConfig(default_units=Units.KILOMETERS, default_formula=Formula.SPHERE)
        locator = Locator(config, multi_geocoder=multi_geocoder, ip_geocoder=ip_geocoder)

        assert locator.distance(LOC_A, LOC_E) == pytest.approx(6.39, abs=0.01)

    def test_explicit_units_override_defaults(self, locator):
        assert locator.distance(LOC_A, LOC_E, units="kms", formula="flat") == pytest.approx(
            6.39, abs=0.4
        )

    def test_distance_error_when_geocode_fails(self, locator, multi_geocoder):
        multi_geocoder.geocode.return_value = GeoLocation.failed("google")

        with pytest.raises(GeocodeError):
            locator.distance(LOC_A, "Irving, TX")

    def test_within_address_origin(self, locator, stores):
        assert [s.name for s in locator.within(stores, "Irving, TX", 1)] == ["near"]

    def test_beyond(self, locator, stores):
        assert [s.name for s in locator.beyond(stores, LOC_A, 1)] == ["far"]

    def test_sort_by_distance(self, locator, stores):
        ranked = locator.sort_by_distance(stores, LOC_A)
        assert [s.name for s, _ in ranked] == ["near", "far"]

    def test_closest_and_farthest(self, locator, stores):
        assert locator.closest(stores, "Irving, TX").name == "near"
        assert locator.farthest(stores, "Irving, TX").name == "far"

    def test_ranking_with_ip_origin(self, locator, stores):
        assert locator.closest(stores, "12.215.42.19").name == "far"
