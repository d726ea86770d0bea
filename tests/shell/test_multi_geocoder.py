"""Tests for the failover geocoder.

Providers are replaced with mocks to test the failover logic only.
"""

from unittest.mock import Mock

import pytest
import responses

from geokit.core.config import GeoKitConfig, ProviderSettings
from geokit.core.errors import ConfigurationError
from geokit.core.location import GeoLocation
from geokit.shell.census_geocoder import CENSUS_GEOCODE_URL
from geokit.shell.google_geocoder import GOOGLE_GEOCODE_URL
from geokit.shell.multi_geocoder import MultiGeocoder


ADDRESS = "100 Spear St, San Francisco, CA"


@pytest.fixture
def success():
    return GeoLocation(
        latitude=37.792418,
        longitude=-122.393913,
        city="San Francisco",
        provider="yahoo",
        success=True,
    )


def _provider(result):
    provider = Mock()
    provider.geocode.return_value = result
    return provider


def _chain(google, yahoo, census):
    return MultiGeocoder(
        {"google": google, "yahoo": yahoo, "census": census},
        ("google", "yahoo", "census"),
    )


class TestMultiGeocoderFailover:
    """Tests for MultiGeocoder.geocode()."""

    def test_successful_first(self, success):
        google = _provider(success)
        yahoo = _provider(success)
        census = _provider(success)

        result = _chain(google, yahoo, census).geocode(ADDRESS)

        assert result is success
        google.geocode.assert_called_once_with(ADDRESS)
        yahoo.geocode.assert_not_called()
        census.geocode.assert_not_called()

    def test_failover(self, success):
        google = _provider(GeoLocation.failed("google"))
        yahoo = _provider(success)
        census = _provider(success)

        result = _chain(google, yahoo, census).geocode(ADDRESS)

        assert result is success
        yahoo.geocode.assert_called_once_with(ADDRESS)
        census.geocode.assert_not_called()

    def test_double_failover(self, success):
        google = _provider(GeoLocation.failed("google"))
        yahoo = _provider(GeoLocation.failed("yahoo"))
        census = _provider(success)
        calls = []
        for name, provider in (("google", google), ("yahoo", yahoo), ("census", census)):
            provider.geocode.side_effect = (
                lambda q, name=name, result=provider.geocode.return_value:
                calls.append(name) or result
            )

        assert _chain(google, yahoo, census).geocode(ADDRESS) is success
        google.geocode.assert_called_once_with(ADDRESS)
        yahoo.geocode.assert_called_once_with(ADDRESS)
        census.geocode.assert_called_once_with(ADDRESS)
        assert calls == ["google", "yahoo", "census"]

    def test_total_failure_returns_last_failure(self):
        last_failure = GeoLocation.failed("census")
        google = _provider(GeoLocation.failed("google"))
        yahoo = _provider(GeoLocation.failed("yahoo"))
        census = _provider(last_failure)

        result = _chain(google, yahoo, census).geocode(ADDRESS)

        assert result is last_failure
        assert result.success is False

    def test_raising_provider_is_skipped(self, success):
        google = Mock()
        google.geocode.side_effect = RuntimeError("bug in provider")
        yahoo = _provider(success)
        census = _provider(success)

        assert _chain(google, yahoo, census).geocode(ADDRESS) is success

    def test_providers_called_in_order(self):
        calls = []

        def provider(name):
            mock = Mock()
            mock.geocode.side_effect = lambda q: calls.append(name) or GeoLocation.failed(name)
            return mock

        chain = MultiGeocoder(
            {"census": provider("census"), "google": provider("google")},
            ("census", "google"),
        )
        chain.geocode(ADDRESS)

        assert calls == ["census", "google"]


class TestMultiGeocoderConstruction:
    """Tests for building the chain."""

    def test_empty_order_raises(self):
        with pytest.raises(ConfigurationError):
            MultiGeocoder({}, ())

    def test_missing_provider_raises(self):
        with pytest.raises(ConfigurationError, match="yahoo"):
            MultiGeocoder({"google": Mock()}, ("google", "yahoo"))

    def test_from_config_unknown_provider_raises(self):
        with pytest.raises(ConfigurationError):
            MultiGeocoder.from_config(GeoKitConfig(provider_order=("google", "bing")))

    @responses.activate
    def test_from_config_fails_over_over_http(self):
        """A failed Google lookup falls through to the Census service."""
        responses.add(responses.GET, GOOGLE_GEOCODE_URL, json={"status": "ZERO_RESULTS"})
        responses.add(
            responses.GET,
            CENSUS_GEOCODE_URL,
            json={
                "result": {
                    "addressMatches": [{
                        "matchedAddress": "100 SPEAR ST, SAN FRANCISCO, CA, 94105",
                        "coordinates": {"x": -122.3939, "y": 37.7924},
                        "addressComponents": {"city": "SAN FRANCISCO", "state": "CA", "zip": "94105"},
                    }],
                },
            },
        )
        config = GeoKitConfig(
            provider_order=("google", "census"),
            providers={"google": ProviderSettings(name="google", api_key="k")},
        )

        result = MultiGeocoder.from_config(config).geocode(ADDRESS)

        assert result.success is True
        assert result.provider == "census"
        assert len(responses.calls) == 2
