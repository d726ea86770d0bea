"""Tests for the hostip IP geocoder.

Uses the `responses` library to mock HTTP requests.
"""

import responses
from responses import matchers

from geokit.shell.ip_geocoder import HOSTIP_URL, IpGeocoder


FAILURE = """    Country: (Private Address) (XX)
    City: (Private Address)
    Latitude:
    Longitude:
"""

SUCCESS = """    Country: UNITED STATES (US)
    City: Sugar Grove, IL
    Latitude: 41.7696
    Longitude: -88.4588
"""

UNICODED = """    Country: SWEDEN (SE)
    City: Borås
    Latitude: 57.7167
    Longitude: 12.9167
"""


def _hostip(ip, body, status=200):
    responses.add(
        responses.GET,
        HOSTIP_URL,
        body=body.encode("utf-8"),
        status=status,
        content_type="text/plain",
        match=[matchers.query_param_matcher({"ip": ip, "position": "true"})],
    )


class TestIpGeocoder:
    """Tests for IpGeocoder.geocode()."""

    @responses.activate
    def test_successful_lookup(self):
        _hostip("12.215.42.19", SUCCESS)

        location = IpGeocoder().geocode("12.215.42.19")

        assert location.success is True
        assert location.latitude == 41.7696
        assert location.longitude == -88.4588
        assert location.city == "Sugar Grove"
        assert location.state == "IL"
        assert location.country_code == "US"
        assert location.provider == "hostip"

    @responses.activate
    def test_unicoded_lookup(self):
        """A UTF-8 body without a declared charset keeps non-ASCII cities."""
        _hostip("12.215.42.19", UNICODED)

        location = IpGeocoder().geocode("12.215.42.19")

        assert location.success is True
        assert location.latitude == 57.7167
        assert location.longitude == 12.9167
        assert location.city == "Borås"
        assert location.state is None
        assert location.country_code == "SE"

    @responses.activate
    def test_latin1_body(self):
        responses.add(
            responses.GET,
            HOSTIP_URL,
            body=UNICODED.encode("latin-1"),
            content_type="text/plain",
        )

        location = IpGeocoder().geocode("12.215.42.19")

        assert location.city == "Borås"

    @responses.activate
    def test_failed_lookup(self):
        _hostip("0.0.0.0", FAILURE)

        location = IpGeocoder().geocode("0.0.0.0")

        assert location.success is False

    def test_invalid_ip_makes_no_request(self):
        with responses.RequestsMock() as mock:
            location = IpGeocoder().geocode("blah")

            assert location.success is False
            assert len(mock.calls) == 0

    def test_out_of_range_octet_makes_no_request(self):
        with responses.RequestsMock() as mock:
            location = IpGeocoder().geocode("300.1.1.1")

            assert location.success is False
            assert len(mock.calls) == 0

    @responses.activate
    def test_service_unavailable(self):
        _hostip("0.0.0.0", "Service Unavailable", status=503)

        location = IpGeocoder().geocode("0.0.0.0")

        assert location.success is False
