"""Tests for the Yahoo geocoder.

Uses the `responses` library to mock HTTP requests.
"""

import responses
from responses import matchers

from geokit.shell.yahoo_geocoder import YAHOO_GEOCODE_URL, YahooGeocoder


ADDRESS = "100 Spear St, San Francisco, CA"

YAHOO_FULL = """<?xml version="1.0"?>
<ResultSet xmlns="urn:yahoo:maps">
  <Result precision="address">
    <Latitude>37.792406</Latitude>
    <Longitude>-122.39411</Longitude>
    <Address>100 SPEAR ST</Address>
    <City>SAN FRANCISCO</City>
    <State>CA</State>
    <Zip>94105-1522</Zip>
    <Country>US</Country>
  </Result>
</ResultSet>"""

YAHOO_ERROR = """<?xml version="1.0" encoding="UTF-8"?>
<Error xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Message>The following errors were detected: unable to parse location</Message>
</Error>"""


class TestYahooGeocoder:
    """Tests for YahooGeocoder.geocode()."""

    @responses.activate
    def test_full_address(self):
        responses.add(
            responses.GET,
            YAHOO_GEOCODE_URL,
            body=YAHOO_FULL,
            content_type="text/xml",
            match=[matchers.query_param_matcher({"appid": "app-id", "location": ADDRESS})],
        )

        location = YahooGeocoder(api_key="app-id").geocode(ADDRESS)

        assert location.success is True
        assert location.latitude == 37.792406
        assert location.longitude == -122.39411
        assert location.street_address == "100 Spear St"
        assert location.city == "San Francisco"
        assert location.state == "CA"
        assert location.postal_code == "94105-1522"
        assert location.country_code == "US"
        assert location.precision == "address"
        assert location.provider == "yahoo"

    @responses.activate
    def test_error_document(self):
        responses.add(
            responses.GET,
            YAHOO_GEOCODE_URL,
            body=YAHOO_ERROR,
            content_type="text/xml",
            status=200,
        )

        assert YahooGeocoder(api_key="app-id").geocode("???").success is False

    @responses.activate
    def test_bad_request(self):
        responses.add(responses.GET, YAHOO_GEOCODE_URL, body=YAHOO_ERROR, status=400)

        location = YahooGeocoder(api_key="app-id").geocode(ADDRESS)

        assert location.success is False
        assert location.provider == "yahoo"
