"""Yahoo Maps geocoding client - Imperative Shell.

Alternate commercial geocoder answering with an XML ResultSet.
The application id is sent as `appid`.
"""

from typing import Any

import requests

from geokit.core.location import GeoLocation
from geokit.core.parsing import parse_yahoo_response
from geokit.shell.base_geocoder import Geocoder


YAHOO_GEOCODE_URL = "https://api.local.yahoo.com/MapsService/V1/geocode"


class YahooGeocoder(Geocoder):
    """Geocoder backed by the Yahoo Maps geocoding service."""

    name = "yahoo"
    default_base_url = YAHOO_GEOCODE_URL

    def _build_params(self, query: str) -> dict[str, Any]:
        return {
            "appid": self.api_key or "",
            "location": query,
        }

    def _parse(self, response: requests.Response) -> GeoLocation:
        return parse_yahoo_response(response.text, provider=self.name)
