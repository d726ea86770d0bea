"""geocoder.ca client - Imperative Shell.

Canadian address geocoder answering with XML. An auth token is optional;
without one the free rate-limited tier is used.
"""

from typing import Any

import requests

from geokit.core.location import GeoLocation
from geokit.core.parsing import parse_geocoder_ca_response
from geokit.shell.base_geocoder import Geocoder


GEOCODER_CA_URL = "https://geocoder.ca/"


class CaGeocoder(Geocoder):
    """Geocoder backed by geocoder.ca."""

    name = "geocoder.ca"
    default_base_url = GEOCODER_CA_URL

    def _build_params(self, query: str) -> dict[str, Any]:
        params = {
            "locate": query,
            "geoit": "xml",
        }
        if self.api_key:
            params["auth"] = self.api_key
        return params

    def _parse(self, response: requests.Response) -> GeoLocation:
        return parse_geocoder_ca_response(response.text, provider=self.name)
