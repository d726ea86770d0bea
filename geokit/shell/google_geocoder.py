"""Google Geocoding API client - Imperative Shell.

Commercial address geocoder. Needs an API key.
"""

from typing import Any

import requests

from geokit.core.location import GeoLocation
from geokit.core.parsing import parse_google_response
from geokit.shell.base_geocoder import Geocoder


GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocoder(Geocoder):
    """Geocoder backed by the Google Geocoding API."""

    name = "google"
    default_base_url = GOOGLE_GEOCODE_URL

    def _build_params(self, query: str) -> dict[str, Any]:
        params = {"address": query}
        if self.api_key:
            params["key"] = self.api_key
        return params

    def _parse(self, response: requests.Response) -> GeoLocation:
        return parse_google_response(response.json(), provider=self.name)
