"""US Census Bureau geocoder client - Imperative Shell.

Government geocoder for US street addresses. No credentials needed.
"""

from typing import Any

import requests

from geokit.core.location import GeoLocation
from geokit.core.parsing import parse_census_response
from geokit.shell.base_geocoder import Geocoder


CENSUS_GEOCODE_URL = "https://geocoding.geo.census.gov/geocoder/locations/onelineaddress"

# Address ranges benchmark; override with the `benchmark` extra parameter
DEFAULT_BENCHMARK = "Public_AR_Current"


class CensusGeocoder(Geocoder):
    """Geocoder backed by the US Census Bureau one-line address service."""

    name = "census"
    default_base_url = CENSUS_GEOCODE_URL

    def _build_params(self, query: str) -> dict[str, Any]:
        return {
            "address": query,
            "benchmark": DEFAULT_BENCHMARK,
            "format": "json",
        }

    def _parse(self, response: requests.Response) -> GeoLocation:
        return parse_census_response(response.json(), provider=self.name)
