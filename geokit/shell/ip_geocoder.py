"""hostip.info IP geolocation client - Imperative Shell.

Looks up the city of a dotted-quad IPv4 address. Malformed addresses are
rejected before any request is made; private addresses are reported by
the service itself and parsed as a failed lookup.
"""

import ipaddress
import logging
from typing import Any

import requests

from geokit.core.location import GeoLocation
from geokit.core.origin import is_ip_address
from geokit.core.parsing import parse_hostip_response
from geokit.shell.base_geocoder import Geocoder


logger = logging.getLogger(__name__)


HOSTIP_URL = "https://api.hostip.info/get_html.php"


class IpGeocoder(Geocoder):
    """Geocoder for IP addresses backed by hostip.info."""

    name = "hostip"
    default_base_url = HOSTIP_URL

    def accepts(self, query: str) -> bool:
        """Only well-formed dotted-quad IPv4 addresses are looked up."""
        if not query or not is_ip_address(query):
            return False
        try:
            ipaddress.IPv4Address(query.strip())
        except ValueError:
            return False
        return True

    def _build_params(self, query: str) -> dict[str, Any]:
        return {
            "ip": query,
            "position": "true",
        }

    def _parse(self, response: requests.Response) -> GeoLocation:
        # hostip does not always declare a charset
        try:
            body = response.content.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("hostip body is not UTF-8, decoding as Latin-1")
            body = response.content.decode("latin-1")
        return parse_hostip_response(body, provider=self.name)
