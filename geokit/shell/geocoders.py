"""Provider registry - Imperative Shell.

Maps the provider ids used in configuration to geocoder classes and
builds configured instances.
"""

import logging

from geokit.core.config import GeoKitConfig
from geokit.core.errors import ConfigurationError
from geokit.shell.base_geocoder import Geocoder
from geokit.shell.ca_geocoder import CaGeocoder
from geokit.shell.census_geocoder import CensusGeocoder
from geokit.shell.google_geocoder import GoogleGeocoder
from geokit.shell.ip_geocoder import IpGeocoder
from geokit.shell.yahoo_geocoder import YahooGeocoder


logger = logging.getLogger(__name__)


GEOCODER_CLASSES: dict[str, type[Geocoder]] = {
    "google": GoogleGeocoder,
    "yahoo": YahooGeocoder,
    "census": CensusGeocoder,
    "ca": CaGeocoder,
    "ip": IpGeocoder,
}


def build_geocoder(provider: str, config: GeoKitConfig) -> Geocoder:
    """Create the geocoder for a provider id.

    Args:
        provider: Provider id (e.g., 'google')
        config: Configuration holding credentials and timeouts

    Returns:
        Configured geocoder

    Raises:
        ConfigurationError: If the provider id is unknown
    """
    geocoder_class = GEOCODER_CLASSES.get(provider)
    if geocoder_class is None:
        raise ConfigurationError(
            f"Unknown provider '{provider}', expected one of: {', '.join(GEOCODER_CLASSES)}"
        )

    logger.debug("Building %s geocoder", provider)
    return geocoder_class.from_config(config.settings_for(provider), config)


def build_geocoders(config: GeoKitConfig) -> dict[str, Geocoder]:
    """Create geocoders for every provider in the configured order.

    Raises:
        ConfigurationError: If any provider id is unknown
    """
    return {name: build_geocoder(name, config) for name in config.provider_order}
