"""Failover geocoder - Imperative Shell.

Tries providers one at a time in the configured order and returns the
first successful result. Providers after a success are never called and
nothing runs in parallel.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from geokit.core.config import GeoKitConfig
from geokit.core.errors import ConfigurationError
from geokit.core.location import GeoLocation
from geokit.shell.geocoders import build_geocoders


logger = logging.getLogger(__name__)


class SupportsGeocode(Protocol):
    """Anything with a geocode(query) -> GeoLocation method."""

    def geocode(self, query: str) -> GeoLocation: ...


class MultiGeocoder:
    """Geocoder that fails over across an ordered list of providers."""

    def __init__(
        self,
        geocoders: Mapping[str, SupportsGeocode],
        provider_order: Sequence[str],
    ) -> None:
        """Initialize the failover chain.

        Args:
            geocoders: Provider instances keyed by provider id
            provider_order: Provider ids in the order they are tried

        Raises:
            ConfigurationError: If the order is empty or names an unknown provider
        """
        if not provider_order:
            raise ConfigurationError("Provider order must name at least one provider")

        missing = [name for name in provider_order if name not in geocoders]
        if missing:
            raise ConfigurationError(
                f"No geocoder configured for provider(s): {', '.join(missing)}"
            )

        self.geocoders = dict(geocoders)
        self.provider_order = tuple(provider_order)

    @classmethod
    def from_config(cls, config: GeoKitConfig) -> "MultiGeocoder":
        """Build the chain from configuration."""
        return cls(build_geocoders(config), config.provider_order)

    def geocode(self, query: str) -> GeoLocation:
        """Geocode with each provider in turn until one succeeds.

        Args:
            query: Address to geocode

        Returns:
            The first successful result, or the last provider's failure
        """
        result = GeoLocation.failed()

        for position, name in enumerate(self.provider_order, start=1):
            geocoder = self.geocoders[name]

            try:
                result = geocoder.geocode(query)
            except Exception as e:
                # Providers should not raise; a misbehaving one only loses its slot
                logger.error("Provider %s raised during geocode: %s", name, str(e))
                result = GeoLocation.failed(name)

            if result.success:
                logger.info(
                    "Geocoded with %s (%d of %d)",
                    name,
                    position,
                    len(self.provider_order),
                )
                return result

            logger.info("Provider %s failed, trying next", name)

        logger.warning(
            "All %d providers failed",
            len(self.provider_order),
            extra={"providers": list(self.provider_order)},
        )
        return result
