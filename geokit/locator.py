"""Locator - Wires Functional Core and Imperative Shell.

This module is the caller-side glue: it turns an origin (coordinates,
point-like object, IP address or physical address) into a point, raising
GeocodeError when that is not possible, and then uses the pure distance
functions to measure, rank and filter records.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from geokit.core.config import GeoKitConfig
from geokit.core.errors import GeocodeError
from geokit.core.geo import (
    Formula,
    GeoPoint,
    Units,
    closest,
    distance_between,
    farthest,
    filter_beyond,
    filter_within,
    sort_by_distance,
)
from geokit.core.location import GeoLocation
from geokit.core.origin import Address, Coordinates, IpAddress, PointLike, classify_origin
from geokit.shell.geocoders import build_geocoder
from geokit.shell.multi_geocoder import MultiGeocoder, SupportsGeocode


logger = logging.getLogger(__name__)


class Locator:
    """Resolves origins and measures distances with configured defaults.

    This class wires together:
    - Failover geocoder (physical addresses)
    - IP geocoder (dotted-quad addresses)
    - Core distance and ranking functions
    """

    def __init__(
        self,
        config: GeoKitConfig | None = None,
        multi_geocoder: SupportsGeocode | None = None,
        ip_geocoder: SupportsGeocode | None = None,
    ) -> None:
        """Initialize locator with configuration.

        Args:
            config: Library configuration (defaults used if not provided)
            multi_geocoder: Address geocoder (built from config if not provided)
            ip_geocoder: IP geocoder (built from config if not provided)
        """
        self.config = config or GeoKitConfig()
        self.multi_geocoder = multi_geocoder or MultiGeocoder.from_config(self.config)
        self.ip_geocoder = ip_geocoder or build_geocoder(self.config.ip_provider, self.config)

    def geocode(self, address: str) -> GeoLocation:
        """Geocode a physical address through the failover chain."""
        return self.multi_geocoder.geocode(address)

    def geocode_ip(self, ip_address: str) -> GeoLocation:
        """Geolocate a dotted-quad IP address."""
        return self.ip_geocoder.geocode(ip_address)

    def resolve_origin(self, origin: Any) -> GeoPoint:
        """Resolve any supported origin into a point.

        Args:
            origin: (lat, lng) pair, point-like object, IP address or address

        Returns:
            The resolved point (a GeoLocation for geocoded strings)

        Raises:
            GeocodeError: If a string origin could not be geocoded
            ConfigurationError: If the origin type is not supported
        """
        variant = classify_origin(origin)

        if isinstance(variant, Coordinates):
            return variant.to_point()

        if isinstance(variant, PointLike):
            return variant.point

        if isinstance(variant, IpAddress):
            result = self.geocode_ip(variant.text)
        elif isinstance(variant, Address):
            result = self.geocode(variant.text)
        else:
            raise TypeError(f"Unhandled origin variant: {type(variant).__name__}")

        if not result.success or not result.has_coordinates:
            logger.warning("Could not resolve origin %r", origin)
            raise GeocodeError(str(origin), result)

        return result

    def distance(
        self,
        origin: Any,
        destination: Any,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
    ) -> float:
        """Distance between two origins of any supported kind."""
        return distance_between(
            self.resolve_origin(origin),
            self.resolve_origin(destination),
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
        )

    def sort_by_distance(
        self,
        records: Iterable[Any],
        origin: Any,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> list[tuple[Any, float]]:
        """Records paired with their distance from the origin, nearest first."""
        return sort_by_distance(
            records,
            self.resolve_origin(origin),
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
            key=key,
        )

    def within(
        self,
        records: Iterable[Any],
        origin: Any,
        distance: float,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> list[Any]:
        """Records within distance of the origin, nearest first."""
        return filter_within(
            records,
            self.resolve_origin(origin),
            distance,
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
            key=key,
        )

    def beyond(
        self,
        records: Iterable[Any],
        origin: Any,
        distance: float,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> list[Any]:
        """Records farther than distance from the origin, nearest first."""
        return filter_beyond(
            records,
            self.resolve_origin(origin),
            distance,
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
            key=key,
        )

    def closest(
        self,
        records: Iterable[Any],
        origin: Any,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> Any | None:
        """The record nearest to the origin."""
        return closest(
            records,
            self.resolve_origin(origin),
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
            key=key,
        )

    def farthest(
        self,
        records: Iterable[Any],
        origin: Any,
        units: Units | str | None = None,
        formula: Formula | str | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> Any | None:
        """The record farthest from the origin."""
        return farthest(
            records,
            self.resolve_origin(origin),
            units=units or self.config.default_units,
            formula=formula or self.config.default_formula,
            key=key,
        )
