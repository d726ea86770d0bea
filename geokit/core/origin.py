"""Origin classification - Pure functions.

Callers hand in an origin as a coordinate pair, a point-like object, or a
raw string. classify_origin turns that into an explicit variant so the
resolver can decide how to obtain a point without any duck typing.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from geokit.core.errors import ConfigurationError
from geokit.core.geo import GeoPoint


IP_ADDRESS_PATTERN = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")


@dataclass(frozen=True)
class Coordinates:
    """An explicit latitude/longitude pair."""
    latitude: float
    longitude: float

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class Address:
    """A free-text physical address to be geocoded."""
    text: str


@dataclass(frozen=True)
class IpAddress:
    """A dotted-quad IP address to be geolocated."""
    text: str


@dataclass(frozen=True)
class PointLike:
    """An already-resolved point."""
    point: GeoPoint


Origin = Union[Coordinates, Address, IpAddress, PointLike]


def is_ip_address(value: str) -> bool:
    """Check if a string looks like a dotted-quad IP address.

    Pure function.
    """
    return bool(IP_ADDRESS_PATTERN.match(value.strip()))


def classify_origin(value: Any) -> Origin:
    """Classify a caller-supplied origin.

    Pure function.

    Args:
        value: Origin variant, GeoPoint, (lat, lng) pair, point-like
            object or mapping, or a string (IP address or physical address)

    Returns:
        The matching origin variant

    Raises:
        ConfigurationError: If the value cannot be used as an origin
    """
    if isinstance(value, (Coordinates, Address, IpAddress, PointLike)):
        return value

    if isinstance(value, GeoPoint):
        return PointLike(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ConfigurationError("Origin must not be blank")
        if is_ip_address(text):
            return IpAddress(text)
        return Address(text)

    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise ConfigurationError(f"Coordinate origin needs 2 values, got {len(value)}")
        try:
            return Coordinates(float(value[0]), float(value[1]))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Coordinate origin must be numeric, got {value!r}") from e

    try:
        point = GeoPoint.from_any(value)
    except TypeError as e:
        raise ConfigurationError(f"Unsupported origin type: {type(value).__name__}") from e

    if not point.has_coordinates:
        raise ConfigurationError("Origin has no coordinates")

    if isinstance(value, Mapping):
        return Coordinates(point.latitude, point.longitude)
    return PointLike(point)
