"""geokit - Geocoding with provider failover and distance calculations."""

from geokit.core import (
    ConfigurationError,
    Formula,
    GeoKitError,
    GeoLocation,
    GeoPoint,
    GeocodeError,
    InvalidCoordinatesError,
    Units,
    distance_between,
)
from geokit.locator import Locator
from geokit.shell import MultiGeocoder, load_config

__version__ = "1.0.0"

__all__ = [
    "GeoPoint",
    "GeoLocation",
    "Units",
    "Formula",
    "distance_between",
    "MultiGeocoder",
    "Locator",
    "load_config",
    "GeoKitError",
    "ConfigurationError",
    "InvalidCoordinatesError",
    "GeocodeError",
]
