"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Points and distance calculations
- Geocoding result model
- Provider response parsing
- Origin classification
- Configuration models and validation

All functions here are deterministic and have no I/O.
"""

from geokit.core.errors import (
    ConfigurationError,
    GeoKitError,
    GeocodeError,
    InvalidCoordinatesError,
)
from geokit.core.geo import (
    BoundingBox,
    Formula,
    GeoPoint,
    Units,
    bounds_around,
    closest,
    distance_between,
    farthest,
    filter_beyond,
    filter_within,
    sort_by_distance,
)
from geokit.core.location import GeoLocation
from geokit.core.origin import classify_origin, is_ip_address
from geokit.core.config import GeoKitConfig, ProviderSettings, validate_config

__all__ = [
    # Errors
    "GeoKitError",
    "ConfigurationError",
    "InvalidCoordinatesError",
    "GeocodeError",
    # Geo
    "GeoPoint",
    "Units",
    "Formula",
    "distance_between",
    "BoundingBox",
    "bounds_around",
    "sort_by_distance",
    "filter_within",
    "filter_beyond",
    "closest",
    "farthest",
    # Location
    "GeoLocation",
    # Origin
    "classify_origin",
    "is_ip_address",
    # Config
    "GeoKitConfig",
    "ProviderSettings",
    "validate_config",
]
