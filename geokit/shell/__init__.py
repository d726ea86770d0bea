"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Geocoding service clients (HTTP)
- Failover across providers
- Secret Manager client
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from geokit.shell.base_geocoder import Geocoder
from geokit.shell.geocoders import GEOCODER_CLASSES, build_geocoder
from geokit.shell.multi_geocoder import MultiGeocoder
from geokit.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "Geocoder",
    "GEOCODER_CLASSES",
    "build_geocoder",
    "MultiGeocoder",
    "load_config",
    "load_config_from_env",
]
