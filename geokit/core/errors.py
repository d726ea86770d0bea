"""Exception taxonomy.

Provider-level failures are never exceptions: they travel as data on
GeoLocation.success. Only configuration misuse and caller-level
resolution failures are raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geokit.core.location import GeoLocation


class GeoKitError(Exception):
    """Base class for geokit errors."""

    pass


class ConfigurationError(GeoKitError):
    """Invalid units, formula, provider id or configuration file."""

    pass


class InvalidCoordinatesError(GeoKitError, ValueError):
    """Latitude or longitude outside of the valid range."""

    pass


class GeocodeError(GeoKitError):
    """A required origin could not be resolved to a point.

    Attributes:
        query: The string that was geocoded
        result: The failed location returned by the provider chain
        kind: Error kind, always "failed_resolution"
    """

    kind = "failed_resolution"

    def __init__(self, query: str, result: GeoLocation | None = None) -> None:
        self.query = query
        self.result = result
        provider = result.provider if result is not None else None
        message = f"Could not geocode {query!r}"
        if provider:
            message += f" (last provider: {provider})"
        super().__init__(message)
