"""Geocoding result model - Pure data structures.

GeoLocation homogenizes the results of the different geocoding providers.
It also derives values some providers do not return themselves, such as
the full address and the street number/name split.
"""

import re
from dataclasses import dataclass
from typing import Any

from geokit.core.geo import GeoPoint


PRECISION_UNKNOWN = "unknown"

# Precision levels, coarsest first
PRECISION_LEVELS = (
    PRECISION_UNKNOWN,
    "country",
    "state",
    "city",
    "zip",
    "zip+4",
    "street",
    "address",
)

_WORD_START = re.compile(r"\b('?[^\W\d_])")
_LEADING_DIGITS = re.compile(r"\d*")


def titleize(value: str) -> str:
    """Capitalize each word, lowercasing the rest.

    "100 SPEAR ST" -> "100 Spear St", "3rd st" -> "3rd St".
    """
    return _WORD_START.sub(lambda m: m.group(1).capitalize(), value.lower())


@dataclass(frozen=True, eq=False)
class GeoLocation(GeoPoint):
    """Result of a geocoding call.

    Attributes:
        latitude: Latitude, None when the provider returned none
        longitude: Longitude, None when the provider returned none
        street_address: Street line, title-cased (e.g., "100 Spear St")
        city: City, title-cased
        state: State or province code
        postal_code: ZIP or postal code
        country_code: Two-letter country code
        formatted_address: Full address as returned by the provider
        provider: Name of the provider that produced the result
        precision: Accuracy level (see PRECISION_LEVELS)
        success: True for a successful lookup
    """
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country_code: str | None = None
    formatted_address: str | None = None
    provider: str | None = None
    precision: str = PRECISION_UNKNOWN
    success: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        for name in ("street_address", "city"):
            value = getattr(self, name)
            if value:
                object.__setattr__(self, name, titleize(value))

    @classmethod
    def failed(cls, provider: str | None = None) -> "GeoLocation":
        """An empty unsuccessful result."""
        return cls(provider=provider, success=False)

    @property
    def is_us(self) -> bool:
        """True if geocoded to the United States."""
        return self.country_code == "US"

    @property
    def full_address(self) -> str:
        """The provider's full address, or one derived from the components."""
        return self.formatted_address or self.to_geocodeable_s()

    @property
    def street_number(self) -> str | None:
        """Leading digits of the street address."""
        if self.street_address is None:
            return None
        return _LEADING_DIGITS.match(self.street_address).group()

    @property
    def street_name(self) -> str | None:
        """Street address without its leading number."""
        if self.street_address is None:
            return None
        return self.street_address[len(self.street_number):].strip()

    def to_geocodeable_s(self) -> str:
        """Non-blank address components joined with ", "."""
        parts = [
            self.street_address,
            self.city,
            self.state,
            self.postal_code,
            self.country_code,
        ]
        return ", ".join(p for p in parts if p)

    def to_dict(self) -> dict[str, Any]:
        """All the important fields as key-value pairs."""
        return {
            "success": self.success,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "country_code": self.country_code,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "street_address": self.street_address,
            "provider": self.provider,
            "full_address": self.full_address,
            "ll": self.ll,
            "is_us": self.is_us,
            "precision": self.precision,
        }

    def __str__(self) -> str:
        return (
            f"Provider: {self.provider}\n"
            f"Street: {self.street_address}\n"
            f"City: {self.city}\n"
            f"State: {self.state}\n"
            f"Zip: {self.postal_code}\n"
            f"Latitude: {self.latitude}\n"
            f"Longitude: {self.longitude}\n"
            f"Country: {self.country_code}\n"
            f"Success: {self.success}"
        )
