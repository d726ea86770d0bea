"""Geographic calculations - Pure functions.

This module provides the point value type and the distance engine used to
rank and filter location records. Two formulas are supported:

- Sphere: great-circle distance (law-of-cosines form). Accurate, slower.
- Flat: Pythagorean approximation on per-degree scales. Fast, loses
  accuracy over long distances.

All functions are pure with no side effects.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from geokit.core.errors import ConfigurationError, InvalidCoordinatesError


KMS_PER_MILE = 1.609
EARTH_RADIUS_IN_MILES = 3963
EARTH_RADIUS_IN_KMS = EARTH_RADIUS_IN_MILES * KMS_PER_MILE
MILES_PER_LATITUDE_DEGREE = 69.1
KMS_PER_LATITUDE_DEGREE = MILES_PER_LATITUDE_DEGREE * KMS_PER_MILE
LATITUDE_DEGREES = EARTH_RADIUS_IN_MILES / MILES_PER_LATITUDE_DEGREE


class Units(str, Enum):
    """Distance units."""

    MILES = "miles"
    KILOMETERS = "kms"

    @classmethod
    def parse(cls, value: "Units | str") -> "Units":
        """Parse a units identifier.

        Raises:
            ConfigurationError: If the identifier is not recognised
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            units = _UNIT_ALIASES.get(value.strip().lower())
            if units is not None:
                return units
        raise ConfigurationError(
            f"Unknown distance units {value!r}, expected one of: miles, kms"
        )


class Formula(str, Enum):
    """Distance formulas."""

    SPHERE = "sphere"
    FLAT = "flat"

    @classmethod
    def parse(cls, value: "Formula | str") -> "Formula":
        """Parse a formula identifier.

        Raises:
            ConfigurationError: If the identifier is not recognised
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(
            f"Unknown distance formula {value!r}, expected one of: sphere, flat"
        )


_UNIT_ALIASES = {
    "miles": Units.MILES,
    "mile": Units.MILES,
    "mi": Units.MILES,
    "kms": Units.KILOMETERS,
    "km": Units.KILOMETERS,
    "kilometers": Units.KILOMETERS,
    "kilometres": Units.KILOMETERS,
}

DEFAULT_UNITS = Units.MILES
DEFAULT_FORMULA = Formula.SPHERE


@dataclass(frozen=True, eq=False)
class GeoPoint:
    """Immutable latitude/longitude pair.

    Equality compares the two coordinates only, so a GeoLocation equals a
    GeoPoint at the same position.

    Attributes:
        latitude: Degrees in [-90, 90], None when unknown
        longitude: Degrees in [-180, 180], None when unknown
    """
    latitude: float | None = None
    longitude: float | None = None

    def __post_init__(self) -> None:
        for name, limit in (("latitude", 90.0), ("longitude", 180.0)):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                value = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidCoordinatesError(
                    f"{name.capitalize()} must be a number, got {value!r}"
                ) from e
            if not -limit <= value <= limit:
                raise InvalidCoordinatesError(
                    f"{name.capitalize()} {value} out of range [-{limit:g}, {limit:g}]"
                )
            object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoPoint):
            return NotImplemented
        return self.latitude == other.latitude and self.longitude == other.longitude

    def __hash__(self) -> int:
        return hash((self.latitude, self.longitude))

    @property
    def has_coordinates(self) -> bool:
        """True when both latitude and longitude are known."""
        return self.latitude is not None and self.longitude is not None

    @property
    def ll(self) -> str:
        """Return the coordinates as a "lat,lng" string."""
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float | None, float | None]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def distance_to(
        self,
        other: Any,
        units: Units | str = DEFAULT_UNITS,
        formula: Formula | str = DEFAULT_FORMULA,
    ) -> float:
        """Distance from this point to another point-like value."""
        return distance_between(self, other, units=units, formula=formula)

    distance_from = distance_to

    @classmethod
    def from_any(cls, value: Any) -> "GeoPoint":
        """Adapt a point-like value into a GeoPoint.

        Accepts a GeoPoint, a (lat, lng) pair, a mapping with latitude/lat
        and longitude/lng/lon keys, or an object with such attributes.

        Raises:
            TypeError: If no coordinates can be found on the value
        """
        if isinstance(value, GeoPoint):
            return value

        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise TypeError(f"Expected a (lat, lng) pair, got {len(value)} values")
            return cls(value[0], value[1])

        names = _LATITUDE_NAMES + _LONGITUDE_NAMES
        if isinstance(value, Mapping):
            if not any(name in value for name in names):
                raise TypeError(f"{type(value).__name__} has no latitude/longitude")
            fields = dict(value)
        else:
            fields = {name: getattr(value, name) for name in names if hasattr(value, name)}
            if not fields:
                raise TypeError(f"{type(value).__name__} has no latitude/longitude")

        return cls(
            _first_present(fields.get, _LATITUDE_NAMES),
            _first_present(fields.get, _LONGITUDE_NAMES),
        )


_LATITUDE_NAMES = ("latitude", "lat")
_LONGITUDE_NAMES = ("longitude", "lng", "lon")


def _first_present(lookup: Callable[[str], Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = lookup(name)
        if value is not None:
            return value
    return None


def units_sphere_multiplier(units: Units | str) -> float:
    """Earth radius in the requested units."""
    if Units.parse(units) is Units.MILES:
        return EARTH_RADIUS_IN_MILES
    return EARTH_RADIUS_IN_KMS


def units_per_latitude_degree(units: Units | str) -> float:
    """Number of units per degree of latitude."""
    if Units.parse(units) is Units.MILES:
        return MILES_PER_LATITUDE_DEGREE
    return KMS_PER_LATITUDE_DEGREE


def units_per_longitude_degree(latitude: float, units: Units | str) -> float:
    """Number of units per degree of longitude at the given latitude."""
    miles_per_longitude_degree = abs(LATITUDE_DEGREES * math.cos(latitude * math.pi / 180))
    if Units.parse(units) is Units.MILES:
        return miles_per_longitude_degree
    return miles_per_longitude_degree * KMS_PER_MILE


def distance_between(
    from_point: Any,
    to_point: Any,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
) -> float:
    """Calculate the distance between two points.

    Pure function.

    Args:
        from_point: Origin (GeoPoint or any point-like value)
        to_point: Destination (GeoPoint or any point-like value)
        units: Units.MILES or Units.KILOMETERS
        formula: Formula.SPHERE or Formula.FLAT

    Returns:
        Distance in the requested units

    Raises:
        ConfigurationError: If units or formula are not recognised
        InvalidCoordinatesError: If either point lacks coordinates
    """
    units = Units.parse(units)
    formula = Formula.parse(formula)

    a = GeoPoint.from_any(from_point)
    b = GeoPoint.from_any(to_point)
    if not a.has_coordinates or not b.has_coordinates:
        raise InvalidCoordinatesError("Cannot measure distance to a point without coordinates")

    if a.to_tuple() == b.to_tuple():
        return 0.0

    if formula is Formula.SPHERE:
        lat_a = math.radians(a.latitude)
        lat_b = math.radians(b.latitude)
        delta_lng = math.radians(b.longitude) - math.radians(a.longitude)

        cosine = (
            math.sin(lat_a) * math.sin(lat_b)
            + math.cos(lat_a) * math.cos(lat_b) * math.cos(delta_lng)
        )
        # Rounding can push the cosine just outside acos' domain
        cosine = max(-1.0, min(1.0, cosine))

        return units_sphere_multiplier(units) * math.acos(cosine)

    lat_distance = units_per_latitude_degree(units) * (a.latitude - b.latitude)
    lng_distance = units_per_longitude_degree(a.latitude, units) * (a.longitude - b.longitude)

    return math.sqrt(lat_distance ** 2 + lng_distance ** 2)


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )

    @property
    def center(self) -> GeoPoint:
        """Midpoint of the box."""
        return GeoPoint(
            (self.min_latitude + self.max_latitude) / 2,
            (self.min_longitude + self.max_longitude) / 2,
        )


def bounds_around(
    origin: Any,
    distance: float,
    units: Units | str = DEFAULT_UNITS,
) -> BoundingBox:
    """Build a bounding box that encloses a radius around a point.

    The box is never smaller than the radius; a box that would reach a pole
    or cross the antimeridian spans every longitude.

    Pure function.

    Args:
        origin: Center point
        distance: Radius in the given units
        units: Units of the radius

    Returns:
        Enclosing bounding box
    """
    center = GeoPoint.from_any(origin)
    if not center.has_coordinates:
        raise InvalidCoordinatesError("Cannot build bounds around a point without coordinates")
    if distance < 0:
        raise ValueError(f"Distance must be non-negative, got {distance}")

    lat_delta = distance / units_per_latitude_degree(units)
    min_lat = max(-90.0, center.latitude - lat_delta)
    max_lat = min(90.0, center.latitude + lat_delta)

    # Longitude degrees shrink towards the poles: size the box for the
    # most poleward latitude it covers.
    lng_scale = units_per_longitude_degree(max(abs(min_lat), abs(max_lat)), units)
    if lng_scale <= 0 or max_lat >= 90.0 or min_lat <= -90.0:
        return BoundingBox(min_lat, max_lat, -180.0, 180.0)

    lng_delta = distance / lng_scale
    min_lng = center.longitude - lng_delta
    max_lng = center.longitude + lng_delta
    if min_lng < -180.0 or max_lng > 180.0:
        return BoundingBox(min_lat, max_lat, -180.0, 180.0)

    return BoundingBox(min_lat, max_lat, min_lng, max_lng)


def sort_by_distance(
    records: Iterable[Any],
    origin: Any,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
    key: Callable[[Any], Any] | None = None,
) -> list[tuple[Any, float]]:
    """Pair each record with its distance from the origin, nearest first.

    Records without coordinates are left out.

    Pure function.

    Args:
        records: Point-like records, or any records when key is given
        origin: Point to measure from
        units: Distance units
        formula: Distance formula
        key: Optional callable returning the point for a record

    Returns:
        List of (record, distance) sorted by ascending distance
    """
    units = Units.parse(units)
    formula = Formula.parse(formula)
    origin_point = GeoPoint.from_any(origin)

    pairs = []
    for record in records:
        point = GeoPoint.from_any(key(record) if key else record)
        if not point.has_coordinates:
            continue
        pairs.append((record, distance_between(origin_point, point, units, formula)))

    return sorted(pairs, key=lambda pair: pair[1])


def filter_within(
    records: Iterable[Any],
    origin: Any,
    distance: float,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
    key: Callable[[Any], Any] | None = None,
) -> list[Any]:
    """Records no farther than distance from the origin, nearest first.

    Pure function.
    """
    return [
        record
        for record, d in sort_by_distance(records, origin, units, formula, key)
        if d <= distance
    ]


def filter_beyond(
    records: Iterable[Any],
    origin: Any,
    distance: float,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
    key: Callable[[Any], Any] | None = None,
) -> list[Any]:
    """Records farther than distance from the origin, nearest first.

    Pure function.
    """
    return [
        record
        for record, d in sort_by_distance(records, origin, units, formula, key)
        if d > distance
    ]


def closest(
    records: Iterable[Any],
    origin: Any,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
    key: Callable[[Any], Any] | None = None,
) -> Any | None:
    """The record nearest to the origin, or None if there is none."""
    ranked = sort_by_distance(records, origin, units, formula, key)
    return ranked[0][0] if ranked else None


def farthest(
    records: Iterable[Any],
    origin: Any,
    units: Units | str = DEFAULT_UNITS,
    formula: Formula | str = DEFAULT_FORMULA,
    key: Callable[[Any], Any] | None = None,
) -> Any | None:
    """The record farthest from the origin, or None if there is none."""
    ranked = sort_by_distance(records, origin, units, formula, key)
    return ranked[-1][0] if ranked else None
