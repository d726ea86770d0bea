"""Provider response parsing - Pure functions.

Each parser turns one provider's raw response body into a GeoLocation.
Parsers never raise: a body that cannot be understood, or that carries the
provider's "no result" marker, becomes an unsuccessful GeoLocation.
Missing fields are left as None.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any

from geokit.core.location import PRECISION_UNKNOWN, GeoLocation


# Google result types, most precise first
_GOOGLE_PRECISION = (
    ("street_address", "address"),
    ("premise", "address"),
    ("subpremise", "address"),
    ("route", "street"),
    ("intersection", "street"),
    ("postal_code", "zip"),
    ("locality", "city"),
    ("sublocality", "city"),
    ("administrative_area_level_2", "state"),
    ("administrative_area_level_1", "state"),
    ("country", "country"),
)

# hostip marks unresolvable addresses with these in the City line
_HOSTIP_FAILURE_MARKERS = ("(Private Address)", "(Unknown City")

_COUNTRY_CODE = re.compile(r"\(([A-Za-z]{2})\)\s*$")

_PARSE_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError, ET.ParseError)


def _to_float(value: Any) -> float | None:
    """Convert a provider value to float, None when blank or invalid."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def _xml_children(element: ET.Element) -> dict[str, str | None]:
    """Map child element names to their text, namespace-agnostic."""
    return {_local_name(child.tag): _blank_to_none(child.text) for child in element}


def _find_local(element: ET.Element, name: str) -> ET.Element | None:
    for child in element.iter():
        if _local_name(child.tag) == name:
            return child
    return None


def parse_google_response(data: dict[str, Any], provider: str = "google") -> GeoLocation:
    """Parse a Google Geocoding API JSON response.

    Pure function.

    Args:
        data: Decoded JSON body
        provider: Name stamped on the result

    Returns:
        GeoLocation built from the first result
    """
    try:
        if data.get("status") != "OK":
            return GeoLocation.failed(provider)

        result = data["results"][0]
        location = result.get("geometry", {}).get("location", {})
        latitude = _to_float(location.get("lat"))
        longitude = _to_float(location.get("lng"))
        if latitude is None or longitude is None:
            return GeoLocation.failed(provider)

        components: dict[str, dict[str, Any]] = {}
        for component in result.get("address_components", []):
            for component_type in component.get("types", []):
                components.setdefault(component_type, component)

        def long_name(component_type: str) -> str | None:
            return _blank_to_none(components.get(component_type, {}).get("long_name"))

        def short_name(component_type: str) -> str | None:
            return _blank_to_none(components.get(component_type, {}).get("short_name"))

        street_parts = [long_name("street_number"), long_name("route")]
        street_address = " ".join(p for p in street_parts if p) or None

        result_types = set(result.get("types", []))
        precision = next(
            (level for google_type, level in _GOOGLE_PRECISION if google_type in result_types),
            PRECISION_UNKNOWN,
        )

        return GeoLocation(
            latitude=latitude,
            longitude=longitude,
            street_address=street_address,
            city=long_name("locality") or long_name("postal_town"),
            state=short_name("administrative_area_level_1"),
            postal_code=long_name("postal_code"),
            country_code=short_name("country"),
            formatted_address=_blank_to_none(result.get("formatted_address")),
            provider=provider,
            precision=precision,
            success=True,
        )
    except _PARSE_ERRORS:
        return GeoLocation.failed(provider)


def parse_yahoo_response(body: str, provider: str = "yahoo") -> GeoLocation:
    """Parse a Yahoo geocoding XML ResultSet.

    Pure function.

    Args:
        body: Raw XML body
        provider: Name stamped on the result

    Returns:
        GeoLocation built from the first Result element
    """
    try:
        root = ET.fromstring(body)
        result = _find_local(root, "Result")
        if result is None:
            return GeoLocation.failed(provider)

        fields = _xml_children(result)
        latitude = _to_float(fields.get("Latitude"))
        longitude = _to_float(fields.get("Longitude"))
        if latitude is None or longitude is None:
            return GeoLocation.failed(provider)

        return GeoLocation(
            latitude=latitude,
            longitude=longitude,
            street_address=fields.get("Address"),
            city=fields.get("City"),
            state=fields.get("State"),
            postal_code=fields.get("Zip"),
            country_code=fields.get("Country"),
            provider=provider,
            precision=result.get("precision") or PRECISION_UNKNOWN,
            success=True,
        )
    except _PARSE_ERRORS:
        return GeoLocation.failed(provider)


def parse_census_response(data: dict[str, Any], provider: str = "census") -> GeoLocation:
    """Parse a US Census Bureau geocoder JSON response.

    Pure function.

    Args:
        data: Decoded JSON body
        provider: Name stamped on the result

    Returns:
        GeoLocation built from the first address match
    """
    try:
        matches = data.get("result", {}).get("addressMatches") or []
        if not matches:
            return GeoLocation.failed(provider)

        match = matches[0]
        coordinates = match.get("coordinates", {})
        latitude = _to_float(coordinates.get("y"))
        longitude = _to_float(coordinates.get("x"))
        if latitude is None or longitude is None:
            return GeoLocation.failed(provider)

        components = match.get("addressComponents", {})
        matched_address = _blank_to_none(match.get("matchedAddress"))
        street_address = None
        if matched_address:
            street_address = _blank_to_none(matched_address.split(",")[0])

        return GeoLocation(
            latitude=latitude,
            longitude=longitude,
            street_address=street_address,
            city=_blank_to_none(components.get("city")),
            state=_blank_to_none(components.get("state")),
            postal_code=_blank_to_none(components.get("zip")),
            country_code="US",
            formatted_address=matched_address,
            provider=provider,
            precision="address",
            success=True,
        )
    except _PARSE_ERRORS:
        return GeoLocation.failed(provider)


def parse_geocoder_ca_response(body: str, provider: str = "geocoder.ca") -> GeoLocation:
    """Parse a geocoder.ca XML response.

    Pure function.

    Args:
        body: Raw XML body
        provider: Name stamped on the result

    Returns:
        GeoLocation, unsuccessful when the body carries an error element
    """
    try:
        root = ET.fromstring(body)
        if _find_local(root, "error") is not None:
            return GeoLocation.failed(provider)

        fields = _xml_children(root)
        latitude = _to_float(fields.get("latt"))
        longitude = _to_float(fields.get("longt"))
        if latitude is None or longitude is None:
            return GeoLocation.failed(provider)

        standard = _find_local(root, "standard")
        address = _xml_children(standard) if standard is not None else {}

        def pick(name: str) -> str | None:
            return address.get(name) or fields.get(name)

        street_parts = [pick("stnumber"), pick("staddress")]
        street_address = " ".join(p for p in street_parts if p) or None

        return GeoLocation(
            latitude=latitude,
            longitude=longitude,
            street_address=street_address,
            city=pick("city"),
            state=pick("prov"),
            postal_code=pick("postal"),
            country_code="CA",
            provider=provider,
            success=True,
        )
    except _PARSE_ERRORS:
        return GeoLocation.failed(provider)


def parse_hostip_response(body: str, provider: str = "hostip") -> GeoLocation:
    """Parse a hostip line-oriented "Key: value" response.

    Recognised keys are Country, City, Latitude and Longitude. City may be
    "Name, ST"; Country is "NAME (CODE)" and only CODE is kept. A City of
    "(Private Address)" means the lookup failed.

    Pure function.

    Args:
        body: Raw text body
        provider: Name stamped on the result

    Returns:
        GeoLocation for the IP address
    """
    fields: dict[str, str] = {}
    for line in body.splitlines():
        key, separator, value = line.partition(":")
        if not separator:
            continue
        fields[key.strip().lower()] = value.strip()

    city_field = fields.get("city", "")
    if not city_field or any(marker in city_field for marker in _HOSTIP_FAILURE_MARKERS):
        return GeoLocation.failed(provider)

    state = None
    city = city_field
    if "," in city_field:
        city, state = (part.strip() for part in city_field.rsplit(",", 1))

    country_code = None
    match = _COUNTRY_CODE.search(fields.get("country", ""))
    if match:
        country_code = match.group(1).upper()

    try:
        return GeoLocation(
            latitude=_to_float(fields.get("latitude")),
            longitude=_to_float(fields.get("longitude")),
            city=_blank_to_none(city),
            state=_blank_to_none(state),
            country_code=country_code,
            provider=provider,
            success=True,
        )
    except ValueError:
        return GeoLocation.failed(provider)
