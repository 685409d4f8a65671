"""Normalization of Aoryx responses into the site's stable shapes.

Vendor payloads are inconsistent: money may be a number, a numeric string or
an object, room lists appear under several keys (or as a lone object), and
field names vary between endpoints. Every extractor here is a pure function
that returns ``None`` (or an empty list) for absent or unexpected data and
never raises.
"""

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any, TypeGuard

from .types import (
    CountryDestinations,
    Destination,
    DestinationRef,
    GeoCode,
    HotelAddress,
    HotelContact,
    HotelInfo,
    HotelInfoResult,
    HotelSummary,
    Money,
    RoomOption,
    SearchResult,
    VendorJson,
)

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

MONEY_AMOUNT_KEYS = ("Amount", "TotalAmount", "Value", "Price", "Net", "NetAmount")
CURRENCY_KEYS = ("Currency", "CurrencyCode", "Curr")
POLICY_TEXT_KEYS = ("Text", "Policy", "Description", "Remark")
ROOM_SIGNATURE_PARTS = ("room", "rate", "board", "meal", "refundable")

ROOM_ID_KEYS = ("RoomCode", "RateKey", "RoomIndex", "Id")
ROOM_NAME_KEYS = ("RoomName", "RoomType", "Name", "Room")
ROOM_BOARD_KEYS = ("BoardType", "MealType", "MealPlan", "Meal", "Board")
ROOM_PRICE_KEYS = (
    "TotalPrice",
    "TotalAmount",
    "RoomRate",
    "NetRate",
    "Price",
    "NetPrice",
    "Amount",
)
ROOM_AVAILABILITY_KEYS = ("AvailableRooms", "RoomAvailable", "Availability")
ROOM_POLICY_KEYS = ("CancellationPolicy", "CancelPolicy", "CancellationText")

DESTINATION_LIST_PATHS = (
    ("Destinations", "Destination"),
    ("DestinationInfo", "Destination"),
    ("DestinationsInformation",),
    ("Destinations",),
    ("DestinationInfo",),
    ("Cities", "City"),
)
DESTINATION_ID_KEYS = ("DestinationId", "DestinationCode", "Id", "Code")
DESTINATION_NAME_KEYS = ("Name", "DestinationName", "CityName", "Text")

_TRUE_STRINGS = frozenset({"true", "yes", "y", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "n", "0"})


# =============================================================================
# Scalar coercion
# =============================================================================


def _is_finite_number(value: object) -> TypeGuard[int | float]:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def to_string_value(value: object) -> str | None:
    """Coerce a non-blank string or finite number to a trimmed string."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if _is_finite_number(value):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return None


def to_number(value: object) -> float | None:
    """Coerce a number or a string with a leading number to a float."""
    if _is_finite_number(value):
        return value
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match is None:
            return None
        parsed = float(match.group(1))
        return parsed if math.isfinite(parsed) else None
    return None


def to_integer(value: object) -> int | None:
    """Coerce to a number and round halves up."""
    number = to_number(value)
    if number is None:
        return None
    return math.floor(number + 0.5)


def to_boolean(value: object) -> bool | None:
    """Coerce booleans, 0/1 and yes/no style strings."""
    if isinstance(value, bool):
        return value
    if _is_finite_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    return None


def _is_empty(value: object) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return _is_finite_number(value) and value == 0


def as_list(value: object) -> list[Any]:
    """Wrap a lone value in a list; empty values become an empty list."""
    if _is_empty(value):
        return []
    if isinstance(value, list):
        return value
    return [value]


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first value among ``keys`` that is not None."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _child(value: object, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def pascalize_keys(value: Any) -> Any:
    """Recursively upper-case the first character of every object key."""
    if isinstance(value, list):
        return [pascalize_keys(item) for item in value]
    if isinstance(value, dict):
        return {
            (key[:1].upper() + key[1:] if isinstance(key, str) else key): pascalize_keys(val)
            for key, val in value.items()
        }
    return value


def normalize_parent_destination_id(raw_id: str | None) -> str | None:
    """Ensure a destination id has the ``<id>-<sub>`` form, e.g. ``160-0``."""
    if not raw_id:
        return None
    trimmed = raw_id.strip()
    if not trimmed:
        return None
    if "-" in trimmed:
        return trimmed
    return f"{trimmed}-0"


# =============================================================================
# Compound fields
# =============================================================================


def extract_money(value: object) -> Money:
    """Extract an amount and currency from any vendor money representation."""
    if isinstance(value, str | int | float) and not isinstance(value, bool):
        return {"amount": to_number(value), "currency": None}
    if isinstance(value, dict):
        return {
            "amount": to_number(first_present(value, MONEY_AMOUNT_KEYS)),
            "currency": to_string_value(first_present(value, CURRENCY_KEYS)),
        }
    return {"amount": None, "currency": None}


def extract_cancellation_policy(value: object) -> str | None:
    """Flatten a cancellation policy given as text, list or object."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, list):
        parts = [part for part in map(extract_cancellation_policy, value) if part]
        return " ".join(parts) if parts else None
    if isinstance(value, dict):
        return to_string_value(first_present(value, POLICY_TEXT_KEYS))
    return None


def has_room_signature(record: Mapping[str, Any]) -> bool:
    """Return True if any key looks like a room/rate field."""
    for key in record:
        lowered = str(key).lower()
        if any(part in lowered for part in ROOM_SIGNATURE_PARTS):
            return True
    return False


def find_room_candidates(value: object) -> list[VendorJson]:
    """Find the largest nested list of room-like objects anywhere in a payload."""
    candidates: list[list[VendorJson]] = []

    def visit(node: object) -> None:
        if isinstance(node, list):
            records = [item for item in node if isinstance(item, dict)]
            if records and any(has_room_signature(record) for record in records):
                candidates.append(records)
            for item in node:
                visit(item)
        elif isinstance(node, dict):
            for item in node.values():
                visit(item)

    visit(value)

    if not candidates:
        return []
    return max(candidates, key=len)


# =============================================================================
# Rooms
# =============================================================================


def _room_sources(response: VendorJson) -> list[Any]:
    rooms = response.get("Rooms")
    return [
        _child(response.get("RoomDetails"), "RoomDetail"),
        _child(response.get("HotelRooms"), "HotelRoom"),
        rooms.get("Room") if isinstance(rooms, dict) else rooms,
    ]


def _resolve_room_items(response: VendorJson) -> list[VendorJson]:
    for source in _room_sources(response):
        records = [item for item in as_list(source) if isinstance(item, dict)]
        if records:
            return records
    return find_room_candidates(response)


def _resolve_refundable(room: VendorJson) -> bool | None:
    refundable = to_boolean(first_present(room, ("Refundable", "IsRefundable")))
    if refundable is not None:
        return refundable
    non_refundable = to_boolean(room.get("NonRefundable"))
    if non_refundable is not None:
        return not non_refundable
    return None


def normalize_room(room: VendorJson, index: int) -> RoomOption:
    """Normalize one vendor room record; ``index`` is zero-based."""
    amount: float | None = None
    currency: str | None = None
    for key in ROOM_PRICE_KEYS:
        money = extract_money(room.get(key))
        if money["amount"] is not None:
            amount = money["amount"]
            currency = money["currency"]
            break

    if not currency:
        currency = to_string_value(first_present(room, CURRENCY_KEYS))

    return {
        "id": to_string_value(first_present(room, ROOM_ID_KEYS)) or f"room-{index + 1}",
        "name": to_string_value(first_present(room, ROOM_NAME_KEYS)),
        "boardType": to_string_value(first_present(room, ROOM_BOARD_KEYS)),
        "refundable": _resolve_refundable(room),
        "currency": currency,
        "totalPrice": amount,
        "availableRooms": to_integer(first_present(room, ROOM_AVAILABILITY_KEYS)),
        "cancellationPolicy": extract_cancellation_policy(
            first_present(room, ROOM_POLICY_KEYS)
        ),
    }


def normalize_room_options(response: VendorJson) -> list[RoomOption]:
    """Normalize a RoomDetails response into room options."""
    return [
        normalize_room(room, index)
        for index, room in enumerate(_resolve_room_items(response))
    ]


# =============================================================================
# Search
# =============================================================================


def normalize_search_hotel(hotel: VendorJson, currency: str | None) -> HotelSummary:
    """Normalize a hotel from the search response.

    ``HotelInfo.Name`` holds the real hotel name; the top-level ``Name`` may
    contain the hotel code, so it is only a fallback.
    """
    info = hotel.get("HotelInfo")
    if not isinstance(info, dict):
        info = {}
    return {
        "code": to_string_value(hotel.get("Code")),
        "name": to_string_value(info.get("Name")) or to_string_value(hotel.get("Name")),
        "minPrice": to_number(hotel.get("MinPrice")),
        "currency": currency,
        "rating": to_number(info.get("StarRating")),
        "address": to_string_value(info.get("Add1")),
        "city": to_string_value(info.get("City")),
        "imageUrl": to_string_value(info.get("Image")),
        "latitude": to_number(info.get("Lat")),
        "longitude": to_number(info.get("Lon")),
    }


def search_hotels(response: VendorJson) -> list[VendorJson]:
    """Return ``Hotels.Hotel`` as a list whether it is a list or one object."""
    hotels = as_list(_child(response.get("Hotels"), "Hotel"))
    return [hotel for hotel in hotels if isinstance(hotel, dict)]


def normalize_search_response(response: VendorJson, session_id: str) -> SearchResult:
    """Normalize a search response once its session id is known."""
    currency = to_string_value(_child(_child(response.get("Monetary"), "Currency"), "Code"))
    audit = response.get("Audit")
    if not isinstance(audit, dict):
        audit = {}

    destination: DestinationRef | None = None
    raw_destination = audit.get("Destination")
    if isinstance(raw_destination, dict) and raw_destination:
        destination = {
            "code": to_string_value(raw_destination.get("Code")),
            "name": to_string_value(raw_destination.get("Text")),
        }

    return {
        "sessionId": session_id,
        "currency": currency,
        "propertyCount": to_integer(audit.get("PropertyCount")),
        "responseTime": to_string_value(audit.get("ResponseTime")),
        "destination": destination,
        "hotels": [normalize_search_hotel(hotel, currency) for hotel in search_hotels(response)],
    }


# =============================================================================
# Static content
# =============================================================================


def normalize_hotels_info(items: object) -> list[HotelInfo]:
    """Normalize the HotelsInfoByDestinationId listing."""
    result: list[HotelInfo] = []
    for item in as_list(items):
        if not isinstance(item, dict):
            continue
        geo_code = item.get("GeoCode")
        result.append({
            "destinationId": to_string_value(item.get("DestinationId")),
            "name": to_string_value(item.get("Name")),
            "systemId": to_string_value(item.get("SystemId")),
            "rating": to_number(item.get("Rating")),
            "city": to_string_value(item.get("City")),
            "address": to_string_value(item.get("Address1")),
            "imageUrl": to_string_value(item.get("ImageUrl")),
            "latitude": to_number(_child(geo_code, "Lat")),
            "longitude": to_number(_child(geo_code, "Lon")),
        })
    return result


def _normalize_address(address: object) -> HotelAddress | None:
    if not isinstance(address, dict):
        return None
    return {
        "line1": to_string_value(address.get("Line1")),
        "line2": to_string_value(address.get("Line2")),
        "countryCode": to_string_value(address.get("CountryCode")),
        "countryName": to_string_value(address.get("CountryName")),
        "cityName": to_string_value(address.get("CityName")),
        "stateCode": to_string_value(address.get("StateCode")),
        "zipCode": to_string_value(address.get("ZipCode")),
    }


def _normalize_geo_code(geo_code: object) -> GeoCode | None:
    if not isinstance(geo_code, dict):
        return None
    return {"lat": to_number(geo_code.get("Lat")), "lon": to_number(geo_code.get("Lon"))}


def _normalize_contact(contact: object) -> HotelContact | None:
    if not isinstance(contact, dict):
        return None
    return {
        "phone": to_string_value(contact.get("PhoneNo")),
        "fax": to_string_value(contact.get("FaxNo")),
        "website": to_string_value(contact.get("Website")),
    }


def normalize_hotel_info(info: object) -> HotelInfoResult | None:
    """Normalize the ``HotelInformation`` block of a hotel-Info response."""
    if not isinstance(info, dict) or not info:
        return None
    image_urls = info.get("ImageUrls")
    return {
        "systemId": to_string_value(info.get("SystemId")),
        "name": to_string_value(info.get("Name")),
        "rating": to_number(info.get("Rating")),
        "tripAdvisorRating": to_number(info.get("TripAdvisorRating")),
        "tripAdvisorUrl": to_string_value(info.get("TripAdvisorUrl")),
        "currencyCode": to_string_value(info.get("CurrencyCode")),
        "imageUrl": to_string_value(info.get("ImageUrl")),
        "imageUrls": [
            url for url in map(to_string_value, image_urls) if url
        ] if isinstance(image_urls, list) else [],
        "address": _normalize_address(info.get("Address")),
        "geoCode": _normalize_geo_code(info.get("GeoCode")),
        "contact": _normalize_contact(info.get("Contact")),
    }


def _destination_items(response: VendorJson) -> list[VendorJson]:
    for path in DESTINATION_LIST_PATHS:
        node: Any = response
        for key in path:
            node = _child(node, key)
        records = [item for item in as_list(node) if isinstance(item, dict)]
        if records:
            return records
    return []


def normalize_destinations(response: VendorJson) -> list[Destination]:
    """Normalize a destination listing; entries without an id are dropped."""
    destinations: list[Destination] = []
    for item in _destination_items(response):
        raw_id = to_string_value(first_present(item, DESTINATION_ID_KEYS))
        destination_id = normalize_parent_destination_id(raw_id)
        if destination_id is None:
            continue
        destinations.append({
            "id": destination_id,
            "name": to_string_value(first_present(item, DESTINATION_NAME_KEYS)),
            "rawId": raw_id,
        })
    return destinations


def normalize_country_destinations(
    response: VendorJson, country_code: str
) -> CountryDestinations:
    """Normalize a country-info response."""
    return {
        "countryCode": country_code.upper(),
        "destinations": normalize_destinations(response),
    }
