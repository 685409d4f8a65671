"""Search parameters carried in page query strings."""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from urllib.parse import urlencode

from aoryx import RoomSearch, SearchParams

DEFAULT_COUNTRY_CODE = "AE"
DEFAULT_NATIONALITY = "AM"
DEFAULT_ADULTS = 2

MISSING_TARGET_ERROR = "Select a destination or hotel to search."
MISSING_DATES_ERROR = "Select check-in and check-out dates."
INVALID_DATES_ERROR = "Check-in and check-out dates are not valid."
INVALID_ROOMS_ERROR = "Room selection is not valid."
CHECKOUT_ADJUSTED_NOTICE = "Check-out date was moved to the day after check-in."


@dataclass
class ParsedSearch:
    """Result of parsing a search query string."""

    payload: SearchParams | None
    error: str | None = None
    notice: str | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_ages(value: object) -> list[int]:
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    if not isinstance(value, list):
        raise ValueError("child ages must be a list")
    return [int(age) for age in value]


def _room_from_mapping(room: object, identifier: int) -> RoomSearch:
    if not isinstance(room, dict):
        raise ValueError("room must be an object")
    adults = int(room.get("adults", DEFAULT_ADULTS))
    ages = _parse_ages(room.get("childAges", room.get("childrenAges", [])))
    if adults < 1 or any(age < 0 for age in ages):
        raise ValueError("invalid occupancy")
    return {"roomIdentifier": identifier, "adults": adults, "childrenAges": ages}


def _parse_rooms(query: Mapping[str, str]) -> list[RoomSearch]:
    raw_rooms = _clean(query.get("rooms"))
    if raw_rooms is not None:
        decoded = json.loads(raw_rooms)
        if not isinstance(decoded, list):
            raise ValueError("rooms must be a list")
        return [
            _room_from_mapping(room, identifier)
            for identifier, room in enumerate(decoded, start=1)
        ]

    # Single-room links: ?adults=2&childAges=4,7
    room = {
        "adults": _clean(query.get("adults")) or DEFAULT_ADULTS,
        "childAges": _clean(query.get("childAges")) or "",
    }
    return [_room_from_mapping(room, 1)]


def parse_search_params(query: Mapping[str, str]) -> ParsedSearch:
    """Parse search parameters from a flat query mapping.

    Only presence is validated; availability rules are the vendor's concern.
    A check-out on or before check-in is moved to the next day and reported
    through ``notice`` instead of failing.

    Args:
        query: Query string parameters.

    Returns:
        Parsed search payload, or an error message when required fields
        are missing.
    """
    destination_code = _clean(query.get("destinationCode"))
    hotel_code = _clean(query.get("hotelCode"))
    if not destination_code and not hotel_code:
        return ParsedSearch(payload=None, error=MISSING_TARGET_ERROR)

    check_in_raw = _clean(query.get("checkInDate"))
    check_out_raw = _clean(query.get("checkOutDate"))
    if not check_in_raw or not check_out_raw:
        return ParsedSearch(payload=None, error=MISSING_DATES_ERROR)
    try:
        check_in = date.fromisoformat(check_in_raw)
        check_out = date.fromisoformat(check_out_raw)
    except ValueError:
        return ParsedSearch(payload=None, error=INVALID_DATES_ERROR)

    try:
        rooms = _parse_rooms(query)
    except (ValueError, TypeError, RecursionError):
        return ParsedSearch(payload=None, error=INVALID_ROOMS_ERROR)
    if not rooms:
        return ParsedSearch(payload=None, error=INVALID_ROOMS_ERROR)

    notice: str | None = None
    if check_out <= check_in:
        try:
            check_out = check_in + timedelta(days=1)
        except OverflowError:
            return ParsedSearch(payload=None, error=INVALID_DATES_ERROR)
        notice = CHECKOUT_ADJUSTED_NOTICE

    payload: SearchParams = {
        "countryCode": (_clean(query.get("countryCode")) or DEFAULT_COUNTRY_CODE).upper(),
        "nationality": (_clean(query.get("nationality")) or DEFAULT_NATIONALITY).upper(),
        "checkInDate": check_in.isoformat(),
        "checkOutDate": check_out.isoformat(),
        "rooms": rooms,
    }
    if destination_code:
        payload["destinationCode"] = destination_code
    if hotel_code:
        payload["hotelCode"] = hotel_code
    currency = _clean(query.get("currency"))
    if currency:
        payload["currency"] = currency.upper()

    return ParsedSearch(payload=payload, notice=notice)


def build_search_query(payload: SearchParams) -> str:
    """Encode search parameters as a query string ``parse_search_params`` reads."""
    params: dict[str, str] = {}
    destination_code = payload.get("destinationCode")
    if destination_code:
        params["destinationCode"] = destination_code
    hotel_code = payload.get("hotelCode")
    if hotel_code:
        params["hotelCode"] = hotel_code
    params["checkInDate"] = payload["checkInDate"]
    params["checkOutDate"] = payload["checkOutDate"]
    params["countryCode"] = payload["countryCode"]
    params["nationality"] = payload["nationality"]
    currency = payload.get("currency")
    if currency:
        params["currency"] = currency
    params["rooms"] = json.dumps(
        [
            {"adults": room["adults"], "childAges": room["childrenAges"]}
            for room in payload["rooms"]
        ],
        separators=(",", ":"),
    )
    return urlencode(params)
