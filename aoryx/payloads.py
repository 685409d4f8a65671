"""Aoryx request payload builders."""

from .exceptions import AoryxServiceError
from .types import (
    RoomOccupancy,
    SearchParameter,
    SearchParams,
    SearchRequest,
    TassProInfo,
)


def validate_search_params(params: SearchParams) -> None:
    """Check that a search has a target, dates and at least one room.

    Raises:
        AoryxServiceError: With code ``INVALID_PARAMS``.
    """
    if not params.get("destinationCode") and not params.get("hotelCode"):
        msg = "Either destinationCode or hotelCode is required"
        raise AoryxServiceError(msg, "INVALID_PARAMS")
    if not params.get("checkInDate") or not params.get("checkOutDate"):
        msg = "Check-in and check-out dates are required"
        raise AoryxServiceError(msg, "INVALID_PARAMS")
    if not params.get("rooms"):
        msg = "At least one room is required"
        raise AoryxServiceError(msg, "INVALID_PARAMS")


def normalize_date(value: str) -> str:
    """Add a midnight time component to a bare ``YYYY-MM-DD`` date."""
    if not value:
        return value
    return value if "T" in value else f"{value}T00:00:00"


def _build_rooms(params: SearchParams) -> list[RoomOccupancy]:
    rooms: list[RoomOccupancy] = []
    for room in params["rooms"]:
        occupancy: RoomOccupancy = {
            "RoomIdentifier": room["roomIdentifier"],
            "Adult": room["adults"],
        }
        ages = room.get("childrenAges") or []
        if ages:
            occupancy["Children"] = {
                "Count": len(ages),
                "ChildAge": [
                    {"Identifier": index, "Text": str(age)}
                    for index, age in enumerate(ages, start=1)
                ],
            }
        rooms.append(occupancy)
    return rooms


def build_search_request(
    params: SearchParams,
    *,
    default_currency: str,
    customer_code: str | None = None,
    region_id: str | None = None,
) -> SearchRequest:
    """Build the vendor search request from site search parameters.

    Args:
        params: Search parameters in camelCase.
        default_currency: Currency used when the search does not name one.
        customer_code: TassPro customer code used when params have none.
        region_id: TassPro region id used when params have none.

    Returns:
        PascalCase request body with ``Rooms.Room`` always a list.
    """
    tass_pro: TassProInfo = {}
    resolved_customer_code = params.get("customerCode") or customer_code
    resolved_region_id = params.get("regionId") or region_id
    if resolved_customer_code:
        tass_pro["CustomerCode"] = resolved_customer_code
    if resolved_region_id:
        tass_pro["RegionID"] = resolved_region_id

    search_parameter: SearchParameter = {
        "CountryCode": params["countryCode"].upper(),
        "Nationality": params["nationality"].upper(),
        "Currency": params.get("currency") or default_currency,
        "CheckInDate": normalize_date(params["checkInDate"]),
        "CheckOutDate": normalize_date(params["checkOutDate"]),
        "Rooms": {"Room": _build_rooms(params)},
    }
    destination_code = params.get("destinationCode")
    if destination_code:
        search_parameter["DestinationCode"] = destination_code
    hotel_code = params.get("hotelCode")
    if hotel_code:
        search_parameter["HotelCode"] = hotel_code
    if tass_pro:
        search_parameter["TassProInfo"] = tass_pro
    return {"SearchParameter": search_parameter}
