"""Hotel detail page: static info, room options and map location."""

import logging
import math
from collections.abc import Iterable
from typing import TypedDict

from aoryx import (
    AoryxError,
    AsyncAoryxClient,
    HotelInfo,
    HotelInfoResult,
    RoomOption,
    SearchParams,
    normalize_parent_destination_id,
)
from utils import format_price, map_embed_url
from utils.i18n import DEFAULT_LOCALE, Locale, get_translations

from .search_query import ParsedSearch

logger = logging.getLogger(__name__)


class Coordinates(TypedDict):
    """Latitude/longitude pair."""

    lat: float
    lon: float


class RoomCard(RoomOption):
    """Room option with its display price."""

    formattedPrice: str | None


class HotelView(TypedDict):
    """View model of the hotel detail page."""

    hotelCode: str
    hotel: HotelInfoResult | None
    images: list[str]
    coordinates: Coordinates | None
    mapEmbedUrl: str | None
    currency: str | None
    rooms: list[RoomCard]
    roomsError: str | None
    searchError: str | None
    notice: str | None


def _finite(value: float | None) -> float | None:
    if isinstance(value, int | float) and math.isfinite(value):
        return float(value)
    return None


def gallery_images(info: HotelInfoResult | None) -> list[str]:
    """Trimmed, de-duplicated image URLs in their original order."""
    if info is None:
        return []
    unique: dict[str, None] = {}
    for url in info["imageUrls"]:
        if isinstance(url, str) and url.strip():
            unique.setdefault(url.strip(), None)
    return list(unique)


def resolve_coordinates(
    info: HotelInfoResult | None,
    fallback_hotels: Iterable[HotelInfo],
    hotel_code: str,
) -> Coordinates | None:
    """Resolve hotel coordinates.

    The hotel-info geocode wins; otherwise the matching entry of the
    destination's hotel listing is used. Both values must be finite.

    Args:
        info: Hotel info, if loaded.
        fallback_hotels: Hotels of the destination.
        hotel_code: Hotel code to match against ``systemId``.

    Returns:
        Coordinates, or None if neither source has a complete pair.
    """
    geo = info["geoCode"] if info else None
    if geo:
        lat, lon = _finite(geo["lat"]), _finite(geo["lon"])
        if lat is not None and lon is not None:
            return {"lat": lat, "lon": lon}

    match = next((hotel for hotel in fallback_hotels if hotel["systemId"] == hotel_code), None)
    if match is None:
        return None
    lat, lon = _finite(match["latitude"]), _finite(match["longitude"])
    if lat is None or lon is None:
        return None
    return {"lat": lat, "lon": lon}


def _has_coordinates(info: HotelInfoResult | None) -> bool:
    geo = info["geoCode"] if info else None
    return bool(geo) and _finite(geo["lat"]) is not None and _finite(geo["lon"]) is not None


async def _fallback_hotels(
    client: AsyncAoryxClient, destination_code: str
) -> list[HotelInfo]:
    destination_id = normalize_parent_destination_id(destination_code) or destination_code
    try:
        return await client.hotels_info_by_destination_id(destination_id)
    except AoryxError as e:
        logger.warning("[Aoryx] Hotel location fallback failed for %s: %s", destination_id, e)
        return []


async def build_hotel_view(
    client: AsyncAoryxClient,
    hotel_code: str,
    parsed: ParsedSearch,
    locale: Locale = DEFAULT_LOCALE,
) -> HotelView:
    """Load everything the hotel detail page shows.

    Room options are only requested when the query carries a complete
    search; their failure is reported in ``roomsError`` so the static
    content still renders.

    Args:
        client: Aoryx client.
        hotel_code: Hotel code from the page path.
        parsed: Search parsed from the page query.
        locale: Locale for user-facing error messages.

    Returns:
        Hotel page view model.

    Raises:
        AoryxError: If the hotel info itself cannot be loaded.
    """
    info = await client.hotel_info(hotel_code)
    payload = parsed.payload

    coordinates: Coordinates | None = None
    if _has_coordinates(info):
        coordinates = resolve_coordinates(info, [], hotel_code)
    elif payload and payload.get("destinationCode"):
        fallback = await _fallback_hotels(client, payload["destinationCode"])
        coordinates = resolve_coordinates(info, fallback, hotel_code)

    rooms: list[RoomCard] = []
    rooms_error: str | None = None
    if payload is not None:
        room_payload: SearchParams = {**payload, "hotelCode": hotel_code}
        try:
            options = await client.room_details(room_payload)
        except AoryxError as e:
            logger.warning("[Aoryx] RoomDetails - failed for hotel %s: %s", hotel_code, e)
            rooms_error = get_translations(locale)["errors"]["rooms"]
        else:
            rooms = [
                {**option, "formattedPrice": format_price(option["totalPrice"], option["currency"])}
                for option in options
            ]

    return {
        "hotelCode": hotel_code,
        "hotel": info,
        "images": gallery_images(info),
        "coordinates": coordinates,
        "mapEmbedUrl": map_embed_url(coordinates["lat"], coordinates["lon"]) if coordinates else None,
        "currency": (info["currencyCode"] if info else None) or (payload.get("currency") if payload else None),
        "rooms": rooms,
        "roomsError": rooms_error,
        "searchError": parsed.error,
        "notice": parsed.notice,
    }
