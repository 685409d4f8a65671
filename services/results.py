"""Results page logic: price/rating filters and sort orders."""

import math
import re
from collections.abc import Callable, Collection, Iterable
from functools import cmp_to_key
from typing import Literal, TypedDict

from aoryx import Destination, HotelSummary, SearchParams, SearchResult
from utils import count_nights, format_date, format_price, hotel_detail_url

from .search_query import build_search_query

SortBy = Literal["price-asc", "price-desc", "rating-desc", "rating-asc"]
Direction = Literal["asc", "desc"]

DEFAULT_SORT: SortBy = "rating-desc"
RATING_OPTIONS = (5, 4, 3, 2, 1)

_CODE_LIKE = re.compile(r"^[\d-]+$")


class PriceRange(TypedDict):
    """Inclusive price interval."""

    min: float
    max: float


class HotelCard(HotelSummary):
    """Hotel summary with display fields for a result card."""

    formattedPrice: str | None
    detailUrl: str | None
    cityName: str | None


class ResultsView(TypedDict):
    """Everything the results page renders."""

    destination: str | None
    propertyCount: int
    currency: str | None
    sortBy: SortBy
    priceBounds: PriceRange | None
    priceRange: PriceRange | None
    nights: int | None
    datesLabel: str
    totalGuests: int
    roomsCount: int
    notice: str | None
    hotels: list[HotelCard]


def _has_value(value: float | None) -> bool:
    return value is not None and not (isinstance(value, float) and math.isnan(value))


def compare_nullable(a: float | None, b: float | None, direction: Direction) -> float:
    """Compare two optional numbers; missing values always sort last."""
    a_has = _has_value(a)
    b_has = _has_value(b)
    if not a_has and not b_has:
        return 0
    if not a_has:
        return 1
    if not b_has:
        return -1
    assert a is not None and b is not None
    return a - b if direction == "asc" else b - a


def compare_by_price(a: HotelSummary, b: HotelSummary, direction: Direction) -> float:
    """Order by price, then by rating (highest first)."""
    delta = compare_nullable(a["minPrice"], b["minPrice"], direction)
    if delta != 0:
        return delta
    return compare_nullable(a["rating"], b["rating"], "desc")


def compare_by_rating(a: HotelSummary, b: HotelSummary, direction: Direction) -> float:
    """Order by rating, then by price (cheapest first)."""
    delta = compare_nullable(a["rating"], b["rating"], direction)
    if delta != 0:
        return delta
    return compare_nullable(a["minPrice"], b["minPrice"], "asc")


Comparator = Callable[[HotelSummary, HotelSummary, Direction], float]

SORT_ORDERS: dict[SortBy, tuple[Comparator, Direction]] = {
    "price-asc": (compare_by_price, "asc"),
    "price-desc": (compare_by_price, "desc"),
    "rating-desc": (compare_by_rating, "desc"),
    "rating-asc": (compare_by_rating, "asc"),
}


def parse_sort(value: str | None) -> SortBy:
    """Map a query value to a known sort order."""
    if value in ("price-asc", "price-desc", "rating-desc", "rating-asc"):
        return value  # type: ignore[return-value]
    return DEFAULT_SORT


def sort_hotels(hotels: Iterable[HotelSummary], sort_by: SortBy) -> list[HotelSummary]:
    """Return hotels in the requested order (stable)."""
    compare, direction = SORT_ORDERS.get(sort_by, SORT_ORDERS[DEFAULT_SORT])
    return sorted(hotels, key=cmp_to_key(lambda a, b: compare(a, b, direction)))


def price_bounds(hotels: Iterable[HotelSummary]) -> PriceRange | None:
    """Lowest and highest known price, or None when no hotel has a price."""
    prices = [hotel["minPrice"] for hotel in hotels if _has_value(hotel["minPrice"])]
    if not prices:
        return None
    return {"min": min(prices), "max": max(prices)}  # type: ignore[type-var]


def resolve_price_range(
    bounds: PriceRange | None,
    override: tuple[float | None, float | None] | None = None,
) -> PriceRange | None:
    """Clamp a user-selected price range into the available bounds.

    Args:
        bounds: Price bounds of the current results.
        override: Selected (min, max); either side may be None.

    Returns:
        The effective range, or None when results carry no prices.
    """
    if bounds is None:
        return None
    if override is None or (override[0] is None and override[1] is None):
        return {"min": bounds["min"], "max": bounds["max"]}

    requested_min = bounds["min"] if override[0] is None else override[0]
    requested_max = bounds["max"] if override[1] is None else override[1]
    clamped_min = max(bounds["min"], min(requested_min, bounds["max"]))
    clamped_max = min(bounds["max"], max(requested_max, bounds["min"]))
    return {"min": min(clamped_min, clamped_max), "max": max(clamped_min, clamped_max)}


def filter_hotels(
    hotels: Iterable[HotelSummary],
    bounds: PriceRange | None,
    price_range: PriceRange | None,
    ratings: Collection[int] = (),
) -> list[HotelSummary]:
    """Apply price and star-rating filters.

    Hotels without a price are kept until the price range is narrowed.
    Ratings match on whole stars (4.5 is in the 4 bucket).
    """
    active_price_filter = (
        bounds is not None
        and price_range is not None
        and (price_range["min"] > bounds["min"] or price_range["max"] < bounds["max"])
    )
    rating_set = set(ratings)

    filtered: list[HotelSummary] = []
    for hotel in hotels:
        price = hotel["minPrice"]
        if bounds is not None and price_range is not None:
            if _has_value(price):
                assert price is not None
                if price < price_range["min"] or price > price_range["max"]:
                    continue
            elif active_price_filter:
                continue
        if rating_set:
            rating = hotel["rating"]
            if not _has_value(rating):
                continue
            assert rating is not None
            if math.floor(rating) not in rating_set:
                continue
        filtered.append(hotel)
    return filtered


def parse_ratings(value: str | None) -> list[int]:
    """Parse a comma-separated star list, ignoring unknown values."""
    if not value:
        return []
    ratings: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if part.isdigit() and int(part) in RATING_OPTIONS and int(part) not in ratings:
            ratings.append(int(part))
    return ratings


def _find_destination(
    code: str | None, destinations: Iterable[Destination]
) -> Destination | None:
    if not code:
        return None
    for destination in destinations:
        if code in (destination["id"], destination["rawId"]):
            return destination
    return None


def resolve_city_name(city: str | None, destinations: Iterable[Destination]) -> str | None:
    """Replace a destination code used as a city with its name."""
    if not city:
        return None
    if not _CODE_LIKE.match(city):
        return city
    found = _find_destination(city, destinations)
    return found["name"] if found else None


def build_results_view(  # noqa: PLR0913
    result: SearchResult,
    payload: SearchParams,
    *,
    sort_by: SortBy = DEFAULT_SORT,
    ratings: Collection[int] = (),
    price_override: tuple[float | None, float | None] | None = None,
    destinations: list[Destination] | None = None,
    notice: str | None = None,
) -> ResultsView:
    """Filter, sort and decorate search results for the results page.

    Args:
        result: Normalized search result.
        payload: Search parameters that produced the result.
        sort_by: Sort order.
        ratings: Star buckets to keep; empty keeps all.
        price_override: Selected (min, max) price range.
        destinations: Known destinations, used to resolve city codes.
        notice: Notice produced while parsing the query.

    Returns:
        Results page view model.
    """
    known_destinations = destinations or []
    bounds = price_bounds(result["hotels"])
    price_range = resolve_price_range(bounds, price_override)
    visible = sort_hotels(
        filter_hotels(result["hotels"], bounds, price_range, ratings), sort_by
    )

    listed = _find_destination(payload.get("destinationCode"), known_destinations)
    destination_name = (listed["name"] if listed else None) or (
        result["destination"]["name"] if result["destination"] else None
    )
    destination_code = payload.get("destinationCode") or (
        result["destination"]["code"] if result["destination"] else None
    )

    cards: list[HotelCard] = []
    for hotel in visible:
        detail_url: str | None = None
        if hotel["code"]:
            detail_payload: SearchParams = {**payload, "hotelCode": hotel["code"]}
            if destination_code:
                detail_payload["destinationCode"] = destination_code
            detail_url = hotel_detail_url(hotel["code"], build_search_query(detail_payload))
        cards.append({
            **hotel,
            "formattedPrice": format_price(hotel["minPrice"], hotel["currency"]),
            "detailUrl": detail_url,
            "cityName": resolve_city_name(hotel["city"], known_destinations)
            or destination_name,
        })

    rooms = payload["rooms"]
    dates_label = (
        f"{format_date(payload['checkInDate'])} - {format_date(payload['checkOutDate'])}"
    )
    return {
        "destination": destination_name,
        "propertyCount": (
            result["propertyCount"]
            if result["propertyCount"] is not None
            else len(result["hotels"])
        ),
        "currency": result["currency"],
        "sortBy": sort_by,
        "priceBounds": bounds,
        "priceRange": price_range,
        "nights": count_nights(payload["checkInDate"], payload["checkOutDate"]),
        "datesLabel": dates_label,
        "totalGuests": sum(room["adults"] + len(room["childrenAges"]) for room in rooms),
        "roomsCount": len(rooms),
        "notice": notice,
        "hotels": cards,
    }
