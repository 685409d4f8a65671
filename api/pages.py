"""View-model endpoints for the results, hotel and payment pages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Query, Request
from fastapi.responses import JSONResponse

from aoryx import AoryxError, AsyncAoryxClient, Destination
from services import (
    HotelView,
    ResultsView,
    build_hotel_view,
    build_results_view,
    parse_ratings,
    parse_search_params,
    parse_sort,
)
from services.favorites import parse_number
from utils import LOCALE_COOKIE, get_translations, resolve_locale
from utils.i18n import PaymentCopy

from .dependencies import get_aoryx_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

AoryxClient = Annotated[AsyncAoryxClient, Depends(get_aoryx_client)]
LocaleCookie = Annotated[str | None, Cookie(alias=LOCALE_COOKIE)]


async def _load_destinations(client: AsyncAoryxClient, country_code: str) -> list[Destination]:
    try:
        country = await client.country_info(country_code)
    except AoryxError as e:
        logger.warning("[Aoryx] country-info - destinations unavailable: %s", e)
        return []
    return country["destinations"]


@router.get("/api/results", response_model=None)
async def results_page(
    request: Request,
    client: AoryxClient,
    locale: LocaleCookie = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    ratings: Annotated[str | None, Query(description="Comma-separated star ratings")] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
) -> ResultsView | JSONResponse:
    """Search, filter and sort hotels for the results page."""
    parsed = parse_search_params(request.query_params)
    if parsed.payload is None:
        return JSONResponse({"error": parsed.error}, status_code=400)

    try:
        result = await client.search(parsed.payload)
    except AoryxError:
        logger.exception("[Aoryx] Search - results page failed")
        message = get_translations(resolve_locale(locale))["errors"]["results"]
        return JSONResponse({"error": message}, status_code=502)

    destinations = await _load_destinations(client, parsed.payload["countryCode"])
    return build_results_view(
        result,
        parsed.payload,
        sort_by=parse_sort(sort_by),
        ratings=parse_ratings(ratings),
        price_override=(parse_number(min_price), parse_number(max_price)),
        destinations=destinations,
        notice=parsed.notice,
    )


@router.get("/api/hotels/{hotel_code}", response_model=None)
async def hotel_page(
    hotel_code: str,
    request: Request,
    client: AoryxClient,
    locale: LocaleCookie = None,
) -> HotelView | JSONResponse:
    """Hotel info, room options and location for the hotel page."""
    query = dict(request.query_params)
    query["hotelCode"] = hotel_code
    parsed = parse_search_params(query)
    resolved_locale = resolve_locale(locale)

    try:
        return await build_hotel_view(client, hotel_code, parsed, resolved_locale)
    except AoryxError:
        logger.exception("[Aoryx] hotel-Info - hotel page failed for %s", hotel_code)
        message = get_translations(resolved_locale)["errors"]["hotel"]
        return JSONResponse({"error": message}, status_code=502)


@router.get("/payment/success", response_model=None)
async def payment_success(locale: LocaleCookie = None) -> PaymentCopy:
    """Localized copy of the payment success page."""
    return get_translations(resolve_locale(locale))["payment"]["success"]


@router.get("/payment/fail", response_model=None)
async def payment_fail(locale: LocaleCookie = None) -> PaymentCopy:
    """Localized copy of the payment failure page."""
    return get_translations(resolve_locale(locale))["payment"]["failure"]
