"""Aoryx hotel distribution API client.

JSON over HTTPS, one POST endpoint per operation, authenticated with an
``ApiKey`` header. Requests are sent in PascalCase and responses are
normalized to PascalCase keys before the normalizers read them, because the
API answers in either casing depending on the endpoint.
"""

import logging
import time
from typing import Any, Self

import httpx

from .exceptions import (
    AoryxConfigError,
    AoryxHttpError,
    AoryxInvalidJsonError,
    AoryxRequestError,
    AoryxServiceError,
    AoryxTimeoutError,
)
from .normalize import (
    normalize_country_destinations,
    normalize_destinations,
    normalize_hotel_info,
    normalize_hotels_info,
    normalize_room_options,
    normalize_search_response,
    pascalize_keys,
    to_string_value,
)
from .payloads import build_search_request, validate_search_params
from .types import (
    CountryDestinations,
    Destination,
    HotelInfo,
    HotelInfoResult,
    RoomOption,
    SearchParams,
    SearchRequest,
    SearchResult,
    VendorJson,
)

logger = logging.getLogger(__name__)

DISTRIBUTION_ENDPOINTS = {
    "search": "Search",
    "room_details": "RoomDetails",
    "price_breakup": "PriceBreakup",
    "cancellation_policy": "CancellationPolicy",
    "pre_book": "PreBook",
    "book": "Book",
    "cancel": "Cancel",
    "booking_details": "BookingDetails",
}

STATIC_ENDPOINTS = {
    "destination_info": "destination-info",
    "hotels_info_by_destination_id": "HotelsInfoByDestinationId",
    "hotel_info": "hotel-Info",
    "country_info": "country-info",
}

# Availability calls are slow on the vendor side.
SEARCH_TIMEOUT_MS = 60_000


def _raise_for_vendor_error(
    response: VendorJson,
    code: str,
    default_message: str,
    *,
    require_success: bool,
) -> None:
    """Raise AoryxServiceError when the response reports a failure.

    Args:
        response: Normalized response body.
        code: Error code to attach.
        default_message: Message used when the vendor sends none.
        require_success: Treat a missing ``IsSuccess`` flag as failure.
    """
    is_success = response.get("IsSuccess")
    failed = not is_success if require_success else is_success is False
    if not failed:
        return
    message = to_string_value(response.get("ExceptionMessage")) or default_message
    raise AoryxServiceError(
        message,
        code,
        response.get("StatusCode"),
        response.get("Errors"),
    )


class AsyncAoryxClient:
    """Aoryx API client (async).

    Args:
        api_key: API key sent in the ``ApiKey`` header.
        base_url: API base URL; endpoints are appended as path segments.
        customer_code: Optional ``CustomerCode`` header value.
        timeout_ms: Default request timeout in milliseconds.
        default_currency: Currency for searches that do not name one.
        tasspro_customer_code: Default TassPro customer code for searches.
        tasspro_region_id: Default TassPro region id for searches.
    """

    def __init__(  # noqa: PLR0913
        self,
        api_key: str,
        base_url: str,
        *,
        customer_code: str | None = None,
        timeout_ms: int = 15_000,
        default_currency: str = "USD",
        tasspro_customer_code: str | None = None,
        tasspro_region_id: str | None = None,
    ) -> None:
        """Initialize the client; missing credentials fail at request time."""
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._customer_code = customer_code
        self._timeout_ms = timeout_ms
        self._default_currency = default_currency
        self._tasspro_customer_code = tasspro_customer_code
        self._tasspro_region_id = tasspro_region_id
        self._client = httpx.AsyncClient(
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def close(self) -> None:
        """Close the async HTTP client connection."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager and close connection."""
        await self.close()

    async def _request(
        self,
        endpoint: str,
        payload: dict[str, Any],
        *,
        timeout_ms: int | None = None,
    ) -> VendorJson:
        """Make a POST request to the Aoryx API.

        Args:
            endpoint: Endpoint name, e.g. ``Search`` or ``hotel-Info``.
            payload: Request body; keys are pascalized before sending.
            timeout_ms: Overrides the default timeout for this call.

        Returns:
            Response body with PascalCase keys.

        Raises:
            AoryxConfigError: If the API key or base URL is not configured.
            AoryxTimeoutError: If the request is aborted by the timeout.
            AoryxRequestError: If the request fails without a response.
            AoryxHttpError: If the API returns a non-2xx status.
            AoryxInvalidJsonError: If the body is not a JSON object.
        """
        if not self._api_key:
            msg = "Missing AORYX_API_KEY configuration"
            raise AoryxConfigError(msg, endpoint)
        if not self._base_url:
            msg = "Missing AORYX_BASE_URL configuration"
            raise AoryxConfigError(msg, endpoint)

        effective_timeout_ms = timeout_ms or self._timeout_ms
        headers = {"ApiKey": self._api_key}
        if self._customer_code:
            headers["CustomerCode"] = self._customer_code

        start_time = time.perf_counter()
        try:
            response = await self._client.post(
                f"{self._base_url}/{endpoint}",
                json=pascalize_keys(payload),
                headers=headers,
                timeout=httpx.Timeout(effective_timeout_ms / 1000),
            )
        except httpx.TimeoutException as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[Aoryx] %s - TIMEOUT after %.2fs", endpoint, elapsed)
            raise AoryxTimeoutError(endpoint, effective_timeout_ms) from e
        except httpx.RequestError as e:
            elapsed = time.perf_counter() - start_time
            logger.warning("[Aoryx] %s - REQUEST ERROR after %.2fs: %s", endpoint, elapsed, e)
            raise AoryxRequestError(endpoint, e) from e

        elapsed = time.perf_counter() - start_time
        logger.debug("[Aoryx] %s - %d in %.2fs", endpoint, response.status_code, elapsed)

        if not response.is_success:
            raise AoryxHttpError(endpoint, response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise AoryxInvalidJsonError(endpoint, e) from e

        normalized = pascalize_keys(data)
        if not isinstance(normalized, dict):
            raise AoryxInvalidJsonError(endpoint, ValueError("expected a JSON object"))
        return normalized

    def _build_search_request(self, params: SearchParams) -> SearchRequest:
        return build_search_request(
            params,
            default_currency=self._default_currency,
            customer_code=self._tasspro_customer_code,
            region_id=self._tasspro_region_id,
        )

    async def search(self, params: SearchParams) -> SearchResult:
        """Search hotel availability by destination or hotel code.

        Args:
            params: Search parameters.

        Returns:
            Normalized search result with the vendor session id.

        Raises:
            AoryxServiceError: ``INVALID_PARAMS``, ``SEARCH_ERROR`` or
                ``MISSING_SESSION_ID``.
        """
        validate_search_params(params)
        request = self._build_search_request(params)

        response = await self._request(
            DISTRIBUTION_ENDPOINTS["search"],
            dict(request),
            timeout_ms=SEARCH_TIMEOUT_MS,
        )

        if not response.get("IsSuccess") and response.get("ExceptionMessage"):
            raise AoryxServiceError(
                str(response["ExceptionMessage"]),
                "SEARCH_ERROR",
                response.get("StatusCode"),
                response.get("Errors"),
            )

        general_info = response.get("GeneralInfo")
        session_id = to_string_value(
            general_info.get("SessionId") if isinstance(general_info, dict) else None
        )
        if not session_id:
            msg = "No session ID in search response"
            raise AoryxServiceError(msg, "MISSING_SESSION_ID")

        result = normalize_search_response(response, session_id)
        logger.info(
            "[Aoryx] Search - %d hotels (session %s)", len(result["hotels"]), session_id
        )
        return result

    async def room_details(self, params: SearchParams) -> list[RoomOption]:
        """Get room options for a hotel.

        Availability is session-bound, so a search for the same parameters
        runs first to obtain a session id.

        Args:
            params: Search parameters including ``hotelCode``.

        Returns:
            Normalized room options.
        """
        validate_search_params(params)
        hotel_code = params.get("hotelCode")
        if not hotel_code:
            msg = "Hotel code is required for room details"
            raise AoryxServiceError(msg, "INVALID_PARAMS")

        search_result = await self.search(params)
        search_request = self._build_search_request(params)
        payload: dict[str, Any] = {
            "hotelCode": hotel_code,
            "searchParameter": search_request["SearchParameter"],
            "sessionId": search_result["sessionId"],
        }

        response = await self._request(
            DISTRIBUTION_ENDPOINTS["room_details"],
            payload,
            timeout_ms=SEARCH_TIMEOUT_MS,
        )
        _raise_for_vendor_error(
            response,
            "ROOM_DETAILS_ERROR",
            "RoomDetails request failed",
            require_success=False,
        )
        return normalize_room_options(response)

    async def hotels_info_by_destination_id(self, destination_id: str) -> list[HotelInfo]:
        """Get static info for all hotels of a destination.

        Args:
            destination_id: Destination id, e.g. ``160-0``.

        Returns:
            Normalized hotel entries.
        """
        response = await self._request(
            STATIC_ENDPOINTS["hotels_info_by_destination_id"],
            {"destinationId": destination_id},
        )
        _raise_for_vendor_error(
            response,
            "HOTELS_INFO_ERROR",
            "HotelsInfoByDestinationId request failed",
            require_success=True,
        )
        return normalize_hotels_info(response.get("HotelsInformation"))

    async def hotel_info(self, hotel_code: str) -> HotelInfoResult | None:
        """Get detailed hotel info, including the image gallery.

        Args:
            hotel_code: Vendor hotel code (``SystemId``).

        Returns:
            Normalized hotel info, or None if the vendor has none.
        """
        response = await self._request(
            STATIC_ENDPOINTS["hotel_info"],
            {"hotelCode": hotel_code},
        )
        _raise_for_vendor_error(
            response,
            "HOTEL_INFO_ERROR",
            "HotelInfo request failed",
            require_success=True,
        )
        return normalize_hotel_info(response.get("HotelInformation"))

    async def destination_info(self, destination_id: str) -> list[Destination]:
        """Get the destinations under a parent destination.

        Args:
            destination_id: Parent destination id.

        Returns:
            Normalized destinations.
        """
        response = await self._request(
            STATIC_ENDPOINTS["destination_info"],
            {"destinationId": destination_id},
        )
        _raise_for_vendor_error(
            response,
            "DESTINATION_INFO_ERROR",
            "DestinationInfo request failed",
            require_success=False,
        )
        return normalize_destinations(response)

    async def country_info(self, country_code: str) -> CountryDestinations:
        """Get the destinations available in a country.

        Args:
            country_code: ISO 3166-1 alpha-2 country code.

        Returns:
            Country code with its normalized destinations.
        """
        response = await self._request(
            STATIC_ENDPOINTS["country_info"],
            {"countryCode": country_code.upper()},
        )
        _raise_for_vendor_error(
            response,
            "COUNTRY_INFO_ERROR",
            "CountryInfo request failed",
            require_success=False,
        )
        return normalize_country_destinations(response, country_code)
