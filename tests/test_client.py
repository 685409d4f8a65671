import json

import httpx
import pytest
import respx

from aoryx import AoryxConfigError, AoryxServiceError, AoryxTimeoutError, AsyncAoryxClient
from aoryx.exceptions import AoryxHttpError, AoryxInvalidJsonError

from .conftest import AORYX_BASE_URL, search_response

pytestmark = pytest.mark.anyio

SEARCH_PARAMS = {
    "destinationCode": "160-0",
    "countryCode": "AE",
    "nationality": "AM",
    "checkInDate": "2026-03-01",
    "checkOutDate": "2026-03-04",
    "rooms": [{"roomIdentifier": 1, "adults": 2, "childrenAges": []}],
}


async def test_search_sends_headers_and_normalizes(aoryx_client):
    hotels = [
        {"code": "H1", "minPrice": 200, "hotelInfo": {"name": "One", "starRating": 4}},
        {"code": "H2", "minPrice": "150.5", "hotelInfo": {"name": "Two"}},
    ]
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{AORYX_BASE_URL}/Search").respond(
            json=search_response(hotels)
        )
        result = await aoryx_client.search(SEARCH_PARAMS)

    request = route.calls.last.request
    assert request.headers["ApiKey"] == "test-key"
    assert request.headers["CustomerCode"] == "CUST-1"
    body = json.loads(request.content)
    assert body["SearchParameter"]["CheckInDate"] == "2026-03-01T00:00:00"

    assert result["sessionId"] == "SESSION-1"
    assert result["currency"] == "USD"
    assert result["destination"] == {"code": "160-0", "name": "Dubai"}
    assert [hotel["name"] for hotel in result["hotels"]] == ["One", "Two"]
    assert result["hotels"][1]["minPrice"] == 150.5


async def test_search_vendor_exception_raises_search_error(aoryx_client):
    with respx.mock() as router:
        router.post(f"{AORYX_BASE_URL}/Search").respond(
            json={"isSuccess": False, "exceptionMessage": "Invalid destination", "statusCode": 400}
        )
        with pytest.raises(AoryxServiceError) as exc_info:
            await aoryx_client.search(SEARCH_PARAMS)

    assert exc_info.value.code == "SEARCH_ERROR"
    assert str(exc_info.value) == "Invalid destination"


async def test_search_without_session_id_fails(aoryx_client):
    with respx.mock() as router:
        router.post(f"{AORYX_BASE_URL}/Search").respond(json={"IsSuccess": True})
        with pytest.raises(AoryxServiceError) as exc_info:
            await aoryx_client.search(SEARCH_PARAMS)

    assert exc_info.value.code == "MISSING_SESSION_ID"


async def test_invalid_params_do_not_reach_the_vendor(aoryx_client):
    with respx.mock(assert_all_called=False) as router:
        route = router.post(f"{AORYX_BASE_URL}/Search")
        with pytest.raises(AoryxServiceError) as exc_info:
            await aoryx_client.search({**SEARCH_PARAMS, "destinationCode": None})

    assert exc_info.value.code == "INVALID_PARAMS"
    assert not route.called


async def test_missing_configuration_fails_at_request_time():
    async with AsyncAoryxClient("", AORYX_BASE_URL) as client:
        with pytest.raises(AoryxConfigError, match="AORYX_API_KEY"):
            await client.hotel_info("12345")


async def test_http_error_and_invalid_json(aoryx_client):
    with respx.mock() as router:
        route = router.post(f"{AORYX_BASE_URL}/hotel-Info")
        route.respond(status_code=503)
        with pytest.raises(AoryxHttpError) as exc_info:
            await aoryx_client.hotel_info("12345")
        assert exc_info.value.status_code == 503
        assert exc_info.value.endpoint == "hotel-Info"

        route.respond(status_code=200, content=b"<html>")
        with pytest.raises(AoryxInvalidJsonError):
            await aoryx_client.hotel_info("12345")


async def test_timeout_is_reported_with_endpoint(aoryx_client):
    with respx.mock() as router:
        router.post(f"{AORYX_BASE_URL}/hotel-Info").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )
        with pytest.raises(AoryxTimeoutError) as exc_info:
            await aoryx_client.hotel_info("12345")

    assert exc_info.value.endpoint == "hotel-Info"
    assert "15000ms" in str(exc_info.value)


async def test_room_details_runs_search_first_and_passes_session(aoryx_client):
    params = {**SEARCH_PARAMS, "hotelCode": "H1"}
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{AORYX_BASE_URL}/Search").respond(json=search_response([]))
        details = router.post(f"{AORYX_BASE_URL}/RoomDetails").respond(
            json={
                "isSuccess": True,
                "hotelRooms": {
                    "hotelRoom": [
                        {"roomName": "Suite", "totalPrice": {"amount": 500, "currency": "USD"}}
                    ]
                },
            }
        )
        rooms = await aoryx_client.room_details(params)

    body = json.loads(details.calls.last.request.content)
    assert body["SessionId"] == "SESSION-1"
    assert body["HotelCode"] == "H1"
    assert body["SearchParameter"]["DestinationCode"] == "160-0"
    assert rooms[0]["name"] == "Suite"
    assert rooms[0]["totalPrice"] == 500


async def test_room_details_requires_hotel_code(aoryx_client):
    with pytest.raises(AoryxServiceError) as exc_info:
        await aoryx_client.room_details(SEARCH_PARAMS)
    assert exc_info.value.code == "INVALID_PARAMS"


async def test_hotel_info_requires_explicit_success(aoryx_client):
    with respx.mock() as router:
        router.post(f"{AORYX_BASE_URL}/hotel-Info").respond(json={"hotelInformation": {}})
        with pytest.raises(AoryxServiceError) as exc_info:
            await aoryx_client.hotel_info("12345")

    assert exc_info.value.code == "HOTEL_INFO_ERROR"
    assert str(exc_info.value) == "HotelInfo request failed"


async def test_hotels_by_destination_and_country_info(aoryx_client):
    with respx.mock(assert_all_called=True) as router:
        listing = router.post(f"{AORYX_BASE_URL}/HotelsInfoByDestinationId").respond(
            json={
                "isSuccess": True,
                "hotelsInformation": [{"systemId": "H1", "name": "One"}],
            }
        )
        router.post(f"{AORYX_BASE_URL}/country-info").respond(
            json={"destinations": [{"destinationId": "160", "name": "Dubai"}]}
        )
        hotels = await aoryx_client.hotels_info_by_destination_id("160-0")
        country = await aoryx_client.country_info("ae")

    assert json.loads(listing.calls.last.request.content) == {"DestinationId": "160-0"}
    assert hotels[0]["systemId"] == "H1"
    assert country == {
        "countryCode": "AE",
        "destinations": [{"id": "160-0", "name": "Dubai", "rawId": "160"}],
    }


async def test_destination_info_reports_vendor_failure(aoryx_client):
    with respx.mock() as router:
        router.post(f"{AORYX_BASE_URL}/destination-info").respond(
            json={"isSuccess": False}
        )
        with pytest.raises(AoryxServiceError) as exc_info:
            await aoryx_client.destination_info("160")

    assert exc_info.value.code == "DESTINATION_INFO_ERROR"
