import math

import pytest

from aoryx.normalize import (
    as_list,
    extract_cancellation_policy,
    extract_money,
    find_room_candidates,
    normalize_country_destinations,
    normalize_hotel_info,
    normalize_hotels_info,
    normalize_parent_destination_id,
    normalize_room_options,
    normalize_search_response,
    pascalize_keys,
    to_boolean,
    to_integer,
    to_number,
    to_string_value,
)


@pytest.mark.parametrize(
    "value",
    [
        250.5,
        "250.5",
        {"Amount": 250.5},
        {"TotalAmount": "250.5"},
        {"Value": 250.5},
        {"Price": 250.5},
        {"Net": 250.5},
        {"NetAmount": "250.5"},
    ],
)
def test_extract_money_reads_every_representation(value):
    assert extract_money(value)["amount"] == 250.5


@pytest.mark.parametrize("value", [None, {}, {"Currency": "USD"}, "n/a", [], True])
def test_extract_money_missing_amount_is_none(value):
    assert extract_money(value)["amount"] is None


def test_extract_money_prefers_amount_keys_in_order_and_reads_currency():
    money = extract_money({"Net": 90, "Amount": 100, "CurrencyCode": "AED"})
    assert money == {"amount": 100, "currency": "AED"}


def test_scalar_coercion():
    assert to_string_value("  abc ") == "abc"
    assert to_string_value("   ") is None
    assert to_string_value(12.0) == "12"
    assert to_string_value(12.5) == "12.5"
    assert to_string_value(True) is None
    assert to_string_value(math.inf) is None

    assert to_number("12.5abc") == 12.5
    assert to_number("abc") is None
    assert to_number(math.nan) is None
    assert to_number(False) is None

    assert to_integer("2.5") == 3
    assert to_integer(4.4) == 4
    assert to_integer(None) is None

    assert to_boolean(" Yes ") is True
    assert to_boolean("n") is False
    assert to_boolean(1) is True
    assert to_boolean(0) is False
    assert to_boolean(2) is None
    assert to_boolean("maybe") is None


def test_as_list_wraps_single_values():
    assert as_list(None) == []
    assert as_list("") == []
    assert as_list([1, 2]) == [1, 2]
    assert as_list({"a": 1}) == [{"a": 1}]


def test_pascalize_keys_is_recursive():
    payload = {"generalInfo": {"sessionId": "x"}, "hotels": [{"code": "1"}], "Keep": 1}
    assert pascalize_keys(payload) == {
        "GeneralInfo": {"SessionId": "x"},
        "Hotels": [{"Code": "1"}],
        "Keep": 1,
    }


def test_normalize_parent_destination_id():
    assert normalize_parent_destination_id("160") == "160-0"
    assert normalize_parent_destination_id(" 160-2 ") == "160-2"
    assert normalize_parent_destination_id("  ") is None
    assert normalize_parent_destination_id(None) is None


def test_cancellation_policy_flattens_lists_and_objects():
    policy = [{"Text": "Free until Jan 1."}, "Then 100%.", {"Other": 1}]
    assert extract_cancellation_policy(policy) == "Free until Jan 1. Then 100%."
    assert extract_cancellation_policy({"Remark": "Non refundable"}) == "Non refundable"
    assert extract_cancellation_policy(42) is None


def test_search_response_with_single_hotel_object():
    response = pascalize_keys({
        "monetary": {"currency": {"code": "EUR"}},
        "audit": {"propertyCount": "1"},
        "hotels": {
            "hotel": {
                "code": "H1",
                "name": "H1",
                "minPrice": "120.40",
                "hotelInfo": {
                    "name": "Sea View",
                    "starRating": "4",
                    "add1": "Beach Rd",
                    "city": "160",
                    "image": "https://img/1.jpg",
                    "lat": "25.1",
                    "lon": "55.2",
                },
            }
        },
    })

    result = normalize_search_response(response, "S1")

    assert result["sessionId"] == "S1"
    assert result["currency"] == "EUR"
    assert result["propertyCount"] == 1
    assert result["destination"] is None
    assert result["hotels"] == [{
        "code": "H1",
        "name": "Sea View",
        "minPrice": 120.4,
        "currency": "EUR",
        "rating": 4,
        "address": "Beach Rd",
        "city": "160",
        "imageUrl": "https://img/1.jpg",
        "latitude": 25.1,
        "longitude": 55.2,
    }]


def test_search_hotel_name_falls_back_to_top_level_name():
    response = {"Hotels": {"Hotel": [{"Code": "H2", "Name": "Fallback"}]}}
    hotel = normalize_search_response(response, "S1")["hotels"][0]
    assert hotel["name"] == "Fallback"
    assert hotel["minPrice"] is None
    assert hotel["rating"] is None


def test_room_options_from_room_details_key():
    response = {
        "RoomDetails": {
            "RoomDetail": {
                "RoomCode": "R1",
                "RoomName": "Deluxe King",
                "MealPlan": "BB",
                "NonRefundable": "false",
                "TotalPrice": {"Amount": "310.00", "Currency": "AED"},
                "AvailableRooms": "3",
                "CancellationPolicy": [{"Text": "Free cancellation"}],
            }
        }
    }

    assert normalize_room_options(response) == [{
        "id": "R1",
        "name": "Deluxe King",
        "boardType": "BB",
        "refundable": True,
        "currency": "AED",
        "totalPrice": 310.0,
        "availableRooms": 3,
        "cancellationPolicy": "Free cancellation",
    }]


def test_room_options_fall_back_to_scanning_nested_arrays():
    response = {
        "Result": {
            "Meta": [{"Key": "a"}],
            "Packages": [
                {
                    "Offers": [
                        {"RoomType": "Twin", "RateBasis": "RO", "Price": 99, "Currency": "USD"},
                        {"RoomType": "Double", "RateBasis": "BB", "Price": "120"},
                    ]
                }
            ],
        }
    }

    rooms = normalize_room_options(response)

    assert [room["name"] for room in rooms] == ["Twin", "Double"]
    assert [room["id"] for room in rooms] == ["room-1", "room-2"]
    assert rooms[0]["currency"] == "USD"
    assert rooms[1]["totalPrice"] == 120


def test_find_room_candidates_picks_the_longest_list():
    payload = {
        "A": [{"RoomName": "one"}],
        "B": {"C": [{"RoomName": "two"}, {"RoomName": "three"}]},
        "D": [{"Unrelated": True}, {"Other": 1}, {"Thing": 2}],
    }
    assert [room["RoomName"] for room in find_room_candidates(payload)] == ["two", "three"]


def test_room_options_empty_when_nothing_room_like():
    assert normalize_room_options({"IsSuccess": True, "Data": [{"Foo": 1}]}) == []


def test_hotels_info_listing():
    hotels = normalize_hotels_info([
        {
            "DestinationId": "160-0",
            "Name": "Palm Resort",
            "SystemId": 12345,
            "Rating": "5",
            "GeoCode": {"Lat": "25.11", "Lon": 55.13},
        },
        "garbage",
    ])

    assert len(hotels) == 1
    assert hotels[0]["systemId"] == "12345"
    assert hotels[0]["latitude"] == 25.11
    assert hotels[0]["longitude"] == 55.13
    assert hotels[0]["city"] is None


def test_hotel_info_keeps_only_string_images():
    info = normalize_hotel_info({
        "SystemId": "12345",
        "Name": "Palm Resort",
        "CurrencyCode": "AED",
        "ImageUrls": ["https://img/a.jpg", " ", None, "https://img/b.jpg"],
        "GeoCode": {"Lat": "25.1", "Lon": "55.1"},
        "Contact": {"PhoneNo": "+971"},
    })

    assert info is not None
    assert info["imageUrls"] == ["https://img/a.jpg", "https://img/b.jpg"]
    assert info["geoCode"] == {"lat": 25.1, "lon": 55.1}
    assert info["contact"] == {"phone": "+971", "fax": None, "website": None}
    assert info["address"] is None
    assert normalize_hotel_info({}) is None
    assert normalize_hotel_info(None) is None


def test_country_destinations_normalizes_ids():
    response = {
        "Destinations": {
            "Destination": [
                {"DestinationId": "160", "Name": "Dubai"},
                {"Code": "161-0", "CityName": "Abu Dhabi"},
                {"Name": "No id"},
            ]
        }
    }

    result = normalize_country_destinations(response, "ae")

    assert result == {
        "countryCode": "AE",
        "destinations": [
            {"id": "160-0", "name": "Dubai", "rawId": "160"},
            {"id": "161-0", "name": "Abu Dhabi", "rawId": "161-0"},
        ],
    }
