import math
from datetime import UTC, datetime

import pytest
from bson import ObjectId

from services.favorites import (
    clamp_limit,
    ensure_indexes,
    is_favorite,
    list_favorites,
    normalize_user_id,
    parse_number,
    parse_string,
    remove_favorite,
    toggle_favorite,
)

from .conftest import USER_ID


def test_normalize_user_id():
    assert normalize_user_id(f" {USER_ID} ") == {
        "userId": ObjectId(USER_ID),
        "userIdString": USER_ID,
    }
    assert normalize_user_id("user-42") == {"userId": "user-42", "userIdString": "user-42"}


def test_body_parsing_helpers():
    assert parse_string("  Palm  ") == "Palm"
    assert parse_string("   ") is None
    assert parse_string(5) is None
    assert parse_number("4.5") == 4.5
    assert parse_number(4) == 4
    assert parse_number("four") is None
    assert parse_number(math.nan) is None
    assert parse_number(True) is None


def test_parse_number_reads_strings_like_js_number():
    assert parse_number("0x10") == 16
    assert parse_number(" 0b11 ") == 3
    assert parse_number("1_000") is None
    assert parse_number("0x_10") is None
    assert parse_number("Infinity") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 24), ("abc", 24), ("10", 10), (0, 1), (500, 48), ("12.9", 12)],
)
def test_clamp_limit(value, expected):
    assert clamp_limit(value) == expected


@pytest.mark.anyio
async def test_toggle_twice_adds_then_removes(mongo_db):
    await ensure_indexes(mongo_db)
    body = {"name": " Palm Resort ", "rating": "5", "city": ""}

    assert await toggle_favorite(mongo_db, USER_ID, "H1", body) is True
    assert await is_favorite(mongo_db, USER_ID, "H1") is True

    doc = await mongo_db.user_favorites.find_one({"hotelCode": "H1"})
    assert doc["userId"] == ObjectId(USER_ID)
    assert doc["name"] == "Palm Resort"
    assert doc["city"] is None
    assert doc["rating"] == 5
    assert doc["source"] == "aoryx"
    assert doc["createdAt"] == doc["savedAt"]

    assert await toggle_favorite(mongo_db, USER_ID, "H1", body) is False
    assert await is_favorite(mongo_db, USER_ID, "H1") is False
    assert await mongo_db.user_favorites.count_documents({}) == 0


@pytest.mark.anyio
async def test_favorites_are_scoped_per_user(mongo_db):
    await toggle_favorite(mongo_db, USER_ID, "H1", {})
    assert await is_favorite(mongo_db, "someone-else", "H1") is False
    assert await list_favorites(mongo_db, "someone-else") == []


@pytest.mark.anyio
async def test_list_favorites_newest_first_with_limit(mongo_db):
    for day, code in enumerate(("H1", "H2", "H3"), start=1):
        await mongo_db.user_favorites.insert_one({
            "userIdString": USER_ID,
            "hotelCode": code,
            "name": code,
            "source": "manual",
            "savedAt": datetime(2026, 1, day, tzinfo=UTC),
        })

    items = await list_favorites(mongo_db, USER_ID, "2")

    assert [item["hotelCode"] for item in items] == ["H3", "H2"]
    assert set(items[0]) == {
        "hotelCode", "name", "city", "address", "imageUrl", "rating", "savedAt"
    }


@pytest.mark.anyio
async def test_remove_favorite_is_idempotent(mongo_db):
    await toggle_favorite(mongo_db, USER_ID, "H1", {})

    assert await remove_favorite(mongo_db, USER_ID, "H1") is False
    assert await remove_favorite(mongo_db, USER_ID, "H1") is False
    assert await is_favorite(mongo_db, USER_ID, "H1") is False
