"""Saved hotels per user, stored in the ``user_favorites`` collection."""

import logging
import math
import re
from datetime import UTC, datetime
from typing import Any, TypedDict

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

logger = logging.getLogger(__name__)

COLLECTION = "user_favorites"
DEFAULT_SOURCE = "aoryx"
DEFAULT_LIMIT = 24
MIN_LIMIT = 1
MAX_LIMIT = 48

# Fields returned by list_favorites.
ITEM_FIELDS = ("hotelCode", "name", "city", "address", "imageUrl", "rating", "savedAt")

RADIX_PREFIX_RE = re.compile(r"^0[xXoObB]")


class UserIds(TypedDict):
    """Stored forms of a user id."""

    userId: ObjectId | str
    userIdString: str


class FavoriteItem(TypedDict):
    """Favorite as listed to the user."""

    hotelCode: str | None
    name: str | None
    city: str | None
    address: str | None
    imageUrl: str | None
    rating: float | None
    savedAt: datetime | None


def normalize_user_id(user_id: str) -> UserIds:
    """Return the user id as an ObjectId when it is one, plus its string form."""
    normalized = user_id.strip()
    return {
        "userId": ObjectId(normalized) if ObjectId.is_valid(normalized) else normalized,
        "userIdString": normalized,
    }


def parse_string(value: object) -> str | None:
    """Trimmed string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def parse_number(value: object) -> float | None:
    """Finite number from a number or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if "_" in text:
            return None
        try:
            parsed = int(text, 0) if RADIX_PREFIX_RE.match(text) else float(text)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def clamp_limit(value: object) -> int:
    """Page size between MIN_LIMIT and MAX_LIMIT, DEFAULT_LIMIT when unparseable."""
    number = parse_number(value)
    limit = DEFAULT_LIMIT if number is None else int(number)
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


def _collection(db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
    return db[COLLECTION]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the unique (user, hotel) index and the listing index."""
    collection = _collection(db)
    await collection.create_index(
        [("userIdString", ASCENDING), ("hotelCode", ASCENDING)],
        unique=True,
        name="user_hotel_unique",
    )
    await collection.create_index(
        [("userIdString", ASCENDING), ("savedAt", DESCENDING)],
        name="user_saved_at",
    )


async def is_favorite(db: AsyncIOMotorDatabase, user_id: str, hotel_code: str) -> bool:
    """Check whether the user saved the hotel."""
    ids = normalize_user_id(user_id)
    doc = await _collection(db).find_one(
        {"userIdString": ids["userIdString"], "hotelCode": hotel_code},
        {"_id": 1},
    )
    return doc is not None


async def list_favorites(
    db: AsyncIOMotorDatabase, user_id: str, limit: object = None
) -> list[FavoriteItem]:
    """List the user's favorites, most recently saved first.

    Args:
        db: Database handle.
        user_id: Session user id.
        limit: Requested page size; clamped, DEFAULT_LIMIT when missing.

    Returns:
        Favorite items; missing fields are None.
    """
    ids = normalize_user_id(user_id)
    cursor = (
        _collection(db)
        .find({"userIdString": ids["userIdString"]})
        .sort("savedAt", DESCENDING)
        .limit(clamp_limit(limit))
    )
    items: list[FavoriteItem] = []
    async for doc in cursor:
        items.append({field: doc.get(field) for field in ITEM_FIELDS})  # type: ignore[misc]
    return items


async def toggle_favorite(
    db: AsyncIOMotorDatabase, user_id: str, hotel_code: str, body: dict[str, Any]
) -> bool:
    """Save the hotel if it is not saved yet, otherwise remove it.

    Args:
        db: Database handle.
        user_id: Session user id.
        hotel_code: Hotel to toggle.
        body: Request body with optional hotel details.

    Returns:
        Whether the hotel is a favorite after the toggle.
    """
    collection = _collection(db)
    ids = normalize_user_id(user_id)
    key = {"userIdString": ids["userIdString"], "hotelCode": hotel_code}

    existing = await collection.find_one(key, {"_id": 1})
    if existing is not None:
        await collection.delete_one({"_id": existing["_id"]})
        logger.info("[Favorites] Removed %s for user %s", hotel_code, ids["userIdString"])
        return False

    now = datetime.now(UTC)
    payload = {
        **ids,
        "hotelCode": hotel_code,
        "name": parse_string(body.get("name")),
        "city": parse_string(body.get("city")),
        "address": parse_string(body.get("address")),
        "imageUrl": parse_string(body.get("imageUrl")),
        "rating": parse_number(body.get("rating")),
        "source": parse_string(body.get("source")) or DEFAULT_SOURCE,
        "savedAt": now,
        "updatedAt": now,
    }
    await collection.update_one(
        key,
        {"$set": payload, "$setOnInsert": {"createdAt": now}},
        upsert=True,
    )
    logger.info("[Favorites] Saved %s for user %s", hotel_code, ids["userIdString"])
    return True


async def remove_favorite(db: AsyncIOMotorDatabase, user_id: str, hotel_code: str) -> bool:
    """Remove the hotel from the user's favorites; always returns False."""
    ids = normalize_user_id(user_id)
    await _collection(db).delete_one(
        {"userIdString": ids["userIdString"], "hotelCode": hotel_code}
    )
    return False
