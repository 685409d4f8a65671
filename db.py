"""MongoDB connection shared by the application."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import DB_NAME, MONGO_URL

logger = logging.getLogger(__name__)

_mongo_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


async def connect_mongo() -> None:
    """Open the client once; later calls are no-ops."""
    global _mongo_client, _db  # noqa: PLW0603

    if _mongo_client is not None and _db is not None:
        return

    _mongo_client = AsyncIOMotorClient(MONGO_URL)
    _db = _mongo_client[DB_NAME]
    logger.info("[Mongo] Connected to database %s", DB_NAME)


async def close_mongo() -> None:
    """Close the client if it is open."""
    global _mongo_client, _db  # noqa: PLW0603

    if _mongo_client is not None:
        _mongo_client.close()

    _mongo_client = None
    _db = None


async def get_db() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the database, connecting on first use."""
    if _db is None:
        await connect_mongo()
    assert _db is not None
    return _db
