"""Shared fixtures: vendor client, in-memory Mongo and the ASGI app."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import jwt
import pytest
from httpx import ASGITransport
from mongomock_motor import AsyncMongoMockClient

from aoryx import AsyncAoryxClient
from api.app import create_app
from config import SESSION_SECRET
from db import get_db

AORYX_BASE_URL = "https://aoryx.test/api"
USER_ID = "65f1c2a9e4b0a1b2c3d4e5f6"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def aoryx_client() -> AsyncIterator[AsyncAoryxClient]:
    async with AsyncAoryxClient(
        "test-key",
        AORYX_BASE_URL,
        customer_code="CUST-1",
        default_currency="USD",
    ) as client:
        yield client


@pytest.fixture
def mongo_db() -> Any:
    return AsyncMongoMockClient()["megatours_test"]


@pytest.fixture
async def http_client(
    aoryx_client: AsyncAoryxClient, mongo_db: Any
) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(aoryx_client)
    app.dependency_overrides[get_db] = lambda: mongo_db
    async with httpx.AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


def make_token(user_id: str = USER_ID, secret: str = SESSION_SECRET) -> str:
    return jwt.encode({"sub": user_id}, secret, algorithm="HS256")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


def search_response(hotels: Any, **extra: Any) -> dict[str, Any]:
    """Vendor search response in the camelCase some endpoints answer with."""
    return {
        "isSuccess": True,
        "generalInfo": {"sessionId": "SESSION-1"},
        "monetary": {"currency": {"code": "USD"}},
        "audit": {
            "propertyCount": 2,
            "responseTime": "0.8",
            "destination": {"code": "160-0", "text": "Dubai"},
        },
        "hotels": {"hotel": hotels},
        **extra,
    }
