"""Favorites endpoints (session-authenticated)."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from db import get_db
from services import is_favorite, list_favorites, remove_favorite, toggle_favorite
from services.favorites import parse_string

from .auth import get_current_user_id
from .schemas import FavoriteRequest

router = APIRouter(prefix="/api/favorites", tags=["favorites"])

UserId = Annotated[str, Depends(get_current_user_id)]
Database = Annotated[AsyncIOMotorDatabase, Depends(get_db)]


def _missing_hotel_code() -> JSONResponse:
    return JSONResponse({"error": "Missing hotelCode"}, status_code=400)


@router.get("")
async def get_favorites(
    user_id: UserId,
    db: Database,
    hotel_code: Annotated[str | None, Query(alias="hotelCode")] = None,
    limit: Annotated[str | None, Query(description="Page size (1-48)")] = None,
) -> dict:
    """Check one hotel (``hotelCode``) or list the user's favorites."""
    code = parse_string(hotel_code)
    if code:
        return {"isFavorite": await is_favorite(db, user_id, code)}
    return {"items": await list_favorites(db, user_id, limit)}


@router.post("", response_model=None)
async def post_favorite(
    request: Request, user_id: UserId, db: Database
) -> dict | JSONResponse:
    """Toggle a hotel in the user's favorites."""
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = None
    body = FavoriteRequest.model_validate(data if isinstance(data, dict) else {})

    code = parse_string(body.hotelCode)
    if not code:
        return _missing_hotel_code()

    saved = await toggle_favorite(db, user_id, code, body.model_dump())
    return {"isFavorite": saved}


@router.delete("", response_model=None)
async def delete_favorite(
    user_id: UserId,
    db: Database,
    hotel_code: Annotated[str | None, Query(alias="hotelCode")] = None,
) -> dict | JSONResponse:
    """Remove a hotel from the user's favorites."""
    code = parse_string(hotel_code)
    if not code:
        return _missing_hotel_code()
    return {"isFavorite": await remove_favorite(db, user_id, code)}
