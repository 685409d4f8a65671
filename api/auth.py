"""Session authentication for user-scoped endpoints."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import SESSION_SECRET

bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized"


def decode_session(token: str) -> str | None:
    """Return the user id (``sub``) of a valid session token."""
    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=["HS256"])
    except jwt.InvalidTokenError:
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return user_id


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Resolve the session user id.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
    user_id = decode_session(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
    return user_id
